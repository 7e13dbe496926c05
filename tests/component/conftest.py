"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── test_*.py    Resource objects and RestClient
    └── mocks/       Mock transports

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import FakePlatform, MockTransport


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line(
        "markers", "component: marks tests as component tests"
    )


# =============================================================================
# Transport Mocks
# =============================================================================

@pytest.fixture
def mock_transport() -> MockTransport:
    """Scripted transport recording every call"""
    return MockTransport()


@pytest.fixture
def fake_platform() -> FakePlatform:
    """In-memory tenant"""
    return FakePlatform()
