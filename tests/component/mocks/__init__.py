"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace the PAS transport (and with it, the network).
"""

from .transport_mock import FakePlatform, MockTransport, failure, ok, query_result

__all__ = [
    'MockTransport',
    'FakePlatform',
    'ok',
    'failure',
    'query_result',
]
