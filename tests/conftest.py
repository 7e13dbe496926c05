"""
Root conftest.py - Global configuration for all test layers.

Test Layers:
    - component/  : Component tests (resource objects against mock transports)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

# Keep a developer's .env out of the tests; must happen before pas_sdk imports
os.environ["PAS_ENV_FILE"] = os.devnull

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)
