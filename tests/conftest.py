"""Shared pytest configuration for the stroke_recognition test suite.

Tests are written as unittest.TestCase classes and collected by pytest.
Async behaviour is tested with unittest.IsolatedAsyncioTestCase, so no
async pytest plugin is required.

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
