"""Test configuration."""

import os
from typing import List

from pytest import Config

from geocheck.core.logging import configure_logging

# Never let a developer's real key leak into the test run
os.environ.pop("OPENCAGE_API_KEY", None)
os.environ["TESTING"] = "true"

pytest_plugins: List[str] = [
    "tests.fixtures.geocoding",
    "tests.fixtures.api",
]


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True)
