"""
Root pytest configuration for the jobserv-api test suites.
"""

import pytest

from jobserv_api.config import clear_cache
from jobserv_api.config.logging import bootstrap_logging

bootstrap_logging(__name__)


@pytest.fixture(autouse=True)
def _isolated_settings():
    """Each test resolves settings from scratch."""
    clear_cache()
    yield
    clear_cache()
