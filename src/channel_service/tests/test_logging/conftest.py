import pytest

from channel_service.core.logging.builder import setup_logging
from channel_service.tests.conftest import make_test_settings


@pytest.fixture(autouse=True)
def restore_logging():
    """Tests here install their own logging config; put the suite's back afterwards."""
    yield
    setup_logging(make_test_settings("sqlite+aiosqlite://"))
