import pytest
import logging


@pytest.fixture(autouse=True)
def set_caplog_level(caplog: pytest.LogCaptureFixture):
    """Table checks report additions at INFO, capture those too."""
    caplog.set_level(logging.INFO)
