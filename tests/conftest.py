# tests/conftest.py
import logging

import pytest


@pytest.fixture(autouse=True)
def _fresh_build_logger():
    # handlers bind the stream that was current when they were created
    yield
    logger = logging.getLogger("sharedstreets")
    for h in list(logger.handlers):
        logger.removeHandler(h)
