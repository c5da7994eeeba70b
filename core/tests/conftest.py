import logging
from pathlib import Path

import pytest
from dotenv import load_dotenv

from flightcache import SingleFlightCache

logger = logging.getLogger(__name__)

ENV_VARS = ["FLIGHTCACHE_NAME", "FLIGHTCACHE_WAIT_TIMEOUT", "FLIGHTCACHE_LOG_LEVEL"]


@pytest.fixture(scope="session", autouse=True)
def env():
    logger.info(f"Loading environment variables from {Path.cwd() / '.env'}")
    load_dotenv()


@pytest.fixture()
def clean_env(monkeypatch):
    # setenv records the original value, so teardown also drops anything
    # load_dotenv writes during the test.
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def cache():
    return SingleFlightCache(name="test")
