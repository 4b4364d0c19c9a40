"""
Shared pytest fixtures for vclock tests.
"""

import logging

import pytest

from vclock import VersionVector


@pytest.fixture(autouse=True)
def reset_vclock_logging():
    """Give every test a silent ``vclock`` logger.

    Removes any handlers a test attached (closing real ones), restores the
    library's NullHandler, and resets the level to NOTSET, both before and
    after the test.
    """
    logger = logging.getLogger("vclock")

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("vclock."):
                logging.getLogger(name).setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()


@pytest.fixture
def disjoint_pair() -> tuple[VersionVector[str], VersionVector[str]]:
    """Two single-event vectors written by different replicas."""
    return VersionVector.create("n1"), VersionVector.create("n2")
