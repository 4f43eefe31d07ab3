" generic fixtures "
import logging

import pytest


def pytest_configure():
    "Runs once before all"
    from helpdoc.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A logger for Configuration objects"
    return logging.getLogger("helpdoc.tests")
