import logging

import pytest

from disaster_atlas import config


@pytest.fixture
def root_logger():
    logger = logging.getLogger()
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_setup_logging_installs_one_named_handler(root_logger):
    config.setup_logging("DEBUG")
    config.setup_logging("WARNING")
    ours = [h for h in root_logger.handlers if h.get_name() == config.LOG_HANDLER_NAME]
    assert len(ours) == 1
    assert root_logger.level == logging.WARNING
    assert ours[0].formatter._fmt == "%(asctime)s - %(levelname)s - %(message)s"


@pytest.mark.parametrize("raw, key", [
    ("north-america", "north_america"),
    (" Europe ", "europe"),
    ("south_america", "south_america"),
])
def test_region_key(raw, key):
    assert config.region_key(raw) == key
