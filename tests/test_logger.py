# File: tests/test_logger.py
import logging

import pytest

from policy_scout.logger import LOGGER_NAME, configure, get_logger, init_logging


@pytest.fixture()
def restore_logging():
    yield
    init_logging()


def test_component_logger_is_child_of_project_logger():
    lg = get_logger("locator")
    assert lg.name == f"{LOGGER_NAME}.locator"
    assert lg.parent is logging.getLogger(LOGGER_NAME)
    assert not lg.handlers


def test_component_records_reach_log_file(tmp_path, restore_logging):
    log_file = tmp_path / "logs" / "scout.log"
    configure(level="DEBUG", log_file=log_file, log_format="%(name)s %(levelname)s %(message)s")

    get_logger("crawler").debug("Crawling (#%d): %s", 1, "https://example.com/privacy")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "PolicyScout.crawler DEBUG Crawling (#1): https://example.com/privacy" in content


def test_level_filters_component_records(tmp_path, restore_logging):
    log_file = tmp_path / "scout.log"
    init_logging(level="WARNING", log_file=log_file)

    get_logger("search").info("Search result 1: https://example.com/privacy")
    get_logger("search").error("Error fetching search results: HTTP 401")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "HTTP 401" in content
    assert "Search result 1" not in content


def test_reconfigure_replaces_handlers(restore_logging):
    configure(level="INFO")
    configure(level="INFO")
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1
    assert logging.getLogger(LOGGER_NAME).propagate is False
