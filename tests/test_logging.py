"""Tests for the logging helpers.

Date: 2026-10-19
"""

import logging

from formgrid.utils.logging.logger_factory import LoggerFactory, get_cached_logger
from formgrid.utils.logging.logger_file_helper import add_file_handler
from formgrid.utils.logging.logger_helper import DevOnlyFilter, safe_text


def _record(**extra):
    record = logging.LogRecord("formgrid.test", logging.DEBUG, __file__, 1, "msg", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLoggerHelpers:
    """Test logger caching and filters."""

    def test_cached_logger_is_reused(self):
        first = get_cached_logger("formgrid.tests.cache")

        assert get_cached_logger("formgrid.tests.cache") is first
        assert first.propagate is True

    def test_default_name_is_calling_module(self):
        assert LoggerFactory.get_logger().name == __name__

    def test_dev_only_records_are_hidden(self):
        dev_filter = DevOnlyFilter()

        assert dev_filter.filter(_record()) is True
        assert dev_filter.filter(_record(dev_only=True)) is False

    def test_safe_text(self):
        assert safe_text("a → b … c") == "a -> b ... c"

    def test_file_handler_filters_by_name(self, tmp_path):
        logger = logging.getLogger("formgrid.tests.file")
        logger.setLevel(logging.INFO)
        log_path = tmp_path / "logs" / "only.log"
        handler = add_file_handler(
            logger, str(log_path), level=logging.INFO, filter_by_name="formgrid.tests.file"
        )
        try:
            logger.info("kept line")
            logging.getLogger("formgrid.tests.file.child").info("dropped line")
        finally:
            logger.removeHandler(handler)
            handler.close()

        content = log_path.read_text(encoding="utf-8")
        assert "kept line" in content
        assert "dropped line" not in content
