"""
Unit tests for structured logging.
"""
import json
import logging

import pytest

from caseflow.core.services.logger import (
    KeyValueFormatter,
    StructuredFormatter,
    configure_logging,
    event_fields,
    get_logger,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="caseflow.book", level=logging.INFO, pathname=__file__, lineno=1,
        msg="case_created", args=(), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    logger = logging.getLogger("caseflow")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestFormatters:
    """Test record formatting."""

    def test_structured_formatter_json(self):
        """Test core fields and extra fields appear in the JSON line."""
        line = StructuredFormatter().format(_record(case_id="TC-1", steps=2))
        data = json.loads(line)
        assert data["event"] == "case_created"
        assert data["level"] == "INFO"
        assert data["logger"] == "caseflow.book"
        assert data["component"] == "book"
        assert data["case_id"] == "TC-1"
        assert data["steps"] == 2
        assert "pathname" not in data

    def test_event_fields_only_extras(self):
        assert event_fields(_record(case_id="TC-1", path="out/x.html")) == {
            "case_id": "TC-1", "path": "out/x.html",
        }

    def test_structured_formatter_stringifies_objects(self):
        data = json.loads(StructuredFormatter().format(_record(path=object())))
        assert isinstance(data["path"], str)

    def test_key_value_formatter(self):
        line = KeyValueFormatter().format(_record(case_id="TC-1"))
        assert "caseflow.book: case_created" in line
        assert line.endswith("case_id=TC-1")


class TestConfigureLogging:
    """Test handler setup."""

    def test_named_child_logger(self):
        assert get_logger("book").name == "caseflow.book"

    def test_level_by_name(self, restore_root_logger):
        logger = configure_logging("debug")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self, restore_root_logger):
        assert configure_logging("chatty").level == logging.WARNING

    def test_reconfigure_replaces_handlers(self, restore_root_logger):
        configure_logging()
        logger = configure_logging(json_output=True)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_log_file(self, restore_root_logger, tmp_path):
        """Test events reach the log file as JSON lines."""
        log_file = tmp_path / "caseflow.log"
        logger = configure_logging("INFO", json_output=True, log_file=str(log_file))

        get_logger("book").info("case_created", case_id="TC-9")
        for handler in logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert entry["event"] == "case_created"
        assert entry["case_id"] == "TC-9"
        for handler in logger.handlers:
            handler.close()
