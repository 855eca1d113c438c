# ============================================================================
# FILE: test/utils/test_logging_utils.py
# Tests for key_handler/utils/logging.py
# ============================================================================

import json
import logging

from key_handler.utils.logging import JsonFormatter, get_context_logger, with_context


def _record(msg="hello", **extra):
    record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:

    def test_basic_fields(self):
        data = json.loads(JsonFormatter().format(_record()))
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
        assert data["logger"] == "test"

    def test_extra_fields_included(self):
        data = json.loads(JsonFormatter().format(_record(key_id=5, trace_id="t-1")))
        assert data["key_id"] == 5
        assert data["trace_id"] == "t-1"

    def test_sensitive_fields_redacted(self):
        data = json.loads(JsonFormatter().format(_record(secret="XXXX-1111", admin_token="tok")))
        assert data["secret"] == "********"
        assert data["admin_token"] == "********"

    def test_unserializable_extra_stringified(self):
        data = json.loads(JsonFormatter().format(_record(obj=object())))
        assert data["obj"].startswith("<object")


class TestContextLogger:

    def test_context_attached(self, caplog):
        logger = get_context_logger("ctx_test", trace_id="t-9", key_id=3)
        with caplog.at_level(logging.INFO, logger="ctx_test"):
            logger.info("claimed")
        assert caplog.records[0].trace_id == "t-9"
        assert caplog.records[0].key_id == 3

    def test_with_context_merges(self, caplog):
        logger = with_context(get_context_logger("ctx_test2", trace_id="t-1"), client_identity="1.1.1.1")
        with caplog.at_level(logging.INFO, logger="ctx_test2"):
            logger.info("x")
        assert caplog.records[0].trace_id == "t-1"
        assert caplog.records[0].client_identity == "1.1.1.1"
