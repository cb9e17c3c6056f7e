"""Tests for logging setup and secret redaction."""

import logging

import pytest

from ai_tool_recommender.utils.logging import (
    LOGGER_NAME,
    SecretRedactingFilter,
    mask_sensitive,
    setup_logging,
)


def _record(msg, *args):
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


class TestSecretRedactingFilter:
    @pytest.mark.parametrize(
        "message, secret",
        [
            ("Authorization: Bearer abc.def.ghi", "abc.def.ghi"),
            ("using key sk-or-v1-0123456789abcdef", "sk-or-v1-0123456789abcdef"),
            ("api_key=supersecretvalue", "supersecretvalue"),
        ],
    )
    def test_redacts_secrets(self, message, secret):
        record = _record(message)
        assert SecretRedactingFilter().filter(record) is True
        assert secret not in record.getMessage()
        assert "[REDACTED" in record.getMessage()

    def test_redacts_interpolated_args(self):
        record = _record("header %s", "Bearer token123")
        SecretRedactingFilter().filter(record)
        assert record.getMessage() == "header Bearer [REDACTED]"

    def test_leaves_plain_messages_alone(self):
        record = _record("Loaded %d tools", 10)
        SecretRedactingFilter().filter(record)
        assert record.msg == "Loaded %d tools"
        assert record.args == (10,)


class TestMaskSensitive:
    def test_missing(self):
        assert mask_sensitive(None) == "Not Provided"
        assert mask_sensitive("") == "Not Provided"

    def test_short_value_fully_masked(self):
        assert mask_sensitive("abc123") == "******"

    def test_keeps_prefix(self):
        assert mask_sensitive("sk-or-v1-secret") == "sk-o" + "*" * 11


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger(LOGGER_NAME).handlers.clear()

    def test_sets_level_and_filter(self):
        logger = setup_logging("info")
        assert logger.name == LOGGER_NAME
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert any(isinstance(f, SecretRedactingFilter) for f in logger.handlers[0].filters)

    def test_verbose_forces_debug(self):
        assert setup_logging("ERROR", verbose=True).level == logging.DEBUG

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging("INFO")
        logger = setup_logging("WARNING")
        assert len(logger.handlers) == 1

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging("LOUD")
