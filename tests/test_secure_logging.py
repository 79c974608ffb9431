"""Tests for log sanitization."""

import logging

from payroll_api.utils.secure_logging import (
    MAX_LOGGED_MESSAGE_LENGTH,
    log_error,
    sanitize_exception_message,
)


class TestSanitizeExceptionMessage:
    """Tests for sanitize_exception_message."""

    def test_email_redacted(self):
        message = sanitize_exception_message(ValueError("Recipient alice@example.com refused"))
        assert "alice@example.com" not in message
        assert "[EMAIL]" in message

    def test_connection_string_redacted(self):
        error = ConnectionError("could not connect to postgresql+asyncpg://payroll:secret@db:5432/payroll")
        message = sanitize_exception_message(error)
        assert "secret" not in message
        assert "[URL]" in message

    def test_path_redacted(self):
        message = sanitize_exception_message(OSError("cannot open '/etc/payroll/smtp.key'"))
        assert "/etc/payroll" not in message
        assert "[PATH]" in message

    def test_long_message_truncated(self):
        message = sanitize_exception_message(RuntimeError("x " * 500))
        assert len(message) == MAX_LOGGED_MESSAGE_LENGTH
        assert message.endswith("...")


class TestLogError:
    """Tests for log_error outside debug mode."""

    def test_logs_sanitized_message(self, caplog):
        logger = logging.getLogger("payroll_api.tests")
        with caplog.at_level(logging.ERROR, logger="payroll_api.tests"):
            log_error(logger, "Failed to deliver message", ConnectionError("refused for bob@example.com"))

        assert len(caplog.records) == 1
        assert "bob@example.com" not in caplog.text
        assert "Failed to deliver message" in caplog.text

    def test_logs_plain_message_without_error(self, caplog):
        logger = logging.getLogger("payroll_api.tests")
        with caplog.at_level(logging.ERROR, logger="payroll_api.tests"):
            log_error(logger, "Delivery sweep failed")
        assert caplog.records[0].getMessage() == "Delivery sweep failed"
