"""
Shorts Studio - ロギングユーティリティのテスト
"""

import logging
from unittest.mock import patch

from shorts_studio.utils.logger import StructuredLogger, get_logger, mask_secrets, redact_values


class TestGetLogger:
    """get_loggerのテスト"""

    def test_handler_added_once(self):
        logger = get_logger("shorts_studio.test_once")
        again = get_logger("shorts_studio.test_once")

        assert logger is again
        assert len(logger.handlers) == 1
        assert logger.propagate is False
        assert isinstance(logger.handlers[0], logging.StreamHandler)


class TestMaskSecrets:
    """mask_secretsのテスト"""

    def test_explicit_secrets(self):
        assert mask_secrets("token abc-123 rejected", ["abc-123"]) == "token *** rejected"

    def test_key_value_pattern(self):
        assert "s3cr3t" not in mask_secrets("client_secret=s3cr3t")

    def test_empty_secret_ignored(self):
        assert mask_secrets("hello", ["", None]) == "hello"


class TestRedactValues:
    """redact_valuesのテスト"""

    def test_only_given_values(self):
        assert redact_values("rejected token abc-123", ["abc-123"]) == "rejected token ***"

    def test_key_value_text_kept(self):
        message = "invalid key: maxOutputTokens"

        assert redact_values(message, ["test_gemini_key"]) == message
        assert mask_secrets(message) != message

    def test_no_secrets(self):
        assert redact_values("hello", None) == "hello"
        assert redact_values("hello", ["", None]) == "hello"


class TestStructuredLogger:
    """StructuredLoggerのテスト"""

    def test_mask_sensitive_keys(self):
        logger = StructuredLogger("shorts_studio.test_structured")

        masked = logger._mask_sensitive(
            {
                "refresh_token": "1//abcdefghijklmnop",
                "client_secret": "short",
                "title": "visible",
            }
        )

        assert masked["refresh_token"] == "1//a***mnop"
        assert masked["client_secret"] == "***"
        assert masked["title"] == "visible"

    def test_truncate_body(self):
        logger = StructuredLogger("shorts_studio.test_truncate")

        masked = logger._mask_sensitive({"body": "x" * 500})

        assert masked["body"].endswith("...[truncated]")
        assert len(masked["body"]) < 500

    def test_nested(self):
        logger = StructuredLogger("shorts_studio.test_nested")

        masked = logger._mask_sensitive({"request": {"api_key": "k"}, "items": [{"token": "t"}]})

        assert masked["request"]["api_key"] == "***"
        assert masked["items"][0]["token"] == "***"

    def test_error_appends_masked_extra(self):
        logger = StructuredLogger("shorts_studio.test_error_extra")

        with patch.object(logger, "_logger") as mock_logger:
            logger.error("Gemini APIエラー: 400", extra={"api_key": "k", "status": 400})

        message = mock_logger.error.call_args.args[0]
        assert message.startswith("Gemini APIエラー: 400 ")
        assert "'api_key': '***'" in message
        assert "'status': 400" in message
