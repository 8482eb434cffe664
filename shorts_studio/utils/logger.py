"""
Shorts Studio - ロギングユーティリティ

構造化ログとログレベル管理
"""

import logging
import re
import sys
from typing import Any

from shorts_studio.config import config

SENSITIVE_KEYS = {
    "token",
    "password",
    "secret",
    "api_key",
    "key",
    "refresh_token",
    "access_token",
    "client_secret",
    "client_id",
    "authorization",
    "bearer",
    "credential",
    "auth",
}

# レスポンスボディ等はトランケート
TRUNCATE_KEYS = {"body", "response", "content", "prompt"}
MAX_VALUE_LENGTH = 200

_SECRET_PATTERN = re.compile(
    r'(token|key|secret|password|bearer)["\']?\s*[:=]\s*["\']?[\w\-\.]+',
    flags=re.IGNORECASE,
)


def get_logger(name: str) -> logging.Logger:
    """
    ロガーを取得する

    Args:
        name: ロガー名（通常は__name__を使用）

    Returns:
        設定済みのロガー
    """
    logger = logging.getLogger(name)

    # 既に設定済みの場合はそのまま返す
    if logger.handlers:
        return logger

    logger.setLevel(config.LOG_LEVEL)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(config.LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter(config.LOG_FORMAT))

    logger.addHandler(console_handler)

    # 親ロガーへの伝播を防ぐ
    logger.propagate = False

    return logger


def redact_values(text: str, secrets: list[str] | None) -> str:
    """指定した値だけを伏せ字にする（それ以外の文言は変更しない）"""
    for secret in secrets or []:
        if secret:
            text = text.replace(secret, "***")
    return text


def mask_secrets(text: str, secrets: list[str] | None = None) -> str:
    """
    ログ出力用に文字列中の機密情報を伏せ字にする

    `key=value` 形式も推測でマスクするため、クライアントに返すメッセージには
    redact_valuesを使う

    Args:
        text: 対象文字列
        secrets: 明示的に伏せる値（APIキー等）

    Returns:
        マスク済みの文字列
    """
    return redact_values(_SECRET_PATTERN.sub(r"\1=***", text), secrets)


class StructuredLogger:
    """
    構造化ログを出力するラッパークラス

    コンテキスト情報を付加してログを出力
    """

    def __init__(self, name: str):
        self._logger = get_logger(name)

    def _format_extra(self, extra: dict[str, Any] | None) -> str:
        """追加情報をフォーマット"""
        if not extra:
            return ""
        return " " + str(self._mask_sensitive(extra))

    def _mask_sensitive(self, data: dict[str, Any]) -> dict[str, Any]:
        """機密情報をマスキング"""
        masked = {}
        for key, value in data.items():
            key_lower = key.lower()
            if any(s in key_lower for s in SENSITIVE_KEYS):
                # 値の一部を残して末尾をマスク（デバッグしやすいように）
                if isinstance(value, str) and len(value) > 8:
                    masked[key] = f"{value[:4]}***{value[-4:]}"
                else:
                    masked[key] = "***"
            elif key_lower in TRUNCATE_KEYS:
                if isinstance(value, str):
                    masked_value = mask_secrets(value)
                    if len(masked_value) > MAX_VALUE_LENGTH:
                        masked[key] = f"{masked_value[:MAX_VALUE_LENGTH]}...[truncated]"
                    else:
                        masked[key] = masked_value
                else:
                    masked[key] = value
            elif isinstance(value, dict):
                masked[key] = self._mask_sensitive(value)
            elif isinstance(value, list):
                masked[key] = [
                    self._mask_sensitive(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                masked[key] = value
        return masked

    def debug(self, message: str, extra: dict[str, Any] | None = None) -> None:
        """DEBUGレベルログ"""
        self._logger.debug(f"{message}{self._format_extra(extra)}")

    def error(self, message: str, extra: dict[str, Any] | None = None) -> None:
        """ERRORレベルログ"""
        self._logger.error(f"{message}{self._format_extra(extra)}")
