# Shorts Studio - Utils Package
"""
ユーティリティモジュール
"""

from shorts_studio.utils.logger import StructuredLogger, get_logger, mask_secrets, redact_values
from shorts_studio.utils.sanitizer import extract_json_payload, sanitize_json_text

__all__ = [
    "get_logger",
    "mask_secrets",
    "redact_values",
    "StructuredLogger",
    "extract_json_payload",
    "sanitize_json_text",
]
