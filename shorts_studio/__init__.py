# Shorts Studio - Package
"""
Shorts Studio パッケージ

YouTube Shorts向けの動画プラン生成（Gemini）と動画投稿（YouTube Data API）
"""

__version__ = "0.1.0"

from shorts_studio.models import (
    DelegatedCredential,
    GeneratedPlan,
    GenerationRequest,
    PlanResponse,
    UploadRequest,
    UploadResponse,
    UploadResult,
)

__all__ = [
    "DelegatedCredential",
    "GeneratedPlan",
    "GenerationRequest",
    "PlanResponse",
    "UploadRequest",
    "UploadResponse",
    "UploadResult",
]
