"""
Shorts Studio - Pytest設定・共通フィクスチャ
"""

import json

import pytest

from shorts_studio.config import Config


@pytest.fixture
def settings() -> Config:
    """全ての認証情報が設定済みの設定"""
    return Config(
        _env_file=None,
        GEMINI_API_KEY="test_gemini_key",
        YOUTUBE_CLIENT_ID="test_client_id",
        YOUTUBE_CLIENT_SECRET="test_client_secret",
        YOUTUBE_REFRESH_TOKEN="test_refresh_token",
    )


@pytest.fixture
def empty_settings() -> Config:
    """認証情報が未設定の設定"""
    return Config(
        _env_file=None,
        GEMINI_API_KEY="",
        YOUTUBE_CLIENT_ID="",
        YOUTUBE_CLIENT_SECRET="",
        YOUTUBE_REFRESH_TOKEN="",
    )


@pytest.fixture
def sample_plan_data() -> dict:
    """サンプルのプラン（Geminiの応答をデコードしたもの）"""
    return {
        "title": "Automate Shorts in 45 Seconds",
        "description": "Stop editing by hand.\n\nFollow for more #shorts #ai",
        "script": "1. (0-3s) Hook: You are wasting hours.\n2. (3-40s) Demo.\n3. (40-45s) CTA.",
        "shotIdeas": [
            "Close-up of hands on keyboard, slow push-in",
            "Screen recording with quick zoom cuts",
        ],
        "hashtags": ["shorts", "#ai", "automation"],
        "callToAction": "Follow for the full workflow",
    }


@pytest.fixture
def sample_plan_response(sample_plan_data) -> str:
    """コードブロックで囲まれたGeminiの応答テキスト"""
    return f"```json\n{json.dumps(sample_plan_data)}\n```"
