"""
Shorts Studio - データモデル

Pydanticを使用したリクエスト/レスポンススキーマ
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationInfo, field_validator

from shorts_studio.config import Config
from shorts_studio.constants import (
    DEFAULT_AUDIENCE,
    DEFAULT_DURATION_SECONDS,
    DEFAULT_PRIVACY_STATUS,
    DEFAULT_TONE,
    DEFAULT_VIDEO_MIMETYPE,
    YOUTUBE_WATCH_URL_TEMPLATE,
)
from shorts_studio.errors import ConfigurationError, ShortsStudioError


# === 台本（プラン）関連 ===

_REQUEST_DEFAULTS = {
    "tone": DEFAULT_TONE,
    "duration_seconds": DEFAULT_DURATION_SECONDS,
    "audience": DEFAULT_AUDIENCE,
}


class GenerationRequest(BaseModel):
    """台本生成リクエスト"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    topic: str = Field(default="", description="動画のトピック・フック")
    tone: str = Field(default=DEFAULT_TONE, description="トーン")
    duration_seconds: str = Field(
        default=DEFAULT_DURATION_SECONDS, alias="duration", description="動画の長さ（秒）"
    )
    audience: str = Field(default=DEFAULT_AUDIENCE, description="ターゲット視聴者")

    @field_validator("topic", mode="before")
    @classmethod
    def _normalize_topic(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("tone", "duration_seconds", "audience", mode="before")
    @classmethod
    def _apply_default(cls, value: Any, info: ValidationInfo) -> str:
        # 空文字・未指定はデフォルト値に置き換える
        if value is None or not str(value).strip():
            return _REQUEST_DEFAULTS[info.field_name]
        return str(value).strip()


class GeneratedPlan(BaseModel):
    """生成された動画プラン"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., description="動画タイトル")
    description: str = Field(..., description="動画説明文")
    script: str = Field(..., description="タイミング付きの台本")
    shot_ideas: list[str] = Field(
        default_factory=list, alias="shotIdeas", description="撮影アイデア"
    )
    hashtags: list[str] = Field(default_factory=list, description="ハッシュタグ（#付き）")
    call_to_action: str = Field(..., alias="callToAction", description="CTA")


# === YouTube投稿関連 ===


class UploadRequest(BaseModel):
    """YouTube投稿リクエスト"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    video: Any = Field(..., description="動画ファイル（バイナリのファイルライクオブジェクト）")
    title: str = Field(..., description="動画タイトル")
    description: str = Field(..., description="動画説明文")
    privacy_status: str = Field(default=DEFAULT_PRIVACY_STATUS, description="公開状態")
    tags: list[str] | None = Field(default=None, description="タグ")
    mime_type: str = Field(default=DEFAULT_VIDEO_MIMETYPE, description="MIMEタイプ")


class DelegatedCredential(BaseModel):
    """YouTubeの委任認証情報（リフレッシュトークン方式）"""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: SecretStr
    refresh_token: SecretStr
    token_uri: str = "https://oauth2.googleapis.com/token"
    scopes: list[str] = Field(default_factory=list)

    @classmethod
    def from_config(cls, settings: Config) -> "DelegatedCredential":
        """
        設定から認証情報を組み立てる

        Raises:
            ConfigurationError: 必要な環境変数が未設定の場合
        """
        missing = settings.missing_youtube_credentials()
        if missing:
            raise ConfigurationError(
                "Missing YouTube OAuth credentials. Set YOUTUBE_CLIENT_ID, "
                "YOUTUBE_CLIENT_SECRET, and YOUTUBE_REFRESH_TOKEN."
            )
        return cls(
            client_id=settings.YOUTUBE_CLIENT_ID,
            client_secret=settings.YOUTUBE_CLIENT_SECRET,
            refresh_token=settings.YOUTUBE_REFRESH_TOKEN,
            token_uri=settings.YOUTUBE_TOKEN_URI,
            scopes=list(settings.YOUTUBE_SCOPES),
        )


class UploadResult(BaseModel):
    """YouTube投稿結果"""

    model_config = ConfigDict(frozen=True)

    video_id: str = Field(..., description="動画ID")
    video_url: str = Field(..., description="動画URL")

    @classmethod
    def from_video_id(cls, video_id: str) -> "UploadResult":
        return cls(
            video_id=video_id,
            video_url=YOUTUBE_WATCH_URL_TEMPLATE.format(video_id=video_id),
        )


# === レスポンス ===


class PlanResponse(BaseModel):
    """台本生成レスポンス"""

    success: bool
    data: GeneratedPlan | None = None
    error: str | None = None
    status_code: int = Field(default=200, exclude=True)

    @classmethod
    def ok(cls, plan: GeneratedPlan) -> "PlanResponse":
        return cls(success=True, data=plan)

    @classmethod
    def failure(cls, error: ShortsStudioError) -> "PlanResponse":
        return cls(success=False, error=str(error), status_code=error.status_code)

    def to_payload(self) -> dict[str, Any]:
        """HTTPレスポンス用の辞書に変換"""
        return self.model_dump(by_alias=True, exclude_none=True)


class UploadResponse(BaseModel):
    """YouTube投稿レスポンス"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    video_url: str | None = Field(default=None, alias="videoUrl")
    video_id: str | None = Field(default=None, alias="videoId")
    error: str | None = None
    status_code: int = Field(default=200, exclude=True)

    @classmethod
    def ok(cls, result: UploadResult) -> "UploadResponse":
        return cls(success=True, video_url=result.video_url, video_id=result.video_id)

    @classmethod
    def failure(cls, error: ShortsStudioError) -> "UploadResponse":
        return cls(success=False, error=str(error), status_code=error.status_code)

    def to_payload(self) -> dict[str, Any]:
        """HTTPレスポンス用の辞書に変換"""
        return self.model_dump(by_alias=True, exclude_none=True)
