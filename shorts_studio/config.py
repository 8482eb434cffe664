"""
Shorts Studio - 共通設定・定数管理

環境変数とアプリケーション設定を一元管理
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Gemini設定 ===
    GEMINI_API_KEY: str = Field(default="")
    GEMINI_MODEL: str = Field(default="gemini-1.5-pro")
    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta"
    )
    GEMINI_TIMEOUT: float = Field(default=120.0)

    # === YouTube設定 ===
    YOUTUBE_CLIENT_ID: str = Field(default="")
    YOUTUBE_CLIENT_SECRET: str = Field(default="")
    YOUTUBE_REFRESH_TOKEN: str = Field(default="")
    YOUTUBE_TOKEN_URI: str = Field(default="https://oauth2.googleapis.com/token")
    YOUTUBE_SCOPES: list[str] = Field(
        default=["https://www.googleapis.com/auth/youtube.upload"]
    )

    # === ログ設定 ===
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    LOG_FORMAT: str = Field(
        default="%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
    )

    def missing_youtube_credentials(self) -> list[str]:
        """未設定のYouTube認証情報の環境変数名を返す"""
        required = {
            "YOUTUBE_CLIENT_ID": self.YOUTUBE_CLIENT_ID,
            "YOUTUBE_CLIENT_SECRET": self.YOUTUBE_CLIENT_SECRET,
            "YOUTUBE_REFRESH_TOKEN": self.YOUTUBE_REFRESH_TOKEN,
        }
        return [name for name, value in required.items() if not value]


# シングルトンインスタンス
config = Config()
