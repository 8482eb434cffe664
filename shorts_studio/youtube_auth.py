"""
Shorts Studio - YouTube認証モジュール

リフレッシュトークンからアクセストークンを取得し、YouTube Data API v3の
サービスオブジェクトを構築する
"""

import argparse
from pathlib import Path
from typing import Protocol

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from shorts_studio.config import config
from shorts_studio.errors import UpstreamError
from shorts_studio.models import DelegatedCredential
from shorts_studio.utils.logger import get_logger

logger = get_logger(__name__)


class YouTubeAuthError(UpstreamError):
    """YouTube認証エラー（トークン交換の拒否）"""

    pass


class TokenExchanger(Protocol):
    """リフレッシュトークンをアクセストークンに交換する"""

    def exchange(self, credential: DelegatedCredential) -> Credentials: ...


class RefreshTokenExchanger:
    """OAuth2トークンエンドポイントに問い合わせてアクセストークンを取得"""

    def exchange(self, credential: DelegatedCredential) -> Credentials:
        """
        アクセストークンを即座に取得する

        アップロード前に必ずリフレッシュしておき、API呼び出し時に有効な
        Bearerトークンが付与されている状態にする。

        Args:
            credential: 委任認証情報

        Returns:
            アクセストークン取得済みの認証情報

        Raises:
            YouTubeAuthError: トークンエンドポイントが交換を拒否した場合
        """
        credentials = Credentials(
            token=None,
            refresh_token=credential.refresh_token.get_secret_value(),
            token_uri=credential.token_uri,
            client_id=credential.client_id,
            client_secret=credential.client_secret.get_secret_value(),
            scopes=credential.scopes or None,
        )

        logger.info("アクセストークンを取得中")
        try:
            credentials.refresh(Request())
        except RefreshError as e:
            logger.error(f"トークンのリフレッシュに失敗: {e}")
            raise YouTubeAuthError(f"Failed to refresh YouTube access token: {e}") from e

        return credentials


class StaticTokenExchanger:
    """固定のアクセストークンを返すスタブ（テスト・ローカル検証用）"""

    def __init__(self, token: str = "stub-access-token"):
        self.token = token
        self.calls = 0

    def exchange(self, credential: DelegatedCredential) -> Credentials:
        self.calls += 1
        return Credentials(token=self.token)


def build_youtube_service(credentials: Credentials):
    """
    YouTube APIサービスオブジェクトを構築

    Args:
        credentials: アクセストークン取得済みの認証情報

    Returns:
        YouTube APIサービス
    """
    return build("youtube", "v3", credentials=credentials, cache_discovery=False)


def obtain_refresh_token(
    client_secrets_file: str | Path,
    scopes: list[str] | None = None,
) -> str:
    """
    ブラウザでOAuth同意を行い、リフレッシュトークンを取得する

    取得した値を環境変数 YOUTUBE_REFRESH_TOKEN に設定して使用する。

    Args:
        client_secrets_file: OAuth2クライアント認証情報ファイルのパス
        scopes: 要求するスコープ

    Returns:
        リフレッシュトークン
    """
    client_secrets_file = Path(client_secrets_file)
    if not client_secrets_file.exists():
        raise FileNotFoundError(
            f"クライアント認証情報ファイルが見つかりません: {client_secrets_file}"
        )

    logger.info("新規認証を開始（ブラウザが開きます）")
    flow = InstalledAppFlow.from_client_secrets_file(
        str(client_secrets_file),
        scopes or config.YOUTUBE_SCOPES,
    )
    # prompt=consentでないと2回目以降リフレッシュトークンが返らない
    credentials = flow.run_local_server(port=0, access_type="offline", prompt="consent")
    if not credentials.refresh_token:
        raise YouTubeAuthError("OAuth flow did not return a refresh token")
    return credentials.refresh_token


def main():
    """CLI実行用"""
    parser = argparse.ArgumentParser(description="YouTubeのリフレッシュトークンを取得")
    parser.add_argument(
        "--client-secrets",
        "-c",
        default="client_secrets.json",
        help="OAuth2クライアント認証情報ファイルのパス",
    )
    args = parser.parse_args()

    refresh_token = obtain_refresh_token(args.client_secrets)
    print("認証が完了しました。以下を YOUTUBE_REFRESH_TOKEN に設定してください:")
    print(refresh_token)


if __name__ == "__main__":
    main()
