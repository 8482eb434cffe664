"""
Shorts Studio - YouTube投稿

委任認証情報（リフレッシュトークン）でアクセストークンを取得し、
YouTube Data API v3で動画をアップロードする
"""

import argparse
import asyncio
import io
import json
import mimetypes
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, BinaryIO

from google.oauth2.credentials import Credentials
from googleapiclient.http import MediaIoBaseUpload

from shorts_studio.config import Config, config
from shorts_studio.constants import (
    DEFAULT_PRIVACY_STATUS,
    DEFAULT_VIDEO_MIMETYPE,
    PRIVACY_STATUSES,
    YOUTUBE_CATEGORY_PEOPLE_BLOGS,
    YOUTUBE_UPLOAD_PARTS,
)
from shorts_studio.errors import InvalidInputError, ShortsStudioError, UpstreamError
from shorts_studio.models import (
    DelegatedCredential,
    GeneratedPlan,
    UploadRequest,
    UploadResponse,
    UploadResult,
)
from shorts_studio.utils.logger import get_logger, redact_values
from shorts_studio.youtube_auth import (
    RefreshTokenExchanger,
    TokenExchanger,
    build_youtube_service,
)

logger = get_logger(__name__)


def parse_tags(value: Any) -> list[str] | None:
    """
    カンマ区切りのタグ文字列をリストに変換

    Args:
        value: フォームの値（例: "ai, shorts, ,automation"）

    Returns:
        前後の空白を除いたタグのリスト（空要素は除外）。未指定ならNone
    """
    if not value:
        return None
    return [tag.strip() for tag in str(value).split(",") if tag.strip()]


def _is_binary_stream(video: Any) -> bool:
    """読み込み可能なバイナリのファイルライクオブジェクトかどうか"""
    if video is None or isinstance(video, io.TextIOBase):
        return False
    if not callable(getattr(video, "read", None)):
        return False
    readable = getattr(video, "readable", None)
    return readable() if callable(readable) else True


class VideoPublisher:
    """YouTube動画投稿クラス"""

    def __init__(
        self,
        settings: Config | None = None,
        token_exchanger: TokenExchanger | None = None,
        service_factory: Callable[[Credentials], Any] | None = None,
    ):
        """
        Args:
            settings: アプリケーション設定（省略時はシングルトン）
            token_exchanger: トークン交換の実装（省略時はOAuth2エンドポイントへ問い合わせ）
            service_factory: 認証情報からYouTube APIサービスを作る関数
        """
        self.settings = settings if settings is not None else config
        self.token_exchanger = token_exchanger or RefreshTokenExchanger()
        self.service_factory = service_factory or build_youtube_service

    def _validate_request(
        self,
        video: Any,
        title: str | None,
        description: str | None,
        privacy_status: str | None,
        tags: list[str] | None,
        mime_type: str | None,
    ) -> UploadRequest:
        """
        入力を検証

        Raises:
            InvalidInputError: 動画・タイトル・説明文が欠けている、または公開設定が不正な場合
        """
        if not _is_binary_stream(video):
            raise InvalidInputError("Video file is required")

        if not title or not title.strip() or not description or not description.strip():
            raise InvalidInputError("Title and description are required")

        privacy_status = (privacy_status or "").strip() or DEFAULT_PRIVACY_STATUS
        if privacy_status not in PRIVACY_STATUSES:
            allowed = ", ".join(sorted(PRIVACY_STATUSES))
            raise InvalidInputError(f"privacyStatus must be one of: {allowed}")

        return UploadRequest(
            video=video,
            title=title.strip(),
            description=description.strip(),
            privacy_status=privacy_status,
            tags=tags,
            mime_type=mime_type or DEFAULT_VIDEO_MIMETYPE,
        )

    def _secret_values(self) -> list[str]:
        return [
            self.settings.YOUTUBE_CLIENT_ID,
            self.settings.YOUTUBE_CLIENT_SECRET,
            self.settings.YOUTUBE_REFRESH_TOKEN,
        ]

    async def upload(
        self,
        video: BinaryIO,
        title: str | None,
        description: str | None,
        privacy_status: str | None = None,
        tags: list[str] | None = None,
        mime_type: str | None = None,
    ) -> UploadResponse:
        """
        動画をYouTubeにアップロード

        Args:
            video: 動画データ（バイナリのファイルライクオブジェクト）
            title: 動画タイトル
            description: 動画の説明
            privacy_status: 公開設定（public/unlisted/private、省略時はunlisted）
            tags: タグのリスト
            mime_type: 動画のMIMEタイプ（省略時はvideo/mp4）

        Returns:
            成功時は `success=True` と動画URL・動画ID、失敗時は `success=False` とエラーメッセージ
        """
        try:
            request = self._validate_request(
                video, title, description, privacy_status, tags, mime_type
            )
        except InvalidInputError as e:
            logger.warning(f"入力が不正です: {e}")
            return UploadResponse.failure(e)

        logger.info(f"動画アップロードを開始: {request.title}")

        try:
            result = await self._publish(request)
        except ShortsStudioError as e:
            logger.error(f"動画アップロードに失敗しました: {e}")
            return UploadResponse.failure(e)
        except Exception as e:
            logger.exception("動画アップロード中に予期しないエラーが発生しました")
            message = redact_values(str(e), self._secret_values())
            return UploadResponse.failure(
                UpstreamError(message or "YouTube upload failed unexpectedly")
            )

        logger.info(f"動画をアップロードしました: {result.video_url}")
        return UploadResponse.ok(result)

    async def _publish(self, request: UploadRequest) -> UploadResult:
        """認証 → トークン交換 → アップロード → 結果の組み立て"""
        credential = DelegatedCredential.from_config(self.settings)

        loop = asyncio.get_running_loop()
        credentials = await loop.run_in_executor(
            None, self.token_exchanger.exchange, credential
        )

        response = await loop.run_in_executor(
            None, self._insert_video, credentials, request
        )

        video_id = (response or {}).get("id")
        if not video_id:
            raise UpstreamError("YouTube did not return a video ID.")

        return UploadResult.from_video_id(video_id)

    def _insert_video(self, credentials: Credentials, request: UploadRequest) -> dict[str, Any]:
        """videos.insertを実行（ブロッキング操作）"""
        youtube = self.service_factory(credentials)

        snippet: dict[str, Any] = {
            "title": request.title,
            "description": request.description,
            "categoryId": YOUTUBE_CATEGORY_PEOPLE_BLOGS,
        }
        if request.tags is not None:
            snippet["tags"] = request.tags

        body = {
            "snippet": snippet,
            "status": {
                "privacyStatus": request.privacy_status,
                "selfDeclaredMadeForKids": False,
            },
        }

        # chunksize=-1: ファイルオブジェクトを1リクエストのボディとしてそのまま送る
        media = MediaIoBaseUpload(
            request.video,
            mimetype=request.mime_type,
            chunksize=-1,
            resumable=True,
        )

        insert_request = youtube.videos().insert(
            part=YOUTUBE_UPLOAD_PARTS,
            body=body,
            media_body=media,
        )
        response = None
        while response is None:
            status, response = insert_request.next_chunk()
            if status:
                logger.info(f"アップロード進捗: {int(status.progress() * 100)}%")
        return response

    async def upload_from_plan(
        self,
        video: BinaryIO,
        plan: GeneratedPlan,
        privacy_status: str | None = None,
        mime_type: str | None = None,
    ) -> UploadResponse:
        """
        生成済みプランのタイトル・説明文・ハッシュタグを使ってアップロード

        Args:
            video: 動画データ
            plan: 動画プラン
            privacy_status: 公開設定
            mime_type: 動画のMIMEタイプ
        """
        tags = [tag.lstrip("#") for tag in plan.hashtags if tag.lstrip("#")]
        return await self.upload(
            video=video,
            title=plan.title,
            description=plan.description,
            privacy_status=privacy_status,
            tags=tags or None,
            mime_type=mime_type,
        )


async def main():
    """CLI実行用"""
    parser = argparse.ArgumentParser(description="YouTubeに動画をアップロード")
    parser.add_argument("--video", "-v", required=True, help="動画ファイルのパス")
    parser.add_argument("--title", "-t", help="動画タイトル")
    parser.add_argument("--description", "-d", help="動画の説明")
    parser.add_argument("--tags", help="カンマ区切りのタグ")
    parser.add_argument("--plan", "-p", help="プランJSONファイルのパス（メタデータとして使用）")
    parser.add_argument(
        "--privacy",
        choices=sorted(PRIVACY_STATUSES),
        default=DEFAULT_PRIVACY_STATUS,
        help="公開設定",
    )

    args = parser.parse_args()

    video_path = Path(args.video)
    if not video_path.exists():
        parser.error(f"動画ファイルが見つかりません: {video_path}")
    if not args.plan and not args.title:
        parser.error("--title または --plan が必要です")

    mime_type = mimetypes.guess_type(video_path.name)[0] or DEFAULT_VIDEO_MIMETYPE
    publisher = VideoPublisher()

    with open(video_path, "rb") as video:
        if args.plan:
            with open(args.plan, encoding="utf-8") as f:
                plan_data = json.load(f)
            # generate_planの出力（{"success": ..., "data": {...}}）もそのまま受け付ける
            plan = GeneratedPlan.model_validate(plan_data.get("data", plan_data))
            result = await publisher.upload_from_plan(
                video, plan, privacy_status=args.privacy, mime_type=mime_type
            )
        else:
            result = await publisher.upload(
                video=video,
                title=args.title,
                description=args.description,
                privacy_status=args.privacy,
                tags=parse_tags(args.tags),
                mime_type=mime_type,
            )

    print(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
