"""
Shorts Studio - FastAPIエントリポイント

- POST /generate : 動画プランの生成
- POST /upload   : YouTubeへの動画アップロード
- GET  /health   : ヘルスチェック
"""

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from shorts_studio import __version__
from shorts_studio.generate_plan import PlanGenerator
from shorts_studio.publish_video import VideoPublisher, parse_tags
from shorts_studio.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["shorts"])


def get_plan_generator() -> PlanGenerator:
    return PlanGenerator()


def get_video_publisher() -> VideoPublisher:
    return VideoPublisher()


@router.post("/generate")
async def generate(
    request: Request,
    generator: PlanGenerator = Depends(get_plan_generator),
) -> JSONResponse:
    try:
        payload = await request.json()
    except ValueError:
        # JSONでないボディはトピック未指定として扱う
        payload = {}

    result = await generator.generate_from_payload(payload)
    return JSONResponse(result.to_payload(), status_code=result.status_code)


@router.post("/upload")
async def upload(
    request: Request,
    publisher: VideoPublisher = Depends(get_video_publisher),
) -> JSONResponse:
    async with request.form() as form:
        video = form.get("video")
        if isinstance(video, UploadFile):
            stream, mime_type = video.file, video.content_type
        else:
            stream, mime_type = None, None

        result = await publisher.upload(
            video=stream,
            title=_form_text(form.get("title")),
            description=_form_text(form.get("description")),
            privacy_status=_form_text(form.get("privacyStatus")),
            tags=parse_tags(_form_text(form.get("tags"))),
            mime_type=mime_type,
        )

    return JSONResponse(result.to_payload(), status_code=result.status_code)


def _form_text(value) -> str | None:
    """フォーム値を文字列として取り出す（ファイルが送られた場合は無視）"""
    return value if isinstance(value, str) else None


def create_app() -> FastAPI:
    app = FastAPI(title="Shorts Studio", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.get("/health")
    def health():
        return {"ok": True}

    logger.info("Shorts Studio APIを初期化しました")
    return app


app = create_app()


def main():
    """開発用サーバーを起動"""
    import uvicorn

    uvicorn.run("shorts_studio.api:app", host="127.0.0.1", port=8000, reload=False)


if __name__ == "__main__":
    main()
