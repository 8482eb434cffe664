"""
Shorts Studio - 動画プラン生成

Gemini APIを使用してYouTube Shortsのクリエイティブ一式（タイトル・説明文・台本・
撮影アイデア・ハッシュタグ・CTA）を生成する
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from shorts_studio.config import Config, config
from shorts_studio.errors import (
    ConfigurationError,
    GenerationError,
    InvalidInputError,
    ShortsStudioError,
)
from shorts_studio.gemini_client import GeminiClient, TextGenerator
from shorts_studio.models import GeneratedPlan, GenerationRequest, PlanResponse
from shorts_studio.plan_validator import validate_plan
from shorts_studio.utils.logger import get_logger, redact_values
from shorts_studio.utils.sanitizer import extract_json_payload, sanitize_json_text

logger = get_logger(__name__)

PROMPT_TEMPLATE = """
You are an elite short-form video strategist. Build a complete creative package for a YouTube Short.

Constraints:
- Keep runtime around {duration} seconds
- Tone: {tone}
- Target audience: {audience}
- Deliver a punchy hook in the first 3 seconds
- End with a compelling call to action that feels natural, not salesy

Respond with strict JSON in the following shape:
{{
  "title": "Optimized short headline under 60 characters",
  "description": "2 paragraph description. Include CTA + hashtags.",
  "script": "Script broken into numbered beats with timing cues.",
  "shotIdeas": ["Shot idea with framing and motion", "..."],
  "hashtags": ["#shorts", "#topicKeyword", "..."],
  "callToAction": "Direct CTA phrase"
}}

Topic / Hook: {topic}
"""


def build_prompt(request: GenerationRequest) -> str:
    """
    プロンプトを構築

    未指定の項目はGenerationRequest側でデフォルト値に置き換え済み
    """
    return PROMPT_TEMPLATE.format(
        topic=request.topic,
        tone=request.tone,
        duration=request.duration_seconds,
        audience=request.audience,
    )


def parse_plan(response_text: str) -> GeneratedPlan:
    """
    応答テキストからプランを取り出して検証

    Raises:
        GenerationError: JSONとして解析できない場合
        SchemaError: 必須フィールドが欠けている場合
    """
    payload = sanitize_json_text(response_text)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        # 前置きの説明文 + コードブロックの形式を試す
        fallback = extract_json_payload(response_text)
        if fallback == payload:
            raise GenerationError(f"Failed to parse Gemini response as JSON: {e}") from e
        try:
            data = json.loads(fallback)
        except json.JSONDecodeError as e2:
            raise GenerationError(f"Failed to parse Gemini response as JSON: {e2}") from e2

    return validate_plan(data)


class PlanGenerator:
    """動画プラン生成クラス"""

    def __init__(
        self,
        settings: Config | None = None,
        generator: TextGenerator | None = None,
    ):
        """
        Args:
            settings: アプリケーション設定（省略時はシングルトン）
            generator: テキスト生成クライアント（省略時はリクエストごとにGeminiClientを生成）
        """
        self.settings = settings if settings is not None else config
        self._generator = generator

    def _validate_config(self) -> None:
        """設定を検証"""
        if not self.settings.GEMINI_API_KEY:
            raise ConfigurationError("Missing GEMINI_API_KEY environment variable")

    async def _call_api(self, prompt: str) -> str:
        """APIを1回だけ呼び出し、応答テキスト全体を返す"""
        if self._generator is not None:
            return await self._generator.generate_text(prompt)

        async with GeminiClient(
            api_key=self.settings.GEMINI_API_KEY,
            model=self.settings.GEMINI_MODEL,
            base_url=self.settings.GEMINI_BASE_URL,
            timeout=self.settings.GEMINI_TIMEOUT,
        ) as client:
            return await client.generate_text(prompt)

    async def generate(self, request: GenerationRequest) -> PlanResponse:
        """
        プランを生成

        Args:
            request: 生成リクエスト

        Returns:
            成功時は `success=True` とプラン、失敗時は `success=False` とエラーメッセージ
        """
        if not request.topic:
            logger.warning("トピックが指定されていません")
            return PlanResponse.failure(InvalidInputError("Topic is required"))

        logger.info(f"プラン生成を開始: トピック={request.topic}")

        try:
            self._validate_config()
            prompt = build_prompt(request)
            response_text = await self._call_api(prompt)
            logger.debug(f"LLM応答: {response_text[:500]}...")
            plan = parse_plan(response_text)
        except ShortsStudioError as e:
            logger.error(f"プラン生成に失敗しました: {e}")
            return PlanResponse.failure(e)
        except Exception as e:
            logger.exception("プラン生成中に予期しないエラーが発生しました")
            message = redact_values(str(e), [self.settings.GEMINI_API_KEY])
            return PlanResponse.failure(GenerationError(message or "Gemini request failed"))

        logger.info(f"プラン生成が完了しました: {plan.title}")
        return PlanResponse.ok(plan)

    async def generate_from_payload(self, payload: Any) -> PlanResponse:
        """
        リクエストボディ（topic/tone/duration/audience）からプランを生成

        Args:
            payload: デコード済みのJSONボディ
        """
        if not isinstance(payload, dict):
            payload = {}
        fields = {
            key: payload.get(key) for key in ("topic", "tone", "duration", "audience")
        }
        return await self.generate(GenerationRequest.model_validate(fields))


async def main():
    """CLI実行用"""
    parser = argparse.ArgumentParser(description="YouTube Shortsの動画プランを生成")
    parser.add_argument("--topic", "-t", required=True, help="動画のトピック・フック")
    parser.add_argument("--tone", help="トーン（デフォルト: Energetic）")
    parser.add_argument("--duration", "-d", help="動画の長さ（秒、デフォルト: 45）")
    parser.add_argument("--audience", "-a", help="ターゲット視聴者")

    args = parser.parse_args()

    request = GenerationRequest(
        topic=args.topic,
        tone=args.tone,
        duration=args.duration,
        audience=args.audience,
    )
    result = await PlanGenerator().generate(request)

    print(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
