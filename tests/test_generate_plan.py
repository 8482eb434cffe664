"""
Shorts Studio - 動画プラン生成のテスト
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from shorts_studio.errors import GenerationError, SchemaError
from shorts_studio.generate_plan import PlanGenerator, build_prompt, parse_plan
from shorts_studio.models import GenerationRequest


class TestBuildPrompt:
    """build_promptのテスト"""

    def test_embeds_all_fields(self):
        """全ての項目がプロンプトに含まれる"""
        prompt = build_prompt(
            GenerationRequest(
                topic="Meal prep hacks",
                tone="Calm",
                duration="30",
                audience="Students",
            )
        )
        assert "Topic / Hook: Meal prep hacks" in prompt
        assert "Tone: Calm" in prompt
        assert "around 30 seconds" in prompt
        assert "Target audience: Students" in prompt

    def test_defaults_substituted(self):
        """未指定の項目はデフォルト値で埋められる"""
        prompt = build_prompt(GenerationRequest(topic="Automate YouTube Shorts with AI"))
        assert "Tone: Energetic" in prompt
        assert "around 45 seconds" in prompt
        assert "Target audience: General viewers" in prompt

    def test_requests_plan_shape(self):
        """JSONの形式が指示される"""
        prompt = build_prompt(GenerationRequest(topic="x"))
        for field in ("title", "description", "script", "shotIdeas", "hashtags", "callToAction"):
            assert f'"{field}"' in prompt
        assert "under 60 characters" in prompt

    def test_deterministic(self):
        request = GenerationRequest(topic="x")
        assert build_prompt(request) == build_prompt(request)


class TestParsePlan:
    """parse_planのテスト"""

    def test_fenced_response(self, sample_plan_response):
        plan = parse_plan(sample_plan_response)
        assert plan.hashtags == ["#shorts", "#ai", "#automation"]

    def test_preamble_response(self, sample_plan_data):
        """前置きの説明文があってもJSONを取り出せる"""
        text = f"Here is your plan:\n```json\n{json.dumps(sample_plan_data)}\n```"
        assert parse_plan(text).title == sample_plan_data["title"]

    def test_invalid_json(self):
        with pytest.raises(GenerationError, match="Failed to parse"):
            parse_plan("This is not JSON")

    def test_missing_fields(self):
        with pytest.raises(SchemaError):
            parse_plan('{"title": "only title"}')


class TestPlanGenerator:
    """PlanGeneratorのテスト"""

    @pytest.fixture
    def text_generator(self, sample_plan_response):
        generator = AsyncMock()
        generator.generate_text.return_value = sample_plan_response
        return generator

    @pytest.mark.asyncio
    async def test_generate(self, settings, text_generator):
        """プランが生成される"""
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate(
            GenerationRequest(topic="Automate YouTube Shorts with AI")
        )

        assert result.success is True
        assert result.status_code == 200
        plan = result.data
        assert plan.title == "Automate Shorts in 45 Seconds"
        assert all(tag.startswith("#") for tag in plan.hashtags)
        assert all(isinstance(shot, str) for shot in plan.shot_ideas)
        text_generator.generate_text.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_payload_shape(self, settings, text_generator):
        """HTTPレスポンスの形式"""
        generator = PlanGenerator(settings=settings, generator=text_generator)

        payload = (await generator.generate(GenerationRequest(topic="x"))).to_payload()

        assert payload["success"] is True
        assert set(payload["data"]) == {
            "title",
            "description",
            "script",
            "shotIdeas",
            "hashtags",
            "callToAction",
        }
        assert "error" not in payload

    @pytest.mark.asyncio
    @pytest.mark.parametrize("topic", ["", "   ", None])
    async def test_missing_topic(self, settings, text_generator, topic):
        """トピック未指定ならAPIを呼ばない"""
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate(GenerationRequest(topic=topic))

        assert result.success is False
        assert result.error == "Topic is required"
        assert result.status_code == 400
        text_generator.generate_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_api_key(self, empty_settings, text_generator):
        """APIキー未設定ならAPIを呼ばない"""
        generator = PlanGenerator(settings=empty_settings, generator=text_generator)

        result = await generator.generate(GenerationRequest(topic="x"))

        assert result.success is False
        assert result.error == "Missing GEMINI_API_KEY environment variable"
        assert result.status_code == 500
        text_generator.generate_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_api_failure(self, settings, text_generator):
        """API呼び出しの失敗は失敗レスポンスになる"""
        text_generator.generate_text.side_effect = RuntimeError("quota exceeded")
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate(GenerationRequest(topic="x"))

        assert result.success is False
        assert result.error == "quota exceeded"
        assert result.status_code == 500

    @pytest.mark.asyncio
    async def test_api_failure_masks_key(self, settings, text_generator):
        """エラーメッセージにAPIキーを含めない"""
        text_generator.generate_text.side_effect = RuntimeError(
            "bad request for test_gemini_key"
        )
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate(GenerationRequest(topic="x"))

        assert "test_gemini_key" not in result.error

    @pytest.mark.asyncio
    async def test_api_failure_message_kept(self, settings, text_generator):
        """秘密情報を含まないエラーメッセージは書き換えない"""
        text_generator.generate_text.side_effect = RuntimeError("invalid key: maxOutputTokens")
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate(GenerationRequest(topic="x"))

        assert result.error == "invalid key: maxOutputTokens"

    @pytest.mark.asyncio
    async def test_schema_failure(self, settings, text_generator):
        """必須フィールドが欠けている応答"""
        text_generator.generate_text.return_value = '```json\n{"title": "t"}\n```'
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate(GenerationRequest(topic="x"))

        assert result.success is False
        assert result.error == "Gemini response missing fields"

    @pytest.mark.asyncio
    async def test_called_once_without_retry(self, settings, text_generator):
        """解析に失敗しても再生成しない"""
        text_generator.generate_text.return_value = "Sorry, I cannot help with that."
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate(GenerationRequest(topic="x"))

        assert result.success is False
        assert text_generator.generate_text.await_count == 1

    @pytest.mark.asyncio
    async def test_generate_from_payload(self, settings, text_generator):
        """リクエストボディからの生成"""
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate_from_payload(
            {"topic": "Budget travel", "tone": "Funny", "duration": "60", "extra": 1}
        )

        assert result.success is True
        prompt = text_generator.generate_text.call_args[0][0]
        assert "Tone: Funny" in prompt
        assert "around 60 seconds" in prompt

    @pytest.mark.asyncio
    async def test_generate_from_non_object_payload(self, settings, text_generator):
        generator = PlanGenerator(settings=settings, generator=text_generator)

        result = await generator.generate_from_payload(["not", "an", "object"])

        assert result.error == "Topic is required"

    @pytest.mark.asyncio
    async def test_uses_gemini_client_by_default(self, settings, sample_plan_response):
        """生成クライアント未指定ならGeminiClientを使う"""
        with patch("shorts_studio.generate_plan.GeminiClient") as mock_client_cls:
            client = mock_client_cls.return_value.__aenter__.return_value
            client.generate_text = AsyncMock(return_value=sample_plan_response)

            result = await PlanGenerator(settings=settings).generate(
                GenerationRequest(topic="x")
            )

        assert result.success is True
        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["api_key"] == "test_gemini_key"
        assert kwargs["model"] == "gemini-1.5-pro"
