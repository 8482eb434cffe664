"""
Shorts Studio - プラン検証

LLMが返したJSONの構造を検証し、軽微な書式の揺れを正規化する
"""

from typing import Any

from shorts_studio.errors import SchemaError
from shorts_studio.models import GeneratedPlan

TEXT_FIELDS = ("title", "description", "script", "callToAction")
LIST_FIELDS = ("shotIdeas", "hashtags")

MISSING_FIELDS_MESSAGE = "Gemini response missing fields"


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_list(value: Any) -> bool:
    return isinstance(value, list)


def normalize_hashtag(tag: Any) -> str:
    """先頭に#がなければ付与する（既に#付きならそのまま）"""
    text = str(tag)
    return text if text.startswith("#") else f"#{text}"


def validate_plan(data: Any) -> GeneratedPlan:
    """
    生成結果を検証してGeneratedPlanに変換

    Args:
        data: JSONデコード済みの応答

    Returns:
        正規化済みのプラン

    Raises:
        SchemaError: 必須フィールドが欠けている、または型が異なる場合
    """
    if not isinstance(data, dict):
        raise SchemaError(MISSING_FIELDS_MESSAGE)

    if not all(_is_text(data.get(field)) for field in TEXT_FIELDS) or not all(
        _is_list(data.get(field)) for field in LIST_FIELDS
    ):
        raise SchemaError(MISSING_FIELDS_MESSAGE)

    return GeneratedPlan(
        title=data["title"],
        description=data["description"],
        script=data["script"],
        shot_ideas=[str(item) for item in data["shotIdeas"]],
        hashtags=[normalize_hashtag(item) for item in data["hashtags"]],
        call_to_action=data["callToAction"],
    )
