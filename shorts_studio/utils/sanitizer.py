"""
Shorts Studio - LLM応答のサニタイズ

Geminiの応答からコードブロック等の装飾を取り除き、JSON部分を取り出す
"""

from shorts_studio.constants import FENCE_MARKER


def _is_fence(line: str) -> bool:
    return line.strip().startswith(FENCE_MARKER)


def _slice_fenced(lines: list[str], opening: int) -> str:
    """開始フェンスの次行から終了フェンスの直前までを返す（終了フェンスがなければ末尾まで）"""
    for index in range(opening + 1, len(lines)):
        if _is_fence(lines[index]):
            return "\n".join(lines[opening + 1 : index])
    return "\n".join(lines[opening + 1 :])


def sanitize_json_text(raw: str) -> str:
    """
    応答テキストからJSONペイロードを取り出す

    先頭がコードブロック（```）で始まる場合のみ中身を取り出し、
    それ以外は前後の空白を除いてそのまま返す。例外は送出しない。

    Args:
        raw: LLMの応答テキスト

    Returns:
        JSONとして解析を試みるテキスト
    """
    if not isinstance(raw, str):
        return ""

    trimmed = raw.strip()
    if not trimmed.startswith(FENCE_MARKER):
        return trimmed

    lines = trimmed.split("\n")
    opening = next(i for i, line in enumerate(lines) if _is_fence(line))
    return _slice_fenced(lines, opening)


def extract_json_payload(raw: str) -> str:
    """
    前置きの説明文がある応答からもコードブロックを取り出す

    例: "Here is your plan:\\n```json\\n{...}\\n```"
    """
    if not isinstance(raw, str):
        return ""

    trimmed = raw.strip()
    lines = trimmed.split("\n")
    for index, line in enumerate(lines):
        if _is_fence(line):
            return _slice_fenced(lines, index)
    return trimmed
