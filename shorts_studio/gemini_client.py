"""
Shorts Studio - Gemini APIクライアント

Gemini generateContent エンドポイントをhttpxで呼び出す
"""

from types import TracebackType
from typing import Any, Protocol, Self

import httpx

from shorts_studio.errors import GenerationError
from shorts_studio.utils.logger import StructuredLogger

logger = StructuredLogger(__name__)


class TextGenerator(Protocol):
    """テキスト生成の協調者（プロンプトを渡して応答テキスト全体を受け取る）"""

    async def generate_text(self, prompt: str) -> str: ...


class GeminiClient:
    """
    Gemini APIクライアント

    async with文で使用するか、手動でclose()を呼び出す。

    Usage:
        async with GeminiClient(api_key, "gemini-1.5-pro") as client:
            text = await client.generate_text(prompt)
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            api_key: Gemini APIキー
            model: モデル名
            base_url: APIのベースURL
            timeout: タイムアウト秒数
            transport: httpxトランスポート（テスト用）
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def _get_client(self) -> httpx.AsyncClient:
        """クライアントを取得（遅延初期化）"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"x-goog-api-key": self.api_key},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """クライアントを閉じる"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Self:
        await self._get_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def generate_text(self, prompt: str) -> str:
        """
        プロンプトを送信し、応答テキストを返す

        Args:
            prompt: 送信するプロンプト

        Returns:
            応答テキスト（複数パートは連結）

        Raises:
            GenerationError: API呼び出しに失敗した場合
        """
        client = await self._get_client()
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        logger.debug(f"POST {self.endpoint}", extra={"prompt": prompt})
        try:
            response = await client.post(self.endpoint, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Gemini APIエラー: {e.response.status_code}",
                extra={"body": e.response.text[:500]},
            )
            raise GenerationError(
                f"Gemini request failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Gemini APIへの接続に失敗: {e}")
            raise GenerationError(f"Gemini request failed: {e}") from e

        return self._extract_text(response.json())

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        """generateContentの応答からテキストを取り出す"""
        candidates = data.get("candidates") or []
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason")
            if reason:
                raise GenerationError(f"Gemini blocked the prompt: {reason}")
            raise GenerationError("Gemini returned no candidates")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
