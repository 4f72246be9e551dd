"""
GeminiAdapter - Gemini generateContent REST implementation of ProviderAdapter.

Key differences from the OpenAI-compatible adapters:
- No system role: the system prompt becomes a leading user turn
- Roles are remapped (assistant -> model, everything else -> user)
- API key travels as a query parameter
- maxOutputTokens is Gemini's own ceiling, not Settings.max_tokens
- Response is validated level by level, each with its own error
"""

import logging
from typing import Any, Optional, Sequence

import httpx

from relay_chat.adapters.schema import http_error_text
from relay_chat.config import (
    DEFAULT_GEMINI_BASE_URL,
    GEMINI_MAX_OUTPUT_TOKENS,
    GEMINI_TOP_K,
    Message,
    ProviderId,
    Settings,
    get_gemini_api_key,
    get_gemini_model,
    get_timeout_seconds,
)
from relay_chat.errors import (
    GenericProviderError,
    ProviderError,
    ResponseShapeError,
    TransportUnavailableError,
)

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Gemini Error"


def to_gemini_role(role: str) -> str:
    return "model" if role == "assistant" else "user"


def build_contents(
    history: Sequence[Message],
    new_message: Message,
    system_prompt: str,
) -> list[dict]:
    """Build the contents array: system turn (if any), history, new message."""
    contents = []
    if system_prompt:
        contents.append({"role": "user", "parts": [{"text": system_prompt}]})
    for msg in history:
        contents.append({"role": to_gemini_role(msg.role), "parts": [{"text": msg.content}]})
    contents.append({"role": "user", "parts": [{"text": new_message.content}]})
    return contents


def _first(items: Any) -> Optional[Any]:
    if isinstance(items, list) and items:
        return items[0]
    return None


def extract_text(data: Any) -> str:
    """
    Walk candidates[0].content.parts[0].text.

    Raises:
        ValueError naming the first missing level
    """
    candidate = _first(data.get("candidates")) if isinstance(data, dict) else None
    if not isinstance(candidate, dict):
        logger.error(f"No candidates in response: {data}")
        raise ValueError("No response candidates from Gemini")

    content = candidate.get("content")
    if not isinstance(content, dict):
        logger.error(f"No content in first candidate: {candidate}")
        raise ValueError("No content in Gemini response")

    part = _first(content.get("parts"))
    if not isinstance(part, dict):
        logger.error(f"No parts in content: {content}")
        raise ValueError("No parts in Gemini response content")

    text = part.get("text")
    if not text or not isinstance(text, str):
        logger.error(f"No text in first part: {part}")
        raise ValueError("No text in Gemini response part")

    return text


class GeminiAdapter:
    """
    Gemini implementation of ProviderAdapter protocol.

    Every failure is reported with a "Gemini Error: " prefix.
    """

    provider_id = ProviderId.GENERATIVE

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_id: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self._api_key = api_key or get_gemini_api_key()
        self._model_id = model_id or get_gemini_model()
        self._base_url = (base_url or DEFAULT_GEMINI_BASE_URL).rstrip("/")
        self._timeout = timeout_seconds or get_timeout_seconds()

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model_id}:generateContent"

    def build_payload(
        self,
        history: Sequence[Message],
        new_message: Message,
        settings: Settings,
    ) -> dict:
        return {
            "contents": build_contents(history, new_message, settings.system_prompt),
            "generationConfig": {
                "temperature": settings.temperature,
                "topK": GEMINI_TOP_K,
                "topP": float(settings.top_p),
                "maxOutputTokens": GEMINI_MAX_OUTPUT_TOKENS,
                "responseMimeType": "text/plain",
            },
        }

    def _fail(self, error_cls: type[ProviderError], detail: str) -> ProviderError:
        return error_cls(f"{ERROR_PREFIX}: {detail}", self.provider_id)

    async def send(
        self,
        history: Sequence[Message],
        new_message: Message,
        settings: Settings,
    ) -> str:
        """Send a turn to Gemini and return candidates[0].content.parts[0].text."""
        if not self._api_key:
            raise self._fail(
                GenericProviderError,
                "Gemini API key required. Set GEMINI_API_KEY environment variable.",
            )

        payload = self.build_payload(history, new_message, settings)
        logger.debug(f"Gemini request: model={self._model_id}, turns={len(payload['contents'])}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self._api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.ConnectError as e:
            logger.error(f"Gemini Error: {e}")
            raise self._fail(
                TransportUnavailableError,
                "Failed to connect to the Gemini API. Check your network connection.",
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini Error: {e}")
            raise self._fail(GenericProviderError, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.error(f"Response error: {response.text}")
            raise self._fail(GenericProviderError, http_error_text(response))

        try:
            data = response.json()
        except ValueError as e:
            raise self._fail(ResponseShapeError, "Response was not valid JSON") from e

        try:
            return extract_text(data)
        except ValueError as e:
            raise self._fail(ResponseShapeError, str(e)) from e
