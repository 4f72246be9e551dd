"""
GroqAdapter - Groq Cloud implementation of ProviderAdapter.

Cloud inference over Groq's OpenAI-compatible REST API.
Rate limiting is treated as a soft failure: the adapter answers with a
fixed notice instead of raising.
"""

import logging
from typing import Optional, Sequence

import httpx

from relay_chat.adapters.schema import ChatCompletionPayload, first_choice_content, parse_api_error
from relay_chat.config import (
    Message,
    ProviderId,
    Settings,
    get_groq_api_key,
    get_groq_base_url,
    get_timeout_seconds,
)
from relay_chat.errors import (
    RATE_LIMIT_MESSAGE,
    GenericProviderError,
    TransportUnavailableError,
    is_rate_limited,
)

logger = logging.getLogger(__name__)


class GroqAdapter:
    """
    Groq Cloud implementation of ProviderAdapter protocol.

    The API key may be absent at construction so the app can start in
    local-only setups; the missing key is reported when a request is sent.
    """

    provider_id = ProviderId.CLOUD

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self._api_key = api_key or get_groq_api_key()
        self._base_url = (base_url or get_groq_base_url()).rstrip("/")
        self._timeout = timeout_seconds or get_timeout_seconds()

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/chat/completions"

    async def send(
        self,
        history: Sequence[Message],
        new_message: Message,
        settings: Settings,
    ) -> str:
        """Send a turn to Groq and return choices[0].message.content."""
        if not self._api_key:
            raise GenericProviderError(
                "Groq API key required. Set GROQ_API_KEY environment variable.",
                self.provider_id,
            )

        payload = ChatCompletionPayload.build(
            history, new_message, settings, model=settings.cloud_model
        )
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Groq request: model={settings.cloud_model}, turns={len(payload.messages)}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self.endpoint, json=payload.to_json(), headers=headers)
        except httpx.ConnectError as e:
            logger.error(f"Groq connection failed: {e}")
            raise TransportUnavailableError(
                f"Failed to connect to Groq Cloud at {self._base_url}. Check your network connection.",
                self.provider_id,
            ) from e
        except httpx.HTTPError as e:
            return self._degrade_or_raise(str(e) or type(e).__name__, None, e)

        if response.status_code >= 400:
            return self._degrade_or_raise(parse_api_error(response), response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise GenericProviderError(
                f"Groq returned a non-JSON response: {response.text[:200]}",
                self.provider_id,
            ) from e

        return first_choice_content(data) or ""

    def _degrade_or_raise(
        self,
        message: str,
        status_code: Optional[int],
        cause: Optional[BaseException] = None,
    ) -> str:
        if is_rate_limited(message, status_code):
            logger.warning(f"Groq rate limited (status={status_code}): {message}")
            return RATE_LIMIT_MESSAGE
        logger.error(f"Groq error: {message}")
        raise GenericProviderError(message, self.provider_id) from cause
