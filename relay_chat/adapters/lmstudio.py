"""
LMStudioAdapter - local LM Studio implementation of ProviderAdapter.

Talks to a single loopback server's OpenAI-compatible endpoint with
streaming disabled and a newline stop sequence. Responses are validated
strictly: a missing choices[0].message.content is an error, never an
empty reply.
"""

import logging
from typing import Optional, Sequence

import httpx

from relay_chat.adapters.schema import ChatCompletionPayload, first_choice_content, http_error_text
from relay_chat.config import (
    LOCAL_STOP_SEQUENCES,
    Message,
    ProviderId,
    Settings,
    get_local_model,
    get_local_server_url,
    get_timeout_seconds,
)
from relay_chat.errors import GenericProviderError, ResponseShapeError, TransportUnavailableError

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Local LM Error"


class LMStudioAdapter:
    """
    LM Studio implementation of ProviderAdapter protocol.

    No auth and no model discovery: LM Studio answers with whichever
    model is loaded unless model_id is configured.
    """

    provider_id = ProviderId.LOCAL

    def __init__(
        self,
        server_url: Optional[str] = None,
        model_id: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Args:
            server_url: Base URL (default from LM_STUDIO_SERVER_1 or http://localhost:1234)
            model_id: Optional model to request (default from LM_STUDIO_MODEL)
            timeout_seconds: Transport timeout (default from REQUEST_TIMEOUT_SECONDS)
        """
        self._server_url = (server_url or get_local_server_url()).rstrip("/")
        self._model_id = model_id or get_local_model()
        self._timeout = timeout_seconds or get_timeout_seconds()

    @property
    def endpoint(self) -> str:
        return f"{self._server_url}/v1/chat/completions"

    async def send(
        self,
        history: Sequence[Message],
        new_message: Message,
        settings: Settings,
    ) -> str:
        """Send a turn to LM Studio and return the strictly-validated reply."""
        payload = ChatCompletionPayload.build(
            history,
            new_message,
            settings,
            model=self._model_id,
            stream=False,
            stop=list(LOCAL_STOP_SEQUENCES),
        )

        logger.debug(f"LM Studio request: {self.endpoint}, turns={len(payload.messages)}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self.endpoint, json=payload.to_json())
        except httpx.ConnectError as e:
            logger.error(f"Local LM Error: {e}")
            raise TransportUnavailableError(
                f"Failed to connect to LM Studio at {self._server_url}. "
                "Make sure it is running and a model is loaded.",
                self.provider_id,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Local LM Error: {e}")
            raise GenericProviderError(
                f"{ERROR_PREFIX}: {str(e) or type(e).__name__}", self.provider_id
            ) from e

        if not response.is_success:
            logger.error(f"Response error: {response.text}")
            raise GenericProviderError(
                f"{ERROR_PREFIX}: {http_error_text(response)}", self.provider_id
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        content = first_choice_content(data)
        if content is None:
            logger.error(f"Unexpected API response: {response.text[:500]}")
            raise ResponseShapeError(
                f"{ERROR_PREFIX}: Invalid response format from local LM", self.provider_id
            )

        return content
