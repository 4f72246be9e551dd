"""
Chat session: conversation state, submit life-cycle and new-thread reset.

ChatSession owns the conversation and the loading flag; adapters only
ever see a snapshot of both.
"""

import asyncio
import logging
from typing import Mapping, Optional

from relay_chat import conversation
from relay_chat.adapters import ProviderAdapter, build_adapters
from relay_chat.config import Message, ProviderId, Settings
from relay_chat.conversation import Conversation

logger = logging.getLogger(__name__)


class ChatSession:
    """
    Single conversation routed to one of several providers.

    Submits are serialized: a second submit waits until the first has
    appended its reply, so every request sees a consistent history.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        adapters: Optional[Mapping[ProviderId, ProviderAdapter]] = None,
    ):
        self._settings = settings or Settings()
        self._adapters = build_adapters(adapters)
        self._conversation: Conversation = conversation.EMPTY_CONVERSATION
        self._loading = False
        self._lock = asyncio.Lock()

    # ─────────────────────────────────────────────────────────────────
    # Read-only feed
    # ─────────────────────────────────────────────────────────────────

    @property
    def messages(self) -> Conversation:
        return self._conversation

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_loading(self) -> bool:
        return self._loading

    def transcript(self) -> str:
        return conversation.to_display_format(self._conversation)

    # ─────────────────────────────────────────────────────────────────
    # Settings
    # ─────────────────────────────────────────────────────────────────

    def update_settings(self, **changes) -> Settings:
        """
        Replace settings fields. Validated; raises pydantic.ValidationError
        and keeps the previous settings on bad input.
        """
        self._settings = self._settings.with_changes(**changes)
        return self._settings

    def get_adapter(self, provider: ProviderId) -> ProviderAdapter:
        return self._adapters[ProviderId(provider)]

    # ─────────────────────────────────────────────────────────────────
    # Submit life-cycle
    # ─────────────────────────────────────────────────────────────────

    async def _request_reply(
        self,
        history: Conversation,
        user_msg: Message,
        settings: Settings,
        generic_errors: bool = False,
    ) -> Message:
        """Await the provider and turn its outcome into an assistant message."""
        try:
            content = await self.get_adapter(settings.provider).send(history, user_msg, settings)
        except Exception as e:
            logger.error(f"Provider {settings.provider.value} failed: {e}")
            if generic_errors:
                return Message(
                    role="assistant",
                    content=conversation.NEW_THREAD_ERROR_REPLY,
                    model=settings.provider,
                )
            return conversation.error_message(e, settings.provider)
        return conversation.assistant_message(content, settings.provider)

    async def submit(self, text: str) -> Optional[Message]:
        """
        Send a user turn to the selected provider.

        The user message is appended before the request goes out. The
        reply, or an "Error: ..." message on failure, is appended after.
        Never raises for provider failures.

        Returns:
            The appended assistant message, or None for blank input
        """
        if not text or not text.strip():
            return None

        async with self._lock:
            settings = self._settings
            history = self._conversation
            user_msg = conversation.user_message(text)
            self._conversation = conversation.append(history, user_msg)
            self._loading = True
            logger.info(f"Submitting turn {len(self._conversation)} to {settings.provider.value}")
            try:
                reply = await self._request_reply(history, user_msg, settings)
                self._conversation = conversation.append(self._conversation, reply)
                return reply
            finally:
                self._loading = False

    async def start_new_thread(self, seed: str) -> Optional[Message]:
        """
        Discard the conversation and start over from a seed message.

        Unlike submit, failures are reported with a generic apology; the
        underlying error is only logged.

        Returns:
            The appended assistant message, or None for blank input
        """
        if not seed or not seed.strip():
            return None

        async with self._lock:
            settings = self._settings
            user_msg = conversation.user_message(seed)
            self._conversation = conversation.append(conversation.EMPTY_CONVERSATION, user_msg)
            self._loading = True
            logger.info(f"Starting new thread on {settings.provider.value}")
            try:
                reply = await self._request_reply(
                    conversation.EMPTY_CONVERSATION, user_msg, settings, generic_errors=True
                )
                self._conversation = conversation.append(self._conversation, reply)
                return reply
            finally:
                self._loading = False

    def clear(self) -> None:
        """Discard the conversation without sending anything."""
        self._conversation = conversation.EMPTY_CONVERSATION
