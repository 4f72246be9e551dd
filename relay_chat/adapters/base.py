"""
ProviderAdapter Protocol - defines the contract for chat backends.

This is the WHAT (interface), not the HOW (implementation).
See groq.py, lmstudio.py and gemini.py for concrete implementations.
"""

from typing import Protocol, Sequence

from relay_chat.config import Message, ProviderId, Settings


class ProviderAdapter(Protocol):
    """
    Contract for chat backends.

    Implementations must:
    - Serialize history + new message + settings into their wire format
    - Parse/validate the backend response down to a content string
    - Raise relay_chat.errors.ProviderError subclasses on failure

    Adapters never read ambient state: everything a request needs
    arrives through the arguments or the constructor.
    """

    provider_id: ProviderId

    async def send(
        self,
        history: Sequence[Message],
        new_message: Message,
        settings: Settings,
    ) -> str:
        """
        Send one user turn and return the assistant's reply text.

        Args:
            history: Prior conversation turns, oldest first (new_message excluded)
            new_message: The user turn being sent
            settings: Sampling parameters and system prompt for this request

        Returns:
            Reply content (may be empty; the session substitutes a fallback)

        Raises:
            ProviderError on backend failure
        """
        ...
