"""
Pure conversation updates.

A conversation is an immutable tuple of Message; every operation here
returns a new tuple and never touches the network, so ChatSession can
compose these with the async adapter call.
"""

from typing import Optional

from relay_chat.config import Message, ProviderId


Conversation = tuple[Message, ...]

EMPTY_CONVERSATION: Conversation = ()

FALLBACK_REPLY: str = "Sorry, I couldn't process that request."
NEW_THREAD_ERROR_REPLY: str = "Sorry, there was an error processing your message. Please try again."
UNKNOWN_ERROR: str = "Unknown error occurred"


def user_message(text: str) -> Message:
    return Message(role="user", content=text)


def assistant_message(content: Optional[str], provider: ProviderId) -> Message:
    """Build the reply message, substituting the fallback for empty content."""
    return Message(role="assistant", content=content or FALLBACK_REPLY, model=provider)


def error_message(error: BaseException, provider: ProviderId) -> Message:
    """Render a failure into the assistant slot."""
    detail = str(error) or UNKNOWN_ERROR
    return Message(role="assistant", content=f"Error: {detail}", model=provider)


def append(conversation: Conversation, *messages: Message) -> Conversation:
    return tuple(conversation) + messages


def to_display_format(conversation: Conversation) -> str:
    """Convert to human-readable markdown (for logs and exports)."""
    lines = []
    for msg in conversation:
        if msg.role == "user":
            lines.append(f"**User:** {msg.content}")
        else:
            source = msg.model.display_name if msg.model else "Assistant"
            lines.append(f"**{source}:** {msg.content}")
    return "\n\n".join(lines)
