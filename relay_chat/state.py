"""
Global state for the relay-chat application.

This module holds mutable state that is shared across handlers and UI.
Keeping it separate avoids circular import issues.
"""

from typing import Optional

from relay_chat.session import ChatSession


# Initialized lazily by get_session() so tests can swap in their own
session: Optional[ChatSession] = None


def get_session() -> ChatSession:
    """Return the process-wide session, creating it on first use."""
    global session
    if session is None:
        session = ChatSession()
    return session


def reset_session(new_session: Optional[ChatSession] = None) -> None:
    """Replace (or drop) the process-wide session."""
    global session
    session = new_session
