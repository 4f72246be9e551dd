"""Shared test fixtures for relay-chat tests."""

import copy

import pytest
from unittest.mock import AsyncMock


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

MOCK_COMPLETION_RESPONSE = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "created": 1699000000,
    "model": "llama-3.1-70b-versatile",
    "choices": [
        {
            "index": 0,
            "message": {
                "role": "assistant",
                "content": "Use MFA everywhere."
            },
            "finish_reason": "stop"
        }
    ],
    "usage": {
        "prompt_tokens": 10,
        "completion_tokens": 5,
        "total_tokens": 15
    }
}

MOCK_GEMINI_RESPONSE = {
    "candidates": [
        {
            "content": {
                "role": "model",
                "parts": [{"text": "Patch early, patch often."}]
            },
            "finishReason": "STOP"
        }
    ],
    "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 6}
}

ENV_VARS = [
    "GROQ_API_KEY",
    "GROQ_BASE_URL",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "LM_STUDIO_SERVER_1",
    "LM_STUDIO_MODEL",
    "REQUEST_TIMEOUT_SECONDS",
    "GRADIO_PORT",
    "LOG_LEVEL",
]


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Environment
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep a developer's .env / shell from leaking into tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def clean_state():
    """Drop the process-wide session between tests."""
    from relay_chat import state
    state.reset_session()
    yield
    state.reset_session()


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Data Models
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def settings():
    """Default settings with a short system prompt."""
    from relay_chat.config import Settings
    return Settings(system_prompt="You are a security expert.")


@pytest.fixture
def sample_history():
    """Two completed exchanges, second answered by the local backend."""
    from relay_chat.config import Message, ProviderId
    return (
        Message(role="user", content="What is phishing?"),
        Message(role="assistant", content="A social engineering attack.", model=ProviderId.CLOUD),
        Message(role="user", content="How do I spot it?"),
        Message(role="assistant", content="Check the sender.", model=ProviderId.LOCAL),
    )


@pytest.fixture
def new_message():
    from relay_chat.config import Message
    return Message(role="user", content="What about smishing?")


@pytest.fixture
def completion_response():
    """Return mock /chat/completions response."""
    return copy.deepcopy(MOCK_COMPLETION_RESPONSE)


@pytest.fixture
def gemini_response():
    """Return mock generateContent response."""
    return copy.deepcopy(MOCK_GEMINI_RESPONSE)


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Adapters and Session
# ─────────────────────────────────────────────────────────────────────

def make_mock_adapter(provider, reply="ok"):
    adapter = AsyncMock()
    adapter.provider_id = provider
    adapter.send.return_value = reply
    return adapter


@pytest.fixture
def mock_adapters():
    """One AsyncMock adapter per provider, each answering with its own name."""
    from relay_chat.config import ProviderId
    return {p: make_mock_adapter(p, reply=f"reply from {p.value}") for p in ProviderId}


@pytest.fixture
def session(mock_adapters):
    """ChatSession wired to mock adapters."""
    from relay_chat.session import ChatSession
    return ChatSession(adapters=mock_adapters)
