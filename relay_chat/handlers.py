"""
Gradio event handlers for relay-chat.

Handlers only translate between widget values and ChatSession calls;
all conversation logic lives in relay_chat.session.
"""

import asyncio
from typing import Sequence

from pydantic import ValidationError

from relay_chat import state
from relay_chat.config import CLOUD_MODELS, DEFAULT_SYSTEM_PROMPT, Message, ProviderId


def to_chatbot_messages(messages: Sequence[Message]) -> list[dict]:
    """Convert the conversation feed to gr.Chatbot "messages" format.

    Assistant turns are labelled with the provider that wrote them.
    """
    return [{"role": m.role, "content": _labelled(m)} for m in messages]


def _labelled(message: Message) -> str:
    if message.role == "assistant" and message.model is not None:
        return f"**{message.model.display_name}:** {message.content}"
    return message.content


def _status_line() -> str:
    session = state.get_session()
    provider = session.settings.provider
    label = provider.display_name
    if provider == ProviderId.CLOUD:
        label = f"{label} · {CLOUD_MODELS[session.settings.cloud_model].name}"
    if session.is_loading:
        return f"⏳ Waiting for {label}..."
    return f"✅ Ready · {label} · {len(session.messages)} message(s)"


async def handle_submit(text: str):
    """
    Submit a message.

    Yields twice: once with the user turn shown and the input cleared,
    then again with the reply appended.
    """
    session = state.get_session()
    if not text or not text.strip():
        yield to_chatbot_messages(session.messages), text, "❌ Empty message"
        return

    task = asyncio.create_task(session.submit(text))
    # Let submit append the user turn before the first render
    await asyncio.sleep(0)
    yield to_chatbot_messages(session.messages), "", _status_line()

    await task
    yield to_chatbot_messages(session.messages), "", _status_line()


async def handle_new_thread(seed: str):
    """Start a new thread from the seed box; yields like handle_submit."""
    session = state.get_session()
    if not seed or not seed.strip():
        yield to_chatbot_messages(session.messages), seed, "❌ Enter a message to start a new thread"
        return

    task = asyncio.create_task(session.start_new_thread(seed))
    await asyncio.sleep(0)
    yield to_chatbot_messages(session.messages), "", _status_line()

    await task
    yield to_chatbot_messages(session.messages), "", _status_line()


def handle_clear() -> tuple:
    """Clear the conversation. Returns (chatbot, input, status)."""
    state.get_session().clear()
    return [], "", "🗑️ Conversation cleared."


def handle_settings_change(
    provider: str,
    cloud_model: str,
    temperature: float,
    max_tokens: int,
    top_p: float,
    frequency_penalty: float,
    presence_penalty: float,
    system_prompt: str,
) -> str:
    """Apply the settings panel to the session. Returns a status line."""
    session = state.get_session()
    try:
        session.update_settings(
            provider=ProviderId(provider),
            cloud_model=cloud_model,
            temperature=temperature,
            max_tokens=int(max_tokens),
            top_p=top_p,
            frequency_penalty=frequency_penalty,
            presence_penalty=presence_penalty,
            system_prompt=system_prompt or "",
        )
    except (ValidationError, ValueError) as e:
        return f"❌ Invalid settings: {e}"
    return _status_line()


def describe_cloud_model(model_id: str) -> str:
    """Markdown blurb for the selected cloud model."""
    model = CLOUD_MODELS.get(model_id)
    if model is None:
        return ""
    return (
        f"**{model.name}** · {model.description}  \n"
        f"Context Window: {model.context_window:,} tokens"
    )


def reset_system_prompt() -> str:
    return DEFAULT_SYSTEM_PROMPT


def show_transcript() -> str:
    return state.get_session().transcript()
