"""Request payload and response helpers shared by the OpenAI-compatible adapters."""

from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import BaseModel

from relay_chat.config import Message, Settings


class ChatCompletionPayload(BaseModel):
    """
    Request body for OpenAI-compatible /chat/completions endpoints.

    Shared by the Groq and LM Studio adapters so both frame a turn the
    same way: system prompt, then history, then the new message.
    """
    messages: List[Dict[str, Any]]
    model: Optional[str] = None
    temperature: float
    max_tokens: int
    top_p: float
    frequency_penalty: float
    presence_penalty: float
    stream: Optional[bool] = None
    stop: Optional[List[str]] = None

    @classmethod
    def build(
        cls,
        history: Sequence[Message],
        new_message: Message,
        settings: Settings,
        **extra: Any,
    ) -> "ChatCompletionPayload":
        messages = [{"role": "system", "content": settings.system_prompt}]
        messages.extend(m.to_role_content() for m in history)
        messages.append(new_message.to_role_content())
        return cls(
            messages=messages,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            top_p=settings.top_p,
            frequency_penalty=settings.frequency_penalty,
            presence_penalty=settings.presence_penalty,
            **extra,
        )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def first_choice_content(data: Any) -> Optional[str]:
    """Return choices[0].message.content, or None if any level is missing."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def http_error_text(response: httpx.Response) -> str:
    """Format a non-2xx response the same way for every adapter."""
    return f"HTTP error! status: {response.status_code}. Response: {response.text}"


def parse_api_error(response: httpx.Response) -> str:
    """Extract a user-friendly error message from an OpenAI-style error body."""
    try:
        data = response.json()
        # OpenAI-compatible APIs return {"error": {"message": "..."}}
        if isinstance(data, dict):
            error = data.get("error", {})
            if isinstance(error, dict):
                message = error.get("message", "")
                if message:
                    return message
            elif isinstance(error, str) and error:
                return error
    except ValueError:
        pass
    return http_error_text(response)
