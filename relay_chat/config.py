"""
Configuration constants and Pydantic models for relay-chat.
"""

import os
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ─────────────────────────────────────────────────────────────────────
# PROVIDERS
# ─────────────────────────────────────────────────────────────────────

class ProviderId(str, Enum):
    """The backends a conversation can be routed to."""
    CLOUD = "cloud"
    LOCAL = "local"
    GENERATIVE = "generative"

    @property
    def display_name(self) -> str:
        return PROVIDER_DISPLAY_NAMES[self]


PROVIDER_DISPLAY_NAMES: dict[ProviderId, str] = {
    ProviderId.CLOUD: "Groq Cloud",
    ProviderId.LOCAL: "Local LM",
    ProviderId.GENERATIVE: "Gemini 2.0 Flash",
}


class CloudModel(BaseModel):
    """A model offered by the cloud completion service."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    context_window: int


CLOUD_MODELS: dict[str, CloudModel] = {
    "llama-3.1-70b-versatile": CloudModel(
        name="LLaMA 3.1 70B Versatile",
        description="General purpose model with broad capabilities",
        context_window=4096,
    ),
    "llama3-groq-70b-8192-tool-use-preview": CloudModel(
        name="LLaMA 3 70B Tool Use",
        description="Optimized for tool use and function calling",
        context_window=8192,
    ),
    "gemma2-9b-it": CloudModel(
        name="Gemma 2 9B",
        description="Efficient and lightweight model",
        context_window=8192,
    ),
    "mixtral-8x7b-32768": CloudModel(
        name="Mixtral 8x7B",
        description="High performance with extended context window",
        context_window=32768,
    ),
    "llama3-70b-8192": CloudModel(
        name="LLaMA 3 70B",
        description="Latest LLaMA 3 with extended context",
        context_window=8192,
    ),
}


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS - User-configurable via Gradio UI
# ─────────────────────────────────────────────────────────────────────

DEFAULT_PROVIDER: ProviderId = ProviderId.CLOUD
DEFAULT_CLOUD_MODEL: str = "llama-3.1-70b-versatile"
DEFAULT_TEMPERATURE: float = 1.0
DEFAULT_MAX_TOKENS: int = 1024
DEFAULT_TOP_P: float = 1.0
DEFAULT_FREQUENCY_PENALTY: float = 0.0
DEFAULT_PRESENCE_PENALTY: float = 0.0
DEFAULT_SYSTEM_PROMPT: str = (
    "You are a highly knowledgeable cybersecurity expert. Provide accurate, "
    "up-to-date information about cybersecurity topics, best practices, threat "
    "detection, and security measures. Focus on practical, actionable advice "
    "while maintaining technical accuracy. If you're unsure about something, "
    "acknowledge it and suggest reliable sources for further information."
)


# ─────────────────────────────────────────────────────────────────────
# INTERNAL CONSTANTS - Not exposed to UI
# ─────────────────────────────────────────────────────────────────────

DEFAULT_LOCAL_SERVER: str = "http://localhost:1234"
DEFAULT_GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
DEFAULT_GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL: str = "gemini-2.0-flash-exp"
DEFAULT_TIMEOUT_SECONDS: int = 300  # 5 minutes

# Gemini's own output ceiling, independent of Settings.max_tokens
GEMINI_MAX_OUTPUT_TOKENS: int = 8192
GEMINI_TOP_K: int = 40

LOCAL_STOP_SEQUENCES: list[str] = ["\n"]


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def get_groq_api_key() -> Optional[str]:
    """Get Groq API key from environment."""
    return os.environ.get("GROQ_API_KEY") or None


def get_groq_base_url() -> str:
    """Get Groq API base URL (OpenAI-compatible) from environment or default."""
    return os.environ.get("GROQ_BASE_URL", "").strip() or DEFAULT_GROQ_BASE_URL


def get_gemini_api_key() -> Optional[str]:
    """Get Gemini API key from environment."""
    return os.environ.get("GEMINI_API_KEY") or None


def get_gemini_model() -> str:
    """Get Gemini model identifier from environment or default."""
    return os.environ.get("GEMINI_MODEL", "").strip() or DEFAULT_GEMINI_MODEL


def get_local_server_url() -> str:
    """
    Get LM Studio server URL from environment or default.

    Reads LM_STUDIO_SERVER_1; falls back to the loopback default.
    """
    value = os.environ.get("LM_STUDIO_SERVER_1", "").strip()
    return value.rstrip("/") if value else DEFAULT_LOCAL_SERVER


def get_local_model() -> Optional[str]:
    """
    Get the model id to request from LM Studio.

    Unset means LM Studio answers with whichever model is loaded.
    """
    return os.environ.get("LM_STUDIO_MODEL", "").strip() or None


def get_timeout_seconds() -> float:
    """
    Get transport timeout for backend requests.

    Set REQUEST_TIMEOUT_SECONDS in .env (default: 300).
    """
    try:
        return float(os.environ.get("REQUEST_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)))
    except ValueError:
        return float(DEFAULT_TIMEOUT_SECONDS)


def get_gradio_port() -> int:
    """
    Get Gradio server port from environment or default.

    Returns port from GRADIO_PORT env var, or 7860 as default.
    """
    port_str = os.environ.get("GRADIO_PORT", "7860")
    try:
        return int(port_str)
    except ValueError:
        return 7860


def get_log_level() -> str:
    """Get root log level name from LOG_LEVEL (default: WARNING)."""
    level = os.environ.get("LOG_LEVEL", "WARNING").strip().upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return "WARNING"
    return level


# ─────────────────────────────────────────────────────────────────────
# DATA MODELS
# ─────────────────────────────────────────────────────────────────────

class Message(BaseModel):
    """A single conversation turn.

    ``model`` is only set on assistant messages and records which
    backend produced the reply.
    """
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    model: Optional[ProviderId] = None

    def to_role_content(self) -> dict:
        """OpenAI-style {role, content} dict (provider tag stripped)."""
        return {"role": self.role, "content": self.content}


class Settings(BaseModel):
    """Snapshot of sampling parameters and provider selection for one request."""
    model_config = ConfigDict(frozen=True)

    temperature: float = Field(DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(DEFAULT_MAX_TOKENS, ge=256, le=4096)
    top_p: float = Field(DEFAULT_TOP_P, ge=0.0, le=1.0)
    frequency_penalty: float = Field(DEFAULT_FREQUENCY_PENALTY, ge=-2.0, le=2.0)
    presence_penalty: float = Field(DEFAULT_PRESENCE_PENALTY, ge=-2.0, le=2.0)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    provider: ProviderId = DEFAULT_PROVIDER
    cloud_model: str = DEFAULT_CLOUD_MODEL

    @field_validator("cloud_model")
    @classmethod
    def _known_cloud_model(cls, value: str) -> str:
        if value not in CLOUD_MODELS:
            raise ValueError(
                f"Unknown cloud model '{value}'. Choose one of: {', '.join(CLOUD_MODELS)}"
            )
        return value

    def with_changes(self, **changes) -> "Settings":
        """Return a new validated Settings with the given fields replaced."""
        return Settings(**{**self.model_dump(), **changes})
