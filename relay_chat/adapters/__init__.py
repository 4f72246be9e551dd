"""
Adapters for chat backends.

Provider-agnostic architecture: Protocol defines WHAT, implementations define HOW.
One adapter per ProviderId; the registry refuses to build if a provider
is left without one.
"""

from typing import Mapping, Optional

from relay_chat.config import ProviderId

from .base import ProviderAdapter
from .gemini import GeminiAdapter
from .groq import GroqAdapter
from .lmstudio import LMStudioAdapter

ADAPTER_TYPES: dict[ProviderId, type] = {
    ProviderId.CLOUD: GroqAdapter,
    ProviderId.LOCAL: LMStudioAdapter,
    ProviderId.GENERATIVE: GeminiAdapter,
}


def build_adapters(
    overrides: Optional[Mapping[ProviderId, ProviderAdapter]] = None,
) -> dict[ProviderId, ProviderAdapter]:
    """
    Instantiate one adapter per provider.

    Args:
        overrides: Pre-built adapters to use instead of the defaults

    Raises:
        ValueError if any ProviderId has no adapter
    """
    overrides = dict(overrides or {})
    adapters: dict[ProviderId, ProviderAdapter] = {}
    for provider in ProviderId:
        if provider in overrides:
            adapters[provider] = overrides[provider]
        elif provider in ADAPTER_TYPES:
            adapters[provider] = ADAPTER_TYPES[provider]()
        else:
            raise ValueError(f"No adapter registered for provider: {provider.value}")
    return adapters


__all__ = [
    "ADAPTER_TYPES",
    "GeminiAdapter",
    "GroqAdapter",
    "LMStudioAdapter",
    "ProviderAdapter",
    "build_adapters",
]
