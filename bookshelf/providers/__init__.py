"""
LLM provider abstraction layer.
"""

from .base import ChatTurn, LLMProvider, LLMResponse, ProviderError
from .google import GoogleProvider
from .factory import create_provider, get_provider_from_env, ProviderType

__all__ = [
    "ChatTurn",
    "LLMProvider",
    "LLMResponse",
    "ProviderError",
    "GoogleProvider",
    "create_provider",
    "get_provider_from_env",
    "ProviderType",
]
