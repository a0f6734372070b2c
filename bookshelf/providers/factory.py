"""
Provider factory for creating LLM provider instances from configuration.
"""

from enum import Enum

from .base import LLMProvider
from .google import DEFAULT_MODEL, GoogleProvider


class ProviderType(Enum):
    """Available LLM provider types.

    Only Gemini is wired up; the enum keeps provider names validated in one place.
    """
    GOOGLE = "google"


def create_provider(
    provider_type: ProviderType | str,
    api_keys: list[str],
    default_model: str | None = None,
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Raises:
        ValueError: If provider_type is unknown or no keys are given
    """
    if isinstance(provider_type, str):
        try:
            provider_type = ProviderType(provider_type.lower())
        except ValueError:
            raise ValueError(
                f"Unknown provider: {provider_type}. "
                f"Available: {[p.value for p in ProviderType]}"
            )

    if provider_type == ProviderType.GOOGLE:
        return GoogleProvider(
            api_keys=api_keys,
            default_model=default_model or DEFAULT_MODEL,
        )
    raise ValueError(f"Unknown provider type: {provider_type}")


def get_provider_from_env(
    google_keys: list[str] | None = None,
    default_model: str | None = None,
) -> LLMProvider | None:
    """
    Create a provider from configured keys.

    Returns:
        Configured LLMProvider or None if no keys available
    """
    if not google_keys:
        return None
    return create_provider(ProviderType.GOOGLE, google_keys, default_model=default_model)
