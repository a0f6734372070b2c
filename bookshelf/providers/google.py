"""
Google Gemini provider implementation.

Uses the google-genai SDK. Several API keys can be configured; when a
request fails with one key the provider moves on to the next and keeps
using whichever key last worked.
"""

import logging

from google import genai
from google.genai import types

from .base import ChatTurn, LLMProvider, LLMResponse, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"


class GoogleProvider(LLMProvider):
    """
    Google Gemini chat provider with API key fallback.
    """

    # Model aliases for convenience
    MODEL_ALIASES = {
        "flash": "gemini-2.0-flash",
        "pro": "gemini-2.5-pro",
        "gemini-flash": "gemini-2.0-flash",
        "gemini-pro": "gemini-2.5-pro",
    }

    def __init__(
        self,
        api_keys: list[str],
        default_model: str = DEFAULT_MODEL,
    ):
        """
        Initialize Google Gemini provider.

        Args:
            api_keys: Google AI API keys, tried in order
            default_model: Model to use
        """
        if not api_keys:
            raise ValueError("GoogleProvider requires at least one API key")

        self._clients = [genai.Client(api_key=key) for key in api_keys]
        self._current = 0
        self._model = self.MODEL_ALIASES.get(default_model, default_model)

    @property
    def name(self) -> str:
        return "google"

    @property
    def model(self) -> str:
        return self._model

    @property
    def current_key_index(self) -> int:
        return self._current

    @staticmethod
    def _to_contents(messages: list[ChatTurn]) -> list[types.Content]:
        """Map chat turns to Gemini contents; Gemini calls the assistant 'model'."""
        return [
            types.Content(
                role="user" if m.role == "user" else "model",
                parts=[types.Part(text=m.content)],
            )
            for m in messages
        ]

    def complete_chat(
        self,
        messages: list[ChatTurn],
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """
        Generate the next assistant turn using Gemini.

        Each configured key is tried at most once per call.
        """
        config_kwargs = {
            "max_output_tokens": max_tokens,
            "temperature": temperature,
            "top_k": 40,
            "top_p": 0.95,
        }
        if system_prompt:
            config_kwargs["system_instruction"] = system_prompt

        config = types.GenerateContentConfig(**config_kwargs)
        contents = self._to_contents(messages)

        last_error: Exception | None = None
        for _ in range(len(self._clients)):
            client = self._clients[self._current]
            try:
                response = client.models.generate_content(
                    model=self._model,
                    contents=contents,
                    config=config,
                )
                if not response.text:
                    raise ProviderError("No response text from Gemini API")
            except Exception as e:
                last_error = e
                logger.warning(f"Gemini API key {self._current + 1} failed: {e}")
                self._current = (self._current + 1) % len(self._clients)
                continue

            input_tokens = 0
            output_tokens = 0
            if getattr(response, "usage_metadata", None):
                input_tokens = response.usage_metadata.prompt_token_count or 0
                output_tokens = response.usage_metadata.candidates_token_count or 0

            return LLMResponse(
                text=response.text,
                model=self._model,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                metadata={
                    "provider": "google",
                    "key_index": self._current,
                },
            )

        raise ProviderError(f"All Gemini API keys exhausted. Last error: {last_error}")
