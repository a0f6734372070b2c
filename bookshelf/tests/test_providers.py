"""
Tests for LLM providers and the provider factory.
"""

from unittest.mock import MagicMock, patch

import pytest

from bookshelf.providers import (
    ChatTurn,
    GoogleProvider,
    ProviderError,
    ProviderType,
    create_provider,
    get_provider_from_env,
)


def _client(text="Reply", error=None):
    """Fake genai client returning text or raising error."""
    client = MagicMock()
    if error is not None:
        client.models.generate_content.side_effect = error
    else:
        response = MagicMock()
        response.text = text
        response.usage_metadata.prompt_token_count = 12
        response.usage_metadata.candidates_token_count = 4
        client.models.generate_content.return_value = response
    return client


TURNS = [ChatTurn(role="user", content="What is microgravity?")]


class TestGoogleProvider:
    """Tests for Gemini calls with key fallback."""

    def test_requires_keys(self):
        with pytest.raises(ValueError):
            GoogleProvider([])

    def test_success_with_first_key(self):
        clients = [_client("First"), _client("Second")]
        with patch("bookshelf.providers.google.genai.Client", side_effect=clients):
            provider = GoogleProvider(["k1", "k2"])

        response = provider.complete_chat(TURNS, system_prompt="Be kind")

        assert response.text == "First"
        assert response.input_tokens == 12
        assert response.output_tokens == 4
        assert provider.current_key_index == 0
        clients[1].models.generate_content.assert_not_called()

        kwargs = clients[0].models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["config"].max_output_tokens == 1024
        assert kwargs["contents"][0].role == "user"

    def test_assistant_turns_sent_as_model(self):
        clients = [_client()]
        with patch("bookshelf.providers.google.genai.Client", side_effect=clients):
            provider = GoogleProvider(["k1"])

        provider.complete_chat([
            ChatTurn(role="user", content="Hi"),
            ChatTurn(role="assistant", content="Hello"),
            ChatTurn(role="user", content="Tell me more"),
        ])

        contents = clients[0].models.generate_content.call_args.kwargs["contents"]
        assert [c.role for c in contents] == ["user", "model", "user"]

    def test_falls_back_to_next_key(self):
        clients = [_client(error=RuntimeError("quota")), _client("Backup")]
        with patch("bookshelf.providers.google.genai.Client", side_effect=clients):
            provider = GoogleProvider(["k1", "k2"])

        response = provider.complete_chat(TURNS)

        assert response.text == "Backup"
        assert provider.current_key_index == 1
        assert response.metadata["key_index"] == 1

    def test_keeps_working_key(self):
        clients = [_client(error=RuntimeError("quota")), _client("Backup")]
        with patch("bookshelf.providers.google.genai.Client", side_effect=clients):
            provider = GoogleProvider(["k1", "k2"])

        provider.complete_chat(TURNS)
        provider.complete_chat(TURNS)

        assert clients[0].models.generate_content.call_count == 1
        assert clients[1].models.generate_content.call_count == 2

    def test_empty_text_counts_as_failure(self):
        clients = [_client(""), _client("Real answer")]
        with patch("bookshelf.providers.google.genai.Client", side_effect=clients):
            provider = GoogleProvider(["k1", "k2"])

        assert provider.complete_chat(TURNS).text == "Real answer"

    def test_all_keys_exhausted(self):
        clients = [_client(error=RuntimeError("bad key")) for _ in range(3)]
        with patch("bookshelf.providers.google.genai.Client", side_effect=clients):
            provider = GoogleProvider(["k1", "k2", "k3"])

        with pytest.raises(ProviderError, match="exhausted"):
            provider.complete_chat(TURNS)

        for client in clients:
            assert client.models.generate_content.call_count == 1

    def test_model_alias(self):
        with patch("bookshelf.providers.google.genai.Client"):
            provider = GoogleProvider(["k1"], default_model="pro")
        assert provider.model == "gemini-2.5-pro"

    @pytest.mark.asyncio
    async def test_async_wrapper(self):
        with patch("bookshelf.providers.google.genai.Client", side_effect=[_client("Async")]):
            provider = GoogleProvider(["k1"])
        response = await provider.complete_chat_async(TURNS)
        assert response.text == "Async"


class TestFactory:
    """Tests for provider creation."""

    def test_no_keys_means_no_provider(self):
        assert get_provider_from_env([]) is None
        assert get_provider_from_env(None) is None

    def test_creates_google_provider(self):
        with patch("bookshelf.providers.google.genai.Client"):
            provider = get_provider_from_env(["k1"], default_model="flash")
        assert isinstance(provider, GoogleProvider)
        assert provider.name == "google"

    def test_create_by_name(self):
        with patch("bookshelf.providers.google.genai.Client"):
            provider = create_provider("Google", ["k1"])
        assert isinstance(provider, GoogleProvider)
        assert ProviderType("google") is ProviderType.GOOGLE

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            create_provider("openai", ["k1"])
