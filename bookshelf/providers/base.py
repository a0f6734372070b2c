"""
Base LLM provider interface.

Defines the abstract chat interface that provider implementations follow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class ProviderError(Exception):
    """The provider could not produce a response."""


@dataclass
class ChatTurn:
    """One message of a conversation sent to the model."""
    role: str  # user | assistant
    content: str


@dataclass
class LLMResponse:
    """Standardized response from any LLM provider."""
    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    metadata: dict = field(default_factory=dict)


class LLMProvider(ABC):
    """
    Abstract base class for chat-capable LLM providers.

    The chat service only depends on this interface, so the vendor behind
    it can change without touching conversation handling.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name (e.g., 'google')."""
        pass

    @abstractmethod
    def complete_chat(
        self,
        messages: list[ChatTurn],
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """
        Generate the next assistant turn for a conversation.

        Args:
            messages: Conversation so far, oldest first, ending with a user turn
            system_prompt: Optional system instructions
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            LLMResponse with the generated text and metadata

        Raises:
            ProviderError: If no response could be generated
        """
        pass

    async def complete_chat_async(
        self,
        messages: list[ChatTurn],
        system_prompt: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """
        Async version of complete_chat.

        Default implementation wraps sync call in executor.
        Providers with native async support should override this.
        """
        import asyncio
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            lambda: self.complete_chat(
                messages=messages,
                system_prompt=system_prompt,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        )
