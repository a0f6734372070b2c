"""
Chat service: business logic for the assistant panel.

Handles prompt selection, history windowing and the provider round trip.
Conversations are kept per article, plus one general conversation.
"""

import logging
from typing import TYPE_CHECKING

from fastapi import HTTPException

from ..catalog import ArticleCatalog
from ..ledgers import ChatHistoryLedger
from ..models import ChatMessage
from ..prompts import article_mode_prompt, general_mode_prompt
from ..providers.base import ChatTurn, ProviderError

if TYPE_CHECKING:
    from ..providers.base import LLMProvider

logger = logging.getLogger(__name__)

# Previous messages sent along with the new one (three exchanges)
MAX_CONTEXT_MESSAGES = 6


class ChatService:
    """Service for assistant conversations."""

    def __init__(
        self,
        catalog: ArticleCatalog,
        history: ChatHistoryLedger,
        provider: "LLMProvider | None" = None,
    ):
        self.catalog = catalog
        self.history = history
        self.provider = provider

    async def send_message(
        self,
        message: str,
        article_id: int | None = None,
        language: str = "en",
    ) -> ChatMessage:
        """
        Send a user message and get the assistant's response.

        Args:
            message: User's message content
            article_id: Open article, or None for the general conversation
            language: Language for the system prompt

        Returns:
            The assistant's response message

        Raises:
            HTTPException: If the message is empty, the article is unknown,
                no provider is configured, or the provider fails
        """
        message = message.strip()
        if not message:
            raise HTTPException(status_code=400, detail="Message cannot be empty")

        if not self.provider:
            raise HTTPException(
                status_code=503,
                detail="Chat unavailable: LLM provider not configured"
            )

        if article_id is not None:
            article = self.catalog.get_by_id(article_id)
            if not article:
                raise HTTPException(status_code=404, detail="Article not found")
            system_prompt = article_mode_prompt(article, language)
        else:
            system_prompt = general_mode_prompt(language)

        previous = self.history.get_messages(article_id)[-MAX_CONTEXT_MESSAGES:]
        turns = [ChatTurn(role=m.role, content=m.content) for m in previous]
        turns.append(ChatTurn(role="user", content=message))

        self.history.add_message("user", message, article_id)

        try:
            response = await self.provider.complete_chat_async(
                messages=turns,
                system_prompt=system_prompt,
                max_tokens=1024,
                temperature=0.7,
            )
        except ProviderError as e:
            logger.error(f"Chat request failed: {e}")
            raise HTTPException(
                status_code=502,
                detail=f"Failed to generate response: {str(e)}"
            )

        return self.history.add_message("assistant", response.text, article_id)

    def get_chat_history(self, article_id: int | None = None) -> list[ChatMessage]:
        """Get stored messages. Returns empty list if no chat exists."""
        return self.history.get_messages(article_id)

    def clear_chat(self, article_id: int | None = None) -> bool:
        """
        Clear one conversation.

        Returns True if it existed.
        """
        return self.history.clear(article_id)
