"""
Chat history ledger - recent assistant conversations, one bucket per article.
"""

import logging
import time
import uuid
from typing import Any

from ..models import ChatMessage
from ..storage import StorageBackend
from .base import Ledger

logger = logging.getLogger(__name__)

GENERAL_BUCKET = "general"
DEFAULT_MESSAGE_LIMIT = 10
ROLES = ("user", "assistant")


def bucket_key(article_id: int | None) -> str:
    """Conversation bucket for an article, or the general bucket."""
    return GENERAL_BUCKET if article_id is None else f"article-{article_id}"


def message_to_dict(message: ChatMessage) -> dict:
    return {
        "id": message.id,
        "role": message.role,
        "content": message.content,
        "timestamp": message.timestamp,
        "articleId": message.article_id,
    }


def dict_to_message(data: dict) -> ChatMessage:
    role = data["role"]
    if role not in ROLES:
        raise ValueError(f"Unknown chat role: {role!r}")
    article_id = data.get("articleId")
    return ChatMessage(
        id=str(data["id"]),
        role=role,
        content=str(data["content"]),
        timestamp=int(data["timestamp"]),
        article_id=int(article_id) if article_id is not None else None,
    )


class ChatHistoryLedger(Ledger[dict[str, list[ChatMessage]]]):
    """Bucketed chat messages, keeping only the newest few per bucket."""

    key = "chat-storage"

    def __init__(self, storage: StorageBackend, limit: int = DEFAULT_MESSAGE_LIMIT):
        self.limit = max(1, limit)
        super().__init__(storage)

    def empty(self) -> dict[str, list[ChatMessage]]:
        return {}

    def serialize(self, state: dict[str, list[ChatMessage]]) -> dict[str, list[dict]]:
        return {
            bucket: [message_to_dict(m) for m in messages]
            for bucket, messages in state.items()
        }

    def deserialize(self, data: Any) -> dict[str, list[ChatMessage]]:
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object keyed by bucket, got {type(data).__name__}")

        histories = {}
        for bucket, raw_messages in data.items():
            if not isinstance(raw_messages, list):
                logger.warning(f"Skipping malformed chat bucket {bucket!r}")
                continue
            messages = []
            for raw in raw_messages:
                try:
                    messages.append(dict_to_message(raw))
                except (KeyError, ValueError, TypeError, OverflowError) as e:
                    logger.warning(f"Skipping malformed chat message in {bucket!r}: {e!r}")
            histories[bucket] = messages[-self.limit:]
        return histories

    def add_message(self, role: str, content: str, article_id: int | None = None) -> ChatMessage:
        """Append a message to its bucket, evicting the oldest beyond the limit."""
        if role not in ROLES:
            raise ValueError(f"Unknown chat role: {role!r}")

        message = ChatMessage(
            id=f"msg-{uuid.uuid4().hex[:12]}",
            role=role,
            content=content,
            timestamp=int(time.time() * 1000),
            article_id=article_id,
        )

        key = bucket_key(article_id)
        messages = self._state.get(key, []) + [message]
        self._state[key] = messages[-self.limit:]
        self._save()
        return message

    def get_messages(self, article_id: int | None = None) -> list[ChatMessage]:
        return list(self._state.get(bucket_key(article_id), []))

    def clear(self, article_id: int | None = None) -> bool:
        """Delete one bucket. Returns True if it existed."""
        key = bucket_key(article_id)
        if key not in self._state:
            return False
        del self._state[key]
        self._save()
        return True

    def buckets(self) -> list[str]:
        return list(self._state)
