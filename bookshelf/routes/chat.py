"""
Chat routes: the assistant panel, in general or article mode.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..catalog import ArticleCatalog
from ..config import get_catalog
from ..exceptions import require_article
from ..schemas import (
    ChatHistoryResponse,
    ChatMessageRequest,
    ChatMessageResponse,
)
from ..services import ChatServiceDep

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("")
async def get_chat_history(
    chat_service: ChatServiceDep,
    article_id: int | None = None,
) -> ChatHistoryResponse:
    """Get chat history for an article, or the general conversation.

    Returns empty list if no chat exists yet.
    """
    messages = chat_service.get_chat_history(article_id)
    return ChatHistoryResponse(
        article_id=article_id,
        messages=[ChatMessageResponse.from_message(m) for m in messages],
        has_chat=len(messages) > 0,
    )


@router.post("")
async def send_message(
    request: ChatMessageRequest,
    chat_service: ChatServiceDep,
) -> ChatMessageResponse:
    """Send a message to the assistant.

    Returns the assistant's response.
    """
    response_message = await chat_service.send_message(
        message=request.message,
        article_id=request.article_id,
        language=request.language.value,
    )
    return ChatMessageResponse.from_message(response_message)


@router.delete("")
async def clear_chat(
    chat_service: ChatServiceDep,
    catalog: Annotated[ArticleCatalog, Depends(get_catalog)],
    article_id: int | None = None,
) -> dict:
    """Clear one conversation.

    Returns success status.
    """
    if article_id is not None:
        require_article(catalog.get_by_id(article_id))

    deleted = chat_service.clear_chat(article_id)

    return {
        "success": True,
        "deleted": deleted,
        "message": "Chat history cleared" if deleted else "No chat history to clear"
    }
