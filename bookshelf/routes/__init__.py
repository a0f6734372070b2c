"""
API route modules.
"""

from .articles import router as articles_router
from .chat import router as chat_router
from .misc import router as misc_router
from .reading import router as reading_router

__all__ = [
    "articles_router",
    "chat_router",
    "misc_router",
    "reading_router",
]
