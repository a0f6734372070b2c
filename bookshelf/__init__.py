"""
Bookshelf Reader Backend

A FastAPI backend for the bookshelf reading app.
Provides catalog search, favorites, reading history and an AI chat assistant.
"""

__version__ = "1.0.0"
