"""
Domain models - dataclasses for catalog and reading-session entities.
"""

from dataclasses import dataclass, field
from enum import Enum


class DifficultyLevel(str, Enum):
    """Difficulty tier of an article's content."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# Introductory tier used when a requested tier has no text
BASE_DIFFICULTY = DifficultyLevel.BEGINNER.value


class Language(str, Enum):
    """Supported languages in the application."""
    EN = "en"
    TR = "tr"


DEFAULT_LANGUAGE = Language.EN.value


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class ArticleTranslation:
    """Per-language override bundle; every field is optional."""
    title: str | None = None
    author: str | None = None
    category: str | None = None
    content: dict[str, str] = field(default_factory=dict)
    summary: str | None = None


@dataclass(frozen=True)
class Article:
    id: int
    title: str
    author: str
    date: str
    category: str
    cover_color: str
    content: dict[str, str]
    translations: dict[str, ArticleTranslation] = field(default_factory=dict)

    def translation(self, language: str) -> ArticleTranslation | None:
        """Translation bundle for a non-default language, if present."""
        if language == DEFAULT_LANGUAGE:
            return None
        return self.translations.get(language)


@dataclass
class Page:
    """One page of a paginated article list."""
    articles: list[Article]
    current_page: int
    total_pages: int
    total_articles: int


@dataclass
class ReadingHistoryEntry:
    article_id: int
    last_read_date: str
    time_spent_seconds: int
    last_difficulty_level: str
    progress: int  # 0-100 percentage


@dataclass
class ChatMessage:
    id: str
    role: str  # user | assistant
    content: str
    timestamp: int  # epoch milliseconds
    article_id: int | None = None


@dataclass
class UserStatistics:
    total_articles_read: int
    total_time_spent_seconds: int
    favorite_count: int
    last_read_date: str | None
    articles_read_by_difficulty: dict[str, int]
