"""
Pydantic models for API request/response validation.
"""

from pydantic import BaseModel, Field

from .ledgers import Settings
from .models import (
    Article,
    ChatMessage,
    DifficultyLevel,
    Language,
    Page,
    ReadingHistoryEntry,
    ThemeMode,
    UserStatistics,
)
from .query import (
    available_tiers,
    get_localized_author,
    get_localized_category,
    get_localized_content,
    get_localized_summary,
    get_localized_title,
)


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class ArticleResponse(BaseModel):
    """Article for the bookshelf view, localized."""
    id: int
    title: str
    author: str
    date: str
    category: str
    cover_color: str
    is_favorite: bool = False

    @classmethod
    def from_article(
        cls,
        article: Article,
        language: str,
        is_favorite: bool = False,
    ) -> "ArticleResponse":
        return cls(
            id=article.id,
            title=get_localized_title(article, language),
            author=get_localized_author(article, language),
            date=article.date,
            category=get_localized_category(article, language),
            cover_color=article.cover_color,
            is_favorite=is_favorite,
        )


class ArticleDetailResponse(ArticleResponse):
    """Article with the text for one difficulty tier."""
    language: str
    difficulty: str
    content: str
    summary: str | None = None
    available_difficulties: list[str]

    @classmethod
    def from_article(
        cls,
        article: Article,
        language: str,
        is_favorite: bool = False,
        difficulty: str = DifficultyLevel.BEGINNER.value,
    ) -> "ArticleDetailResponse":
        return cls(
            id=article.id,
            title=get_localized_title(article, language),
            author=get_localized_author(article, language),
            date=article.date,
            category=get_localized_category(article, language),
            cover_color=article.cover_color,
            is_favorite=is_favorite,
            language=language,
            difficulty=difficulty,
            content=get_localized_content(article, language, difficulty),
            summary=get_localized_summary(article, language),
            available_difficulties=available_tiers(article, language),
        )


class ArticlePageResponse(BaseModel):
    """One page of search results."""
    articles: list[ArticleResponse]
    current_page: int
    total_pages: int
    total_articles: int

    @classmethod
    def from_page(cls, page: Page, language: str, favorites: set[int]) -> "ArticlePageResponse":
        return cls(
            articles=[
                ArticleResponse.from_article(a, language, a.id in favorites)
                for a in page.articles
            ],
            current_page=page.current_page,
            total_pages=page.total_pages,
            total_articles=page.total_articles,
        )


class FavoriteResponse(BaseModel):
    article_id: int
    is_favorite: bool


# ─────────────────────────────────────────────────────────────
# Reading Schemas
# ─────────────────────────────────────────────────────────────

class StartReadingRequest(BaseModel):
    difficulty: DifficultyLevel = DifficultyLevel.BEGINNER


class RecordElapsedRequest(BaseModel):
    seconds: int = Field(gt=0)


class ReadingHistoryResponse(BaseModel):
    article_id: int
    last_read_date: str
    time_spent_seconds: int
    last_difficulty_level: str
    progress: int

    @classmethod
    def from_entry(cls, entry: ReadingHistoryEntry) -> "ReadingHistoryResponse":
        return cls(
            article_id=entry.article_id,
            last_read_date=entry.last_read_date,
            time_spent_seconds=entry.time_spent_seconds,
            last_difficulty_level=entry.last_difficulty_level,
            progress=entry.progress,
        )


class ReadingSessionResponse(BaseModel):
    """State of the reading timer after a session change."""
    article_id: int | None
    flushed_seconds: int = 0
    entry: ReadingHistoryResponse | None = None


class UserStatisticsResponse(BaseModel):
    total_articles_read: int
    total_time_spent_seconds: int
    favorite_count: int
    last_read_date: str | None
    articles_read_by_difficulty: dict[str, int]

    @classmethod
    def from_stats(cls, stats: UserStatistics) -> "UserStatisticsResponse":
        return cls(
            total_articles_read=stats.total_articles_read,
            total_time_spent_seconds=stats.total_time_spent_seconds,
            favorite_count=stats.favorite_count,
            last_read_date=stats.last_read_date,
            articles_read_by_difficulty=stats.articles_read_by_difficulty,
        )


# ─────────────────────────────────────────────────────────────
# Chat Schemas
# ─────────────────────────────────────────────────────────────

class ChatMessageRequest(BaseModel):
    """Request to send a chat message."""
    message: str
    article_id: int | None = None
    language: Language = Language.EN


class ChatMessageResponse(BaseModel):
    """A single chat message."""
    id: str
    role: str
    content: str
    timestamp: int
    article_id: int | None = None

    @classmethod
    def from_message(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(
            id=message.id,
            role=message.role,
            content=message.content,
            timestamp=message.timestamp,
            article_id=message.article_id,
        )


class ChatHistoryResponse(BaseModel):
    """Messages of one conversation."""
    article_id: int | None
    messages: list[ChatMessageResponse]
    has_chat: bool


# ─────────────────────────────────────────────────────────────
# Settings Schemas
# ─────────────────────────────────────────────────────────────

class SettingsResponse(BaseModel):
    theme: str
    language: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "SettingsResponse":
        return cls(theme=settings.theme, language=settings.language)


class SettingsUpdateRequest(BaseModel):
    theme: ThemeMode | None = None
    language: Language | None = None
