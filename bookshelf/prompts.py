"""
System prompts for the chat assistant.

General mode helps with using the app; article mode answers questions about
the article that is currently open. Both come in every supported language,
with English as the fallback.
"""

from .models import Article, DifficultyLevel, Language
from .query import (
    get_localized_author,
    get_localized_category,
    get_localized_content,
    get_localized_title,
)

MAX_CONTENT_CHARS = 16000

GENERAL_PROMPTS = {
    Language.EN.value: """You are the assistant of an online science library presented as a bookshelf.

Help users ONLY with how to use this website:
- Search: the search bar matches article titles, authors or article text.
- Bookshelf: click a book to open an article.
- Difficulty levels: each article can be read as Beginner or Advanced.
- Favorites: the heart icon adds an article to favorites.
- Reading history: tracks which articles were read and time spent.
- Language: English and Turkish are available.
- Theme: light and dark themes can be toggled.

Rules:
1. Do not summarize or explain article contents here; ask the user to open the article and chat there.
2. Politely decline questions unrelated to using the site.
3. Keep answers short, friendly and clear.""",

    Language.TR.value: """Kitaplık olarak sunulan çevrimiçi bir bilim kütüphanesinin asistanısın.

Kullanıcılara SADECE bu web sitesinin nasıl kullanılacağı konusunda yardım et:
- Arama: arama çubuğu makale başlıkları, yazarlar veya makale metni içinde arar.
- Kitaplık: bir makaleyi açmak için kitaba tıklanır.
- Zorluk seviyeleri: her makale Başlangıç veya İleri seviyede okunabilir.
- Favoriler: kalp ikonu makaleyi favorilere ekler.
- Okuma geçmişi: okunan makaleleri ve harcanan süreyi takip eder.
- Dil: Türkçe ve İngilizce seçenekleri vardır.
- Tema: açık ve koyu tema arasında geçiş yapılabilir.

Kurallar:
1. Makale içeriklerini burada özetleme; kullanıcıdan makaleyi açıp orada sohbet etmesini iste.
2. Site kullanımı dışındaki sorulara nazikçe cevap verme.
3. Kısa, dostça ve net cevaplar ver.""",
}

ARTICLE_PROMPTS = {
    Language.EN.value: """You are the assistant of an online science library. The user is reading an article and wants to discuss it.

CURRENTLY OPEN ARTICLE:
{context}

Rules:
1. Use ONLY information from this article. If a question is outside its scope, say so politely.
2. You may quote the article; put quotes in "...".
3. Be scientific but understandable; explain complex terms.
4. Keep answers short and friendly.""",

    Language.TR.value: """Çevrimiçi bir bilim kütüphanesinin asistanısın. Kullanıcı bir makale okuyor ve bu makale hakkında konuşmak istiyor.

AÇIK OLAN MAKALE:
{context}

Kurallar:
1. SADECE bu makaledeki bilgileri kullan. Soru makalenin kapsamı dışındaysa nazikçe belirt.
2. Makaleden alıntı yapabilirsin; alıntıları "..." içinde göster.
3. Bilimsel ama anlaşılır ol; karmaşık terimleri açıkla.
4. Kısa ve dostça cevaplar ver.""",
}

_CONTEXT_LABELS = {
    Language.EN.value: ("Title", "Author", "Date", "Category", "Content ({tier})"),
    Language.TR.value: ("Başlık", "Yazar", "Tarih", "Kategori", "İçerik ({tier})"),
}


def _truncate_content(content: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """Truncate content to fit within context limits."""
    if not content or len(content) <= max_chars:
        return content or ""

    # Try to truncate at a sentence boundary
    truncated = content[:max_chars]
    last_period = truncated.rfind(". ")
    if last_period > max_chars * 0.8:  # Only if we keep at least 80%
        truncated = truncated[:last_period + 1]

    return truncated + "\n\n[Content truncated for length]"


def _prompt_language(language: str) -> str:
    return language if language in GENERAL_PROMPTS else Language.EN.value


def build_article_context(article: Article, language: str) -> str:
    """Localized metadata plus the beginner and advanced texts."""
    title, author, date, category, content = _CONTEXT_LABELS[_prompt_language(language)]
    parts = [
        f"{title}: {get_localized_title(article, language)}",
        f"{author}: {get_localized_author(article, language)}",
        f"{date}: {article.date}",
        f"{category}: {get_localized_category(article, language)}",
    ]

    for tier in (DifficultyLevel.BEGINNER.value, DifficultyLevel.ADVANCED.value):
        text = get_localized_content(article, language, tier)
        parts.append(f"\n{content.format(tier=tier)}:\n{_truncate_content(text)}")

    return "\n".join(parts)


def general_mode_prompt(language: str) -> str:
    return GENERAL_PROMPTS[_prompt_language(language)]


def article_mode_prompt(article: Article, language: str) -> str:
    template = ARTICLE_PROMPTS[_prompt_language(language)]
    return template.format(context=build_article_context(article, language))
