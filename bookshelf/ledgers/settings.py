"""
Settings ledger - persisted theme and language preferences.
"""

from dataclasses import dataclass, replace
from typing import Any

from ..models import DEFAULT_LANGUAGE, Language, ThemeMode
from .base import Ledger


@dataclass
class Settings:
    theme: str = ThemeMode.LIGHT.value
    language: str = DEFAULT_LANGUAGE


class SettingsLedger(Ledger[Settings]):
    """UI preferences. Unknown persisted values fall back to defaults."""

    key = "settings-storage"

    def empty(self) -> Settings:
        return Settings()

    def serialize(self, state: Settings) -> dict:
        return {"theme": state.theme, "language": state.language}

    def deserialize(self, data: Any) -> Settings:
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")

        settings = Settings()
        if data.get("theme") in {t.value for t in ThemeMode}:
            settings.theme = data["theme"]
        if data.get("language") in {lang.value for lang in Language}:
            settings.language = data["language"]
        return settings

    def current(self) -> Settings:
        """Copy of the current settings."""
        return replace(self._state)

    @property
    def theme(self) -> str:
        return self._state.theme

    @property
    def language(self) -> str:
        return self._state.language

    def toggle_theme(self) -> str:
        """Switch between light and dark. Returns the new theme."""
        if self._state.theme == ThemeMode.LIGHT.value:
            self._state.theme = ThemeMode.DARK.value
        else:
            self._state.theme = ThemeMode.LIGHT.value
        self._save()
        return self._state.theme

    def set_theme(self, theme: ThemeMode | str) -> None:
        self._state.theme = ThemeMode(theme).value
        self._save()

    def set_language(self, language: Language | str) -> None:
        self._state.language = Language(language).value
        self._save()
