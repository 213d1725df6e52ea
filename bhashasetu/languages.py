from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Language:
    key: str
    name: str
    locale: str


LANGUAGES: dict[str, Language] = {
    lang.key: lang
    for lang in (
        Language("english", "English", "en-US"),
        Language("hindi", "Hindi", "hi-IN"),
        Language("tamil", "Tamil", "ta-IN"),
        Language("bengali", "Bengali", "bn-IN"),
        Language("telugu", "Telugu", "te-IN"),
        Language("marathi", "Marathi", "mr-IN"),
        Language("gujarati", "Gujarati", "gu-IN"),
        Language("kannada", "Kannada", "kn-IN"),
        Language("malayalam", "Malayalam", "ml-IN"),
        Language("punjabi", "Punjabi", "pa-IN"),
        Language("urdu", "Urdu", "ur-IN"),
    )
}
LANGUAGE_KEYS: tuple[str, ...] = tuple(LANGUAGES.keys())

# Recognized tokens are English words.
SOURCE_LANGUAGE = LANGUAGES["english"]
DEFAULT_LANGUAGE = SOURCE_LANGUAGE


def resolve_language(value: "str | Language | None") -> Optional[Language]:
    """
    Map a key ("tamil") or display name ("Tamil") to a Language.
    Blank input means "unset" and returns None; anything else unknown raises.
    """
    if value is None:
        return None
    if isinstance(value, Language):
        return value
    text = str(value).strip().lower()
    if not text:
        return None
    if text in LANGUAGES:
        return LANGUAGES[text]
    for lang in LANGUAGES.values():
        if lang.name.lower() == text or lang.locale.lower() == text:
            return lang
    raise ValueError(f"Unknown target language: {value}")


def needs_translation(language: Optional[Language]) -> bool:
    return language is not None and language.key != SOURCE_LANGUAGE.key


def speech_locale(language: Optional[Language]) -> str:
    return (language or DEFAULT_LANGUAGE).locale
