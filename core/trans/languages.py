"""Languages offered to clients for record translation."""

from __future__ import annotations

from typing import Final

from models.translation_models import LanguageEntry

__all__: list[str] = ["SUPPORTED_LANGUAGES", "find_language", "list_supported_languages"]

SUPPORTED_LANGUAGES: Final[tuple[LanguageEntry, ...]] = tuple(
    LanguageEntry(code=code, name=name)
    for code, name in (
        ("en", "English"),
        ("es", "Spanish"),
        ("fr", "French"),
        ("de", "German"),
        ("it", "Italian"),
        ("pt", "Portuguese"),
        ("ru", "Russian"),
        ("ja", "Japanese"),
        ("ko", "Korean"),
        ("zh", "Chinese"),
        ("hi", "Hindi"),
        ("ar", "Arabic"),
        ("tr", "Turkish"),
        ("pl", "Polish"),
        ("nl", "Dutch"),
        ("sv", "Swedish"),
        ("da", "Danish"),
        ("no", "Norwegian"),
        ("fi", "Finnish"),
        ("cs", "Czech"),
        ("el", "Greek"),
        ("he", "Hebrew"),
        ("th", "Thai"),
        ("vi", "Vietnamese"),
        ("id", "Indonesian"),
        ("ms", "Malay"),
        ("tl", "Filipino"),
        ("sw", "Swahili"),
        ("bn", "Bengali"),
        ("ta", "Tamil"),
        ("te", "Telugu"),
        ("mr", "Marathi"),
        ("gu", "Gujarati"),
        ("kn", "Kannada"),
        ("ml", "Malayalam"),
        ("pa", "Punjabi"),
        ("ur", "Urdu"),
    )
)

_BY_CODE: Final[dict[str, LanguageEntry]] = {entry.code: entry for entry in SUPPORTED_LANGUAGES}


def list_supported_languages() -> tuple[LanguageEntry, ...]:
    return SUPPORTED_LANGUAGES


def find_language(code: str) -> LanguageEntry | None:
    """Look up a language by code, ignoring case and surrounding whitespace."""
    return _BY_CODE.get(code.strip().lower())
