"""Models for translation-related data.

Defines the request/result pair exchanged with the translation manager, the language
registry entry, and the outcome variants returned by individual providers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

from utils.string_utils import StringUtils

__all__: list[str] = [
    "Failure",
    "LanguageEntry",
    "ProviderOutcome",
    "Skipped",
    "Success",
    "TranslationRequest",
    "TranslationResult",
]


@dataclass(frozen=True)
class TranslationRequest:
    """A single text to translate.

    Attributes:
        text (str): Source text as received from the caller.
        target_lang (str): ISO 639-1 target language code.
    """

    text: str
    target_lang: str

    @property
    def is_blank(self) -> bool:
        return StringUtils.is_blank(self.text)

    @property
    def is_identity(self) -> bool:
        """True when no provider call is needed: blank text or an English target."""
        return self.target_lang == "en" or self.is_blank


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TranslationResult(DataClassJsonMixin):
    """What the manager hands back for one text.

    Attributes:
        text (str): Translated text, or the original text when nothing could be translated.
        used_fallback (bool): True when `text` is the original because every provider failed.
        provider (str | None): Name of the provider that produced `text`, if any.
    """

    text: str
    used_fallback: bool = False
    provider: str | None = None


@dataclass_json
@dataclass(frozen=True)
class LanguageEntry(DataClassJsonMixin):
    """A supported language.

    Attributes:
        code (str): ISO 639-1 code.
        name (str): English display name.
    """

    code: str
    name: str


@dataclass(frozen=True)
class Success:
    """The provider returned usable translated text."""

    text: str

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """The provider call failed or returned nothing usable."""

    reason: str

    @property
    def is_success(self) -> bool:
        return False


@dataclass(frozen=True)
class Skipped:
    """The provider was not called (e.g. disabled in configuration)."""

    reason: str = ""

    @property
    def is_success(self) -> bool:
        return False


ProviderOutcome: TypeAlias = Success | Failure | Skipped
