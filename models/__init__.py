"""Data models for the translation service.

This package contains dataclass definitions for configuration and translation data.
"""

from __future__ import annotations

from models.config_models import Config
from models.translation_models import (
    Failure,
    LanguageEntry,
    ProviderOutcome,
    Skipped,
    Success,
    TranslationRequest,
    TranslationResult,
)

__all__: list[str] = [
    "Config",
    "Failure",
    "LanguageEntry",
    "ProviderOutcome",
    "Skipped",
    "Success",
    "TranslationRequest",
    "TranslationResult",
]
