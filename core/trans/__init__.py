"""Translation pipeline.

This package provides best-effort translation through an ordered chain of free
translation providers, with batch sequencing and a static supported-language registry.
"""

from core.trans.languages import SUPPORTED_LANGUAGES, find_language, list_supported_languages
from core.trans.manager import TransManager
from core.trans.providers import PROVIDER_CHAIN, Provider

__all__: list[str] = [
    "PROVIDER_CHAIN",
    "SUPPORTED_LANGUAGES",
    "Provider",
    "TransManager",
    "find_language",
    "list_supported_languages",
]
