"""Configuration data models for the translation service.

Each dataclass mirrors one section of the INI file. Field names are the INI keys and
default values double as type hints for the loader's value coercion.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Config",
    # "General",
    # "Server",
    # "Translation",
]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""
    LOG_LEVEL: str = "INFO"


@dataclass
class Server:
    HOST: str = "127.0.0.1"
    PORT: int = 5000


@dataclass
class Translation:
    PROVIDERS: list[str] = field(default_factory=lambda: ["libretranslate", "mymemory"])
    TIMEOUT: float = 10.0
    BATCH_DELAY: float = 0.1
    USER_AGENT: str = "InfoMed-QRSystem/1.0"
    SOURCE_LANGUAGE: str = "en"
    LIBRETRANSLATE_URL: str = "https://libretranslate.de/translate"
    MYMEMORY_URL: str = "https://api.mymemory.translated.net/get"


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    SERVER: Server = field(default_factory=Server)
    TRANSLATION: Translation = field(default_factory=Translation)
