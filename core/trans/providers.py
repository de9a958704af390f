"""Translation provider adapters.

Each adapter performs exactly one HTTP call to a free translation service and reports
the result as a `ProviderOutcome`. Adapters never raise for transport or response
problems: those become `Failure` values and a warning in the log, so the manager can
move on to the next provider in `PROVIDER_CHAIN`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Protocol, TypeAlias

from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError
from models.provider_models import LibreTranslateRequest, LibreTranslateResponse, MyMemoryResponse
from models.translation_models import Failure, ProviderOutcome, Success
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Awaitable, Callable

    from handlers.async_comm import AsyncHttp

__all__: list[str] = [
    "PROVIDER_CHAIN",
    "Provider",
    "ProviderSettings",
    "libretranslate",
    "mymemory",
    "provider_names",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

# Errors raised while mapping a decoded body onto the payload models.
_PAYLOAD_ERRORS: Final[tuple[type[Exception], ...]] = (KeyError, TypeError, ValueError, AttributeError)


class ProviderSettings(Protocol):
    """The subset of the [TRANSLATION] configuration the adapters read."""

    TIMEOUT: float
    SOURCE_LANGUAGE: str
    LIBRETRANSLATE_URL: str
    MYMEMORY_URL: str


ProviderCall: TypeAlias = "Callable[[AsyncHttp, str, str, ProviderSettings], Awaitable[ProviderOutcome]]"


@dataclass(frozen=True)
class Provider:
    """A named adapter in the fallback chain."""

    name: str
    call: ProviderCall


def _failure(provider: str, reason: str) -> Failure:
    logger.warning("%s translation failed: %s", provider, reason)
    return Failure(reason=reason)


def _translated_text(payload: Any) -> str | None:
    """Return `payload["translatedText"]` when it is a non-blank string.

    The payload models coerce any JSON value into their `str` fields, so the raw value is
    checked before the mapped one is trusted.
    """
    value: Any = payload.get("translatedText") if isinstance(payload, dict) else None
    return value if isinstance(value, str) and value.strip() else None


def _transport_failure(provider: str, err: AsyncCommError) -> Failure:
    if isinstance(err, AsyncCommTimeoutError):
        return _failure(provider, f"timed out ({err})")
    return _failure(provider, str(err))


async def libretranslate(http: AsyncHttp, text: str, tgt_lang: str, settings: ProviderSettings) -> ProviderOutcome:
    """Translate with LibreTranslate.

    The request lets the service detect the source language and asks for plain-text output.
    The translated string is read from `translatedText`.

    Args:
        http (AsyncHttp): HTTP client.
        text (str): Trimmed, non-empty source text.
        tgt_lang (str): Target language code, passed through unchanged.
        settings (ProviderSettings): Endpoint and timeout settings.

    Returns:
        ProviderOutcome: Success with the translated text, or Failure.
    """
    body: dict[str, Any] = LibreTranslateRequest(q=text, target=tgt_lang).to_dict()
    try:
        data: Any = await http.post(url=settings.LIBRETRANSLATE_URL, data=body, total_timeout=settings.TIMEOUT)
    except AsyncCommError as err:
        return _transport_failure("LibreTranslate", err)

    if not isinstance(data, dict):
        return _failure("LibreTranslate", f"unexpected response body: {type(data).__name__}")
    try:
        response: LibreTranslateResponse = LibreTranslateResponse.from_dict(data)
    except _PAYLOAD_ERRORS as err:
        return _failure("LibreTranslate", f"malformed response: {err}")

    translated: str | None = _translated_text(data)
    if translated is None:
        return _failure("LibreTranslate", response.error or "no translated text in response")
    return Success(text=translated)


async def mymemory(http: AsyncHttp, text: str, tgt_lang: str, settings: ProviderSettings) -> ProviderOutcome:
    """Translate with MyMemory.

    Text and language pair travel as query parameters. The service answers HTTP 200 even for
    most errors, so success also requires `responseStatus` 200 and a non-empty
    `responseData.translatedText`.

    Args:
        http (AsyncHttp): HTTP client.
        text (str): Trimmed, non-empty source text.
        tgt_lang (str): Target language code.
        settings (ProviderSettings): Endpoint, source language and timeout settings.

    Returns:
        ProviderOutcome: Success with the translated text, or Failure.
    """
    params: dict[str, str] = {"q": text, "langpair": f"{settings.SOURCE_LANGUAGE}|{tgt_lang}"}
    try:
        data: Any = await http.get(url=settings.MYMEMORY_URL, params=params, total_timeout=settings.TIMEOUT)
    except AsyncCommError as err:
        return _transport_failure("MyMemory", err)

    if not isinstance(data, dict):
        return _failure("MyMemory", f"unexpected response body: {type(data).__name__}")
    try:
        response: MyMemoryResponse = MyMemoryResponse.from_dict(data)
    except _PAYLOAD_ERRORS as err:
        return _failure("MyMemory", f"malformed response: {err}")

    if not response.is_ok:
        return _failure("MyMemory", f"status {response.response_status}: {response.response_details or ''}".strip())
    translated: str | None = _translated_text(data.get("responseData"))
    if translated is None:
        return _failure("MyMemory", "no translated text in response")
    return Success(text=translated)


# Priority order. Later providers are only tried after every earlier one has failed.
PROVIDER_CHAIN: Final[tuple[Provider, ...]] = (
    Provider(name="libretranslate", call=libretranslate),
    Provider(name="mymemory", call=mymemory),
)


def provider_names() -> list[str]:
    return [provider.name for provider in PROVIDER_CHAIN]
