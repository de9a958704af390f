"""Outbound HTTP for the translation providers.

`AsyncHttp` owns one aiohttp session shared by every provider call. Whatever goes wrong on
the wire (timeouts, refused connections, error statuses, bodies that cannot be decoded)
surfaces as an `AsyncCommError`, so provider adapters only need a single except clause.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Literal, Self, TypeAlias

import aiohttp

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping


__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommInvalidContentTypeError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

HTTPMethod: TypeAlias = Literal["GET", "POST"]


class AsyncCommError(Exception):
    """A provider request failed before a usable body was obtained.

    Attributes:
        status (int | None): HTTP status when the server answered with an error code.
    """

    def __init__(self, msg: str, *, status: int | None = None) -> None:
        self.status: int | None = status
        super().__init__(f"{msg} (HTTP {status})" if status is not None else msg)


class AsyncCommTimeoutError(AsyncCommError):
    """The request did not finish within its timeout."""


class AsyncCommInvalidContentTypeError(AsyncCommError):
    """The response media type has no registered decoder."""


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8")


def _decode_json(raw: bytes) -> Any:
    return json.loads(raw.decode("utf-8"))


class AsyncHttp:
    """aiohttp session wrapper returning decoded response bodies.

    The session is opened lazily inside the running loop, and a closed session is replaced
    on next use, so the instance can serve several `async with` blocks in a row.

    Attributes:
        default_headers (dict[str, str]): Headers sent with every request; per-call headers win.
        content_handlers (dict[str, Callable[[bytes], Any]]): Body decoders keyed by media type.
    """

    def __init__(self, *, default_headers: Mapping[str, str] | None = None) -> None:
        self._session: aiohttp.ClientSession | None = None
        self.default_headers: dict[str, str] = dict(default_headers or {})
        self.content_handlers: dict[str, Callable[[bytes], Any]] = {
            "application/json": _decode_json,
            "text/plain": _decode_text,
            "text/html": _decode_text,
        }

    async def __aenter__(self) -> Self:
        self.initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    def initialize_session(self) -> None:
        """Open a session unless one is already open. Requires a running event loop."""
        if not self.closed:
            return
        self._session = aiohttp.ClientSession(raise_for_status=True)
        logger.debug("HTTP session opened (default headers: %s)", self.default_headers)

    @property
    def session(self) -> aiohttp.ClientSession:
        self.initialize_session()
        assert self._session is not None
        return self._session

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    async def close(self) -> None:
        if self.closed:
            return
        assert self._session is not None
        await self._session.close()
        logger.debug("HTTP session closed")

    async def get(
        self,
        *,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        total_timeout: float = 10.0,
    ) -> Any:
        """GET `url` and return the decoded body.

        Args:
            url (str): Request URL.
            params (Mapping[str, str] | None): Query parameters; aiohttp URL-encodes the values.
            headers (Mapping[str, str] | None): Extra headers for this call.
            total_timeout (float): Seconds before the request is abandoned. Zero or less waits forever.

        Returns:
            Any: dict or list for JSON, str for text, None for an empty body.

        Raises:
            AsyncCommTimeoutError: If the timeout elapsed.
            AsyncCommError: On any other transport or decoding failure.
        """
        return await self._request("GET", url, total_timeout, params=params, headers=headers)

    async def post(
        self,
        *,
        url: str,
        params: Mapping[str, str] | None = None,
        data: Any | None = None,
        headers: Mapping[str, str] | None = None,
        total_timeout: float = 10.0,
    ) -> Any:
        """POST `data` as a JSON body and return the decoded response.

        Raises:
            AsyncCommTimeoutError: If the timeout elapsed.
            AsyncCommError: On any other transport or decoding failure.
        """
        return await self._request("POST", url, total_timeout, params=params, json=data, headers=headers)

    def decode_response(self, content_type: str, raw: bytes) -> Any:
        """Decode `raw` according to the media type in `content_type`.

        Parameters such as charset are ignored; bodies are always read as UTF-8.

        Returns:
            Any: The decoded body, or None for an empty body.

        Raises:
            AsyncCommInvalidContentTypeError: If the media type has no decoder.
            AsyncCommError: If the body does not decode.
        """
        if not raw:
            return None

        media_type: str = content_type.partition(";")[0].strip().lower()
        handler: Callable[[bytes], Any] | None = self.content_handlers.get(media_type)
        if handler is None:
            msg = f"No decoder for Content-Type '{media_type or '<missing>'}'"
            raise AsyncCommInvalidContentTypeError(msg)
        try:
            return handler(raw)
        except ValueError as err:
            # UnicodeDecodeError and JSONDecodeError are both ValueError.
            msg = f"Malformed '{media_type}' response body"
            raise AsyncCommError(msg) from err

    @staticmethod
    def _timeout(total_timeout: float) -> aiohttp.ClientTimeout:
        # Bounds the whole call, connection and TLS setup included.
        return aiohttp.ClientTimeout(total=total_timeout if total_timeout > 0 else None)

    async def _request(self, method: HTTPMethod, url: str, total_timeout: float, **kwargs: Any) -> Any:
        headers: dict[str, str] = {**self.default_headers, **(kwargs.pop("headers", None) or {})}
        logger.debug("%s %s (timeout=%ss)", method, url, total_timeout)

        try:
            async with self.session.request(
                method, url, headers=headers, timeout=self._timeout(total_timeout), **kwargs
            ) as resp:
                raw: bytes = await resp.read()
                return self.decode_response(resp.headers.get("Content-Type", ""), raw)
        except TimeoutError as err:
            msg = f"No response from {url} within {total_timeout}s"
            raise AsyncCommTimeoutError(msg) from err
        except aiohttp.ClientResponseError as err:
            msg = f"{url} answered with an error"
            raise AsyncCommError(msg, status=err.status) from err
        except (aiohttp.ClientError, ConnectionResetError) as err:
            logger.debug("%s %s failed: %r", method, url, err)
            msg = f"Could not reach {url}"
            raise AsyncCommError(msg) from err
