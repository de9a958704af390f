"""HTTP routes for the translation API.

Routes:
    POST /api/translate            translate one text
    POST /api/translate/batch      translate a list of texts, order preserved
    GET  /api/translate/languages  list supported languages
    GET  /api/health               liveness check

Responses use the envelope `{"success": bool, "data": ...}` or
`{"success": false, "message": ...}` on errors.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Final

from aiohttp import web

from core.trans.languages import list_supported_languages
from core.trans.manager import TransManager
from core.version import VERSION
from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils

if TYPE_CHECKING:
    import logging

    from models.config_models import Config

__all__: list[str] = ["TRANS_MANAGER_KEY", "create_app", "routes"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_TARGET_LANGUAGE: Final[str] = "en"

TRANS_MANAGER_KEY: Final[web.AppKey[TransManager]] = web.AppKey("trans_manager", TransManager)

routes = web.RouteTableDef()


class _BadRequestError(Exception):
    """The request body is unusable; the message is returned to the client."""


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"success": False, "message": message}, status=status)


async def _read_json(request: web.Request) -> dict[str, Any]:
    try:
        body: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        logger.debug("Invalid JSON body: %s", err)
        msg = "Invalid JSON body"
        raise _BadRequestError(msg) from err
    if not isinstance(body, dict):
        msg = "Invalid JSON body"
        raise _BadRequestError(msg)
    return body


def _target_language(body: dict[str, Any]) -> str:
    """Return `targetLang`, defaulting to English only when the key is absent."""
    return StringUtils.ensure_str(body.get("targetLang", DEFAULT_TARGET_LANGUAGE))


@routes.post("/api/translate")
async def translate(request: web.Request) -> web.Response:
    """Translate one text."""
    try:
        body: dict[str, Any] = await _read_json(request)
    except _BadRequestError as err:
        return _error(400, str(err))

    text: Any = body.get("text")
    if not text:
        return _error(400, "Text is required for translation")
    tgt_lang: str = _target_language(body)

    manager: TransManager = request.app[TRANS_MANAGER_KEY]
    try:
        translated: str = await manager.translate_one(text, tgt_lang)
    except Exception:
        logger.exception("Translation error")
        return _error(500, "Server error during translation")

    return web.json_response(
        {
            "success": True,
            "data": {"originalText": text, "translatedText": translated, "targetLanguage": tgt_lang},
        }
    )


@routes.post("/api/translate/batch")
async def translate_batch(request: web.Request) -> web.Response:
    """Translate several texts to one language."""
    try:
        body: dict[str, Any] = await _read_json(request)
    except _BadRequestError as err:
        return _error(400, str(err))

    texts: Any = body.get("texts")
    if not isinstance(texts, list):
        return _error(400, "Texts array is required for batch translation")
    tgt_lang: str = _target_language(body)

    manager: TransManager = request.app[TRANS_MANAGER_KEY]
    try:
        translated: list[str] = await manager.translate_batch(texts, tgt_lang)
    except Exception:
        logger.exception("Batch translation error")
        return _error(500, "Server error during batch translation")

    return web.json_response(
        {
            "success": True,
            "data": {"originalTexts": texts, "translatedTexts": translated, "targetLanguage": tgt_lang},
        }
    )


@routes.get("/api/translate/languages")
async def supported_languages(request: web.Request) -> web.Response:
    _ = request
    languages: list[dict[str, Any]] = [entry.to_dict() for entry in list_supported_languages()]
    return web.json_response({"success": True, "data": {"languages": languages}})


@routes.get("/api/health")
async def health(request: web.Request) -> web.Response:
    _ = request
    return web.json_response({"status": "ok", "version": VERSION})


async def _on_startup(app: web.Application) -> None:
    await app[TRANS_MANAGER_KEY].initialize()


async def _on_cleanup(app: web.Application) -> None:
    await app[TRANS_MANAGER_KEY].shutdown()


def create_app(config: Config, manager: TransManager | None = None) -> web.Application:
    """Build the aiohttp application.

    Args:
        config (Config): Service configuration.
        manager (TransManager | None): Translation manager to serve. Created from `config` when omitted.

    Returns:
        web.Application: Application with routes and startup/cleanup hooks registered.
    """
    app = web.Application()
    app[TRANS_MANAGER_KEY] = manager or TransManager(config)
    app.add_routes(routes)
    app.on_startup.append(_on_startup)
    app.on_cleanup.append(_on_cleanup)
    return app
