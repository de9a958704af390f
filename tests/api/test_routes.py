from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, cast
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from api.routes import TRANS_MANAGER_KEY, create_app
from core.trans.manager import TransManager
from core.trans.providers import Provider
from core.version import VERSION
from models.translation_models import Failure, ProviderOutcome, Success

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from models.config_models import Config


async def _prefix_translation(http: Any, text: str, tgt_lang: str, settings: Any) -> ProviderOutcome:
    _ = http, settings
    if text == "untranslatable":
        return Failure(reason="no match")
    return Success(text=f"[{tgt_lang}] {text}")


@pytest.fixture
def config() -> Config:
    return cast(
        "Config",
        SimpleNamespace(
            TRANSLATION=SimpleNamespace(
                PROVIDERS=["libretranslate"],
                USER_AGENT="InfoMed-QRSystem/1.0",
                BATCH_DELAY=0.0,
                TIMEOUT=10.0,
            )
        ),
    )


@pytest.fixture
def manager(config: Config) -> TransManager:
    trans_manager = TransManager(config)
    trans_manager.providers = (Provider(name="libretranslate", call=_prefix_translation),)
    return trans_manager


@pytest_asyncio.fixture
async def client(config: Config, manager: TransManager) -> AsyncIterator[TestClient]:
    app = create_app(config, manager)
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


@pytest.mark.asyncio
async def test_translate_returns_envelope(client: TestClient) -> None:
    response = await client.post("/api/translate", json={"text": "Take twice daily", "targetLang": "es"})

    assert response.status == 200
    assert await response.json() == {
        "success": True,
        "data": {
            "originalText": "Take twice daily",
            "translatedText": "[es] Take twice daily",
            "targetLanguage": "es",
        },
    }


@pytest.mark.asyncio
async def test_translate_defaults_to_english(client: TestClient) -> None:
    response = await client.post("/api/translate", json={"text": "Take twice daily"})

    payload: dict[str, Any] = await response.json()
    assert payload["data"]["translatedText"] == "Take twice daily"
    assert payload["data"]["targetLanguage"] == "en"


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["", None])
async def test_explicit_empty_target_is_not_defaulted(client: TestClient, target: str | None) -> None:
    single = await client.post("/api/translate", json={"text": "Take twice daily", "targetLang": target})
    batch = await client.post("/api/translate/batch", json={"texts": ["Aspirin"], "targetLang": target})

    single_payload: dict[str, Any] = await single.json()
    batch_payload: dict[str, Any] = await batch.json()
    assert single_payload["data"]["targetLanguage"] == ""
    assert single_payload["data"]["translatedText"] == "[] Take twice daily"
    assert batch_payload["data"]["targetLanguage"] == ""
    assert batch_payload["data"]["translatedTexts"] == ["[] Aspirin"]


@pytest.mark.asyncio
async def test_translate_failure_returns_original_text(client: TestClient) -> None:
    response = await client.post("/api/translate", json={"text": "untranslatable", "targetLang": "fr"})

    assert response.status == 200
    payload: dict[str, Any] = await response.json()
    assert payload["data"]["translatedText"] == "untranslatable"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"text": ""}, {"text": None, "targetLang": "es"}])
async def test_translate_requires_text(client: TestClient, body: dict[str, Any]) -> None:
    response = await client.post("/api/translate", json=body)

    assert response.status == 400
    assert await response.json() == {"success": False, "message": "Text is required for translation"}


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["{not json", "[1, 2]"])
async def test_translate_rejects_invalid_json(client: TestClient, raw: str) -> None:
    response = await client.post("/api/translate", data=raw, headers={"Content-Type": "application/json"})

    assert response.status == 400
    assert await response.json() == {"success": False, "message": "Invalid JSON body"}


@pytest.mark.asyncio
async def test_translate_unexpected_error_is_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    manager: TransManager = client.app[TRANS_MANAGER_KEY]
    monkeypatch.setattr(manager, "translate_one", AsyncMock(side_effect=RuntimeError("boom")))

    response = await client.post("/api/translate", json={"text": "Hello", "targetLang": "de"})

    assert response.status == 500
    assert await response.json() == {"success": False, "message": "Server error during translation"}


@pytest.mark.asyncio
async def test_batch_translates_in_order(client: TestClient) -> None:
    texts: list[str] = ["Aspirin", "untranslatable", "", "Ibuprofen"]

    response = await client.post("/api/translate/batch", json={"texts": texts, "targetLang": "it"})

    assert response.status == 200
    assert await response.json() == {
        "success": True,
        "data": {
            "originalTexts": texts,
            "translatedTexts": ["[it] Aspirin", "untranslatable", "", "[it] Ibuprofen"],
            "targetLanguage": "it",
        },
    }


@pytest.mark.asyncio
async def test_batch_empty_list(client: TestClient) -> None:
    response = await client.post("/api/translate/batch", json={"texts": [], "targetLang": "it"})

    payload: dict[str, Any] = await response.json()
    assert payload["data"]["translatedTexts"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"texts": "Aspirin"}, {"texts": None, "targetLang": "es"}])
async def test_batch_requires_list(client: TestClient, body: dict[str, Any]) -> None:
    response = await client.post("/api/translate/batch", json=body)

    assert response.status == 400
    assert await response.json() == {"success": False, "message": "Texts array is required for batch translation"}


@pytest.mark.asyncio
async def test_batch_unexpected_error_is_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    manager: TransManager = client.app[TRANS_MANAGER_KEY]
    monkeypatch.setattr(manager, "translate_batch", AsyncMock(side_effect=RuntimeError("boom")))

    response = await client.post("/api/translate/batch", json={"texts": ["a"], "targetLang": "de"})

    assert response.status == 500
    assert await response.json() == {"success": False, "message": "Server error during batch translation"}


@pytest.mark.asyncio
async def test_languages_lists_registry(client: TestClient) -> None:
    response = await client.get("/api/translate/languages")

    assert response.status == 200
    payload: dict[str, Any] = await response.json()
    languages: list[dict[str, str]] = payload["data"]["languages"]
    assert payload["success"] is True
    assert len(languages) == 37
    assert languages[0] == {"code": "en", "name": "English"}
    assert {"code": "ur", "name": "Urdu"} in languages


@pytest.mark.asyncio
async def test_health(client: TestClient) -> None:
    response = await client.get("/api/health")

    assert await response.json() == {"status": "ok", "version": VERSION}


@pytest.mark.asyncio
async def test_app_lifecycle_opens_and_closes_session(config: Config, manager: TransManager) -> None:
    app = create_app(config, manager)

    async with TestClient(TestServer(app)):
        assert manager.http.closed is False
    assert manager.http.closed is True
