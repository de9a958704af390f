from __future__ import annotations

import pytest

from models.provider_models import LibreTranslateResponse, MyMemoryResponse
from models.translation_models import Failure, Skipped, Success, TranslationRequest, TranslationResult


@pytest.mark.parametrize(
    ("text", "target", "identity"),
    [
        ("Take twice daily", "en", True),
        ("", "es", True),
        ("   ", "fr", True),
        ("Take twice daily", "es", False),
    ],
)
def test_request_identity(text: str, target: str, identity: bool) -> None:
    assert TranslationRequest(text=text, target_lang=target).is_identity is identity


def test_outcome_variants() -> None:
    assert Success(text="hola").is_success is True
    assert Failure(reason="down").is_success is False
    assert Skipped().is_success is False


def test_result_serialises_camel_case() -> None:
    result = TranslationResult(text="hola", used_fallback=False, provider="libretranslate")

    assert result.to_dict() == {"text": "hola", "usedFallback": False, "provider": "libretranslate"}


def test_libretranslate_response_from_camel_case() -> None:
    response = LibreTranslateResponse.from_dict({"translatedText": "Bonjour"})

    assert response.translated_text == "Bonjour"
    assert response.error is None


def test_mymemory_response_nested_payload() -> None:
    response = MyMemoryResponse.from_dict(
        {"responseStatus": 200, "responseDetails": "", "responseData": {"translatedText": "Hola", "match": 1}}
    )

    assert response.is_ok is True
    assert response.response_data is not None
    assert response.response_data.translated_text == "Hola"


def test_mymemory_response_error_status() -> None:
    response = MyMemoryResponse.from_dict({"responseStatus": "403", "responseDetails": "INVALID LANGUAGE PAIR"})

    assert response.is_ok is False
    assert response.response_data is None
