"""Data models for translation provider API payloads."""

from __future__ import annotations

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin, LetterCase, dataclass_json

__all__: list[str] = ["LibreTranslateRequest", "LibreTranslateResponse", "MyMemoryData", "MyMemoryResponse"]


@dataclass_json
@dataclass
class LibreTranslateRequest(DataClassJsonMixin):
    """Request body for the LibreTranslate /translate endpoint."""

    q: str
    target: str
    source: str = "auto"
    format: str = "text"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class LibreTranslateResponse(DataClassJsonMixin):
    """Response body of the LibreTranslate /translate endpoint."""

    translated_text: str | None = None
    error: str | None = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class MyMemoryData(DataClassJsonMixin):
    translated_text: str | None = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class MyMemoryResponse(DataClassJsonMixin):
    """Response body of the MyMemory /get endpoint.

    `response_status` is an integer on success but the service sends error codes as strings,
    so both are accepted and compared after conversion.
    """

    response_status: int | str | None = None
    response_details: str | None = None
    response_data: MyMemoryData | None = None

    @property
    def is_ok(self) -> bool:
        return str(self.response_status).strip() == "200"
