from __future__ import annotations

from typing import Final

__all__: list[str] = ["StringUtils"]

PREVIEW_LENGTH: Final[int] = 50  # Characters of source text included in log messages.


class StringUtils:
    """Small string helpers used by the translation pipeline and the HTTP layer."""

    @staticmethod
    def ensure_str(value: object) -> str:
        """Return the value as a string, or an empty string for None.

        Whitespace is preserved; callers decide whether trimming is appropriate.

        Args:
            value (object): The value to convert.

        Returns:
            str: The value as a string.
        """
        if not isinstance(value, str):
            return str(value) if value is not None else ""
        return value

    @staticmethod
    def is_blank(value: str | None) -> bool:
        """Return True for None, the empty string, or whitespace-only strings."""
        return value is None or value.strip() == ""

    @staticmethod
    def preview(value: str, limit: int = PREVIEW_LENGTH) -> str:
        """Shorten text for log output.

        Args:
            value (str): Text to shorten.
            limit (int): Maximum number of characters kept. Zero or negative keeps everything.

        Returns:
            str: The text, cut to `limit` characters with "..." appended when shortened.
        """
        value = StringUtils.ensure_str(value)
        if limit <= 0 or len(value) <= limit:
            return value
        return f"{value[:limit]}..."
