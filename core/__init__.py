"""Core translation components for the InfoMed QR service.

This package contains the provider fallback chain, the translation manager and the
supported language registry.
"""

from core.version import VERSION

__all__: list[str] = ["VERSION"]
