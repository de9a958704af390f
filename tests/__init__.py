"""Unit tests for the InfoMed QR translation service.

Tests use pytest with asyncio support. Provider calls are replaced with fakes, and HTTP
behaviour is exercised against local aiohttp test servers.
"""
