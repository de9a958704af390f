"""HTTP interface of the translation service.

This package exposes the translation pipeline through aiohttp.web routes.
"""

from api.routes import TRANS_MANAGER_KEY, create_app

__all__: list[str] = ["TRANS_MANAGER_KEY", "create_app"]
