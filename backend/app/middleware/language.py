"""Accept-Language negotiation for report labels."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from backend.app.core.config import settings
from backend.app.services.export_i18n import SUPPORTED_LANGUAGES


class LanguageMiddleware(BaseHTTPMiddleware):
    """Resolve the report language once per request.

    The choice lands on ``request.state.language`` for the ``get_language``
    dependency and is echoed in ``Content-Language``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        language = negotiate_language(request.headers.get("Accept-Language", ""))
        request.state.language = language

        response = await call_next(request)
        response.headers["Content-Language"] = language
        return response


def _quality(params: list[str]) -> float:
    for param in params:
        key, _, value = param.strip().partition("=")
        if key.strip().lower() == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


def negotiate_language(header: str) -> str:
    """Highest-weighted supported language in *header*; ties keep header order.

    ``sw-KE`` counts as ``sw``. Entries with ``q=0`` are refused.
    """
    candidates: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        tag, *params = part.split(";")
        primary = tag.strip().lower().split("-")[0]
        if primary not in SUPPORTED_LANGUAGES:
            continue
        q = _quality(params)
        if q > 0:
            candidates.append((-q, position, primary))
    if not candidates:
        return settings.DEFAULT_LANGUAGE
    return min(candidates)[2]
