"""
Logo Designer Backend — Localization Middleware
=================================================

What:  Resolves the response language of every request.
Why:   Messages, bilingual fields, dates and text direction all depend on one
       language value that must be fixed for the whole response, lists
       included.
How:   `?lang=` wins when it names a supported language, then the
       Accept-Language header (q-values honoured), then DEFAULT_LANGUAGE.
       The result goes into a ContextVar and `request.state.language`, and
       is announced in the `Content-Language` response header.
"""

from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from logo_api.config import settings
from logo_api.services.localizer import resolve_request_language

language_var: ContextVar[str] = ContextVar("language", default=settings.default_language)


def request_language(request: Request) -> str:
    """
    The language resolved for `request`.

    Falls back to resolving from the request itself when the middleware has
    not run (exception handlers for errors raised by outer middleware).
    """
    lang = getattr(request.state, "language", None)
    if lang:
        return lang
    return resolve_request_language(
        request.query_params.get("lang"), request.headers.get("accept-language")
    )


class LocalizationMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        lang = resolve_request_language(
            request.query_params.get("lang"), request.headers.get("accept-language")
        )
        request.state.language = lang
        token = language_var.set(lang)
        try:
            response = await call_next(request)
        finally:
            language_var.reset(token)

        response.headers["Content-Language"] = lang
        return response
