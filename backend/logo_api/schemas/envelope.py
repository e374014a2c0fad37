"""
Logo Designer Backend — Response Envelopes
============================================

What:  Pydantic models for the JSON shape every endpoint returns.
Why:   Mobile clients branch on `success` alone and read `language` /
       `direction` to lay out the message, so success and failure share one
       outer shape. A model per envelope also documents it in OpenAPI.

Shapes:
    success: {"success": true,  "message", "language", "direction", "data"}
    failure: {"success": false, "message", "language", "direction"}
    list data: {"data": [document, ...], "pagination": {page, limit, total, pages}}
"""

import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from logo_api.services.localizer import get_message, text_direction


# ══════════════════════════════════════════════════════════════════════════
# Envelopes
# ══════════════════════════════════════════════════════════════════════════


class SuccessEnvelope(BaseModel):
    """Wraps a successful payload with its localized message."""
    success: bool = Field(default=True)
    message: str = Field(description="Localized human-readable message")
    language: str = Field(description="Language the response was localized to")
    direction: str = Field(description="Text direction for `language`: ltr or rtl")
    data: Any = Field(default=None, description="Endpoint payload")


class ErrorEnvelope(BaseModel):
    """
    Returned for every 4xx/5xx produced by this service.

    Example:
        {
            "success": false,
            "message": "الشعار غير موجود",
            "language": "ar",
            "direction": "rtl"
        }
    """
    success: bool = Field(default=False)
    message: str = Field(description="Localized error message")
    language: str
    direction: str
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Debug context; only present when EXPOSE_ERROR_DETAILS is on",
    )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class DocumentPage(BaseModel):
    """One page of mobile documents."""
    data: List[Dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination


class HealthResponse(BaseModel):
    """
    What:  Health check response for load balancers and monitoring.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since application start")


# ══════════════════════════════════════════════════════════════════════════
# Builders
# ══════════════════════════════════════════════════════════════════════════


def success(lang: str, message_key: str, data: Any = None, **params: Any) -> SuccessEnvelope:
    return SuccessEnvelope(
        message=get_message(lang, message_key, **params),
        language=lang,
        direction=text_direction(lang),
        data=data,
    )


def failure(
    lang: str,
    message_key: str,
    details: Optional[Dict[str, Any]] = None,
    **params: Any,
) -> ErrorEnvelope:
    return ErrorEnvelope(
        message=get_message(lang, message_key, **params),
        language=lang,
        direction=text_direction(lang),
        details=details,
    )


def page_count(total: int, limit: int) -> int:
    """ceil(total / limit); zero when there is nothing to page through."""
    if total <= 0 or limit <= 0:
        return 0
    return math.ceil(total / limit)


def document_page(
    documents: List[Dict[str, Any]], page: int, limit: int, total: int
) -> DocumentPage:
    return DocumentPage(
        data=documents,
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=page_count(total, limit)
        ),
    )
