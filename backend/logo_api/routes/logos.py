"""
Logo Designer Backend — Mobile Logo Route Handlers
====================================================

What:  The read endpoints mobile clients use to render logos.
Why:   Current app versions read the canonical document; old versions still
       in the field read the legacy one.
How:   Resolve language, parse paging parameters, delegate to the
       DocumentAssembler and wrap the result in the success envelope.
       Errors are raised as LogoAPIError subclasses and turned into failure
       envelopes by the handlers in main.py.

Endpoints:
    GET /api/logo/mobile                   paginated canonical documents
    GET /api/logo/mobile/legacy            paginated legacy documents
    GET /api/logo/{logo_id}/mobile         one canonical document (?format=legacy
                                           translates the canvas background)
    GET /api/logo/{logo_id}/mobile/legacy  one legacy document

`logo_id` is declared as a plain string: malformed ids must produce the
localized 400 envelope, not FastAPI's 422.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from logo_api.config import settings
from logo_api.database import get_db_session
from logo_api.middleware.localization import request_language
from logo_api.schemas.envelope import ErrorEnvelope, SuccessEnvelope, document_page, success
from logo_api.services.document_assembler import document_assembler

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api/logo", tags=["Mobile Logos"])

_ERRORS = {
    400: {"description": "Malformed logo id or legacy format unsupported", "model": ErrorEnvelope},
    404: {"description": "Logo not found", "model": ErrorEnvelope},
    500: {"description": "Server error", "model": ErrorEnvelope},
}


def clamp_int(value: Optional[str], default: int, minimum: int, maximum: Optional[int] = None) -> int:
    """
    Parse a query value as an int and clamp it into range. Missing or
    non-numeric values give `default`.

    Example:
        >>> clamp_int("500", 20, 1, 100)
        100
        >>> clamp_int("abc", 20, 1, 100)
        20
    """
    try:
        number = int(str(value).strip()) if value is not None else default
    except ValueError:
        number = default
    number = max(minimum, number)
    if maximum is not None:
        number = min(maximum, number)
    return number


def _paging(page: Optional[str], limit: Optional[str]):
    return (
        clamp_int(page, 1, 1),
        clamp_int(
            limit,
            settings.mobile_page_size_default,
            1,
            settings.mobile_page_size_max,
        ),
    )


async def _list(
    request: Request, db: AsyncSession, page: Optional[str], limit: Optional[str], legacy: bool
) -> SuccessEnvelope:
    lang = request_language(request)
    page_number, page_size = _paging(page, limit)
    documents, total = await document_assembler.list_documents(
        db, page=page_number, limit=page_size, lang=lang, legacy=legacy
    )
    body = document_page(documents, page_number, page_size, total)
    if not documents:
        key = "noLogos"
    else:
        key = "logosFetchedLegacy" if legacy else "logosFetched"
    return success(lang, key, data=body.model_dump())


@router.get(
    "/mobile",
    response_model=SuccessEnvelope,
    responses={500: _ERRORS[500]},
    summary="List logos as mobile documents",
)
async def list_mobile_logos(
    request: Request,
    page: Optional[str] = Query(default=None, description="Page number (>= 1, default 1)"),
    limit: Optional[str] = Query(default=None, description="Page size (1-100, default 20)"),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessEnvelope:
    """Newest logos first, localized per item into the request language."""
    return await _list(request, db, page, limit, legacy=False)


@router.get(
    "/mobile/legacy",
    response_model=SuccessEnvelope,
    responses={500: _ERRORS[500]},
    summary="List legacy-capable logos in legacy format",
)
async def list_mobile_logos_legacy(
    request: Request,
    page: Optional[str] = Query(default=None, description="Page number (>= 1, default 1)"),
    limit: Optional[str] = Query(default=None, description="Page size (1-100, default 20)"),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessEnvelope:
    """Only logos with `legacy_format_supported` are listed."""
    return await _list(request, db, page, limit, legacy=True)


@router.get(
    "/{logo_id}/mobile",
    response_model=SuccessEnvelope,
    responses=_ERRORS,
    summary="Get one logo as a mobile document",
)
async def get_mobile_logo(
    logo_id: str,
    request: Request,
    format: Optional[str] = Query(
        default=None, description="'legacy' translates the canvas background"
    ),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessEnvelope:
    lang = request_language(request)
    document = await document_assembler.get_document(
        db, logo_id, lang, want_legacy=(format == "legacy")
    )
    return success(lang, "logoFetched", data=document)


@router.get(
    "/{logo_id}/mobile/legacy",
    response_model=SuccessEnvelope,
    responses=_ERRORS,
    summary="Get one logo in the legacy mobile format",
)
async def get_mobile_logo_legacy(
    logo_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessEnvelope:
    """
    Legacy document for old app versions.

    Fails with 400 when the id is malformed (before any query) or when the
    logo has `legacy_format_supported = false`.
    """
    lang = request_language(request)
    document = await document_assembler.get_legacy_document(db, logo_id, lang)
    return success(lang, "logoFetchedLegacy", data=document)
