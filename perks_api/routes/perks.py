"""
Perks API — Perk Route Handlers
================================

What:  REST endpoints for the perk collection.
How:   Extracts path/query/body values, delegates to PerkService, wraps the
       result in the response envelope. Errors raised by the service are
       turned into responses by the handlers registered in main.py.

Endpoints:
    GET    /api/perks              list (or exact-title filter when ?title= is sent)
    GET    /api/perks/filter       exact-title filter, title required
    GET    /api/perks/{perk_id}    single perk
    POST   /api/perks              create (201)
    PATCH  /api/perks/{perk_id}    partial update
    PUT    /api/perks/{perk_id}    partial update (same semantics as PATCH)
    DELETE /api/perks/{perk_id}    delete

Bodies are taken as raw JSON so that validation runs inside the service
after its guards, and fails with 400 rather than FastAPI's 422.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from perks_api.database import get_db_session
from perks_api.schemas.perk import (
    DeleteResponse,
    ErrorResponse,
    PerkEnvelope,
    PerkList,
    PerkResponse,
)
from perks_api.services.perk_service import perk_service

router = APIRouter(prefix="/api", tags=["Perks"])


def _envelope(perk) -> PerkEnvelope:
    return PerkEnvelope(perk=PerkResponse.model_validate(perk))


@router.get(
    "/perks",
    response_model=PerkList,
    summary="List perks, newest first",
    description=(
        "Returns every perk ordered by creation time, newest first. "
        "When a `title` query parameter is present the result is restricted "
        "to perks whose title matches it exactly."
    ),
    responses={400: {"description": "Empty title filter", "model": ErrorResponse}},
)
async def list_perks(
    request: Request,
    title: Optional[str] = Query(default=None, description="Exact title to match"),
    db: AsyncSession = Depends(get_db_session),
):
    # `?title=` (present but empty) is a filter request, not a plain listing
    if "title" in request.query_params:
        perks = await perk_service.filter_by_title(db, title)
    else:
        perks = await perk_service.list_perks(db)
    return [PerkResponse.model_validate(p) for p in perks]


@router.get(
    "/perks/filter",
    response_model=PerkList,
    summary="Filter perks by exact title",
    responses={400: {"description": "Missing title", "model": ErrorResponse}},
)
async def filter_perks(
    title: Optional[str] = Query(default=None, description="Exact title to match"),
    db: AsyncSession = Depends(get_db_session),
):
    perks = await perk_service.filter_by_title(db, title)
    return [PerkResponse.model_validate(p) for p in perks]


@router.get(
    "/perks/{perk_id}",
    response_model=PerkEnvelope,
    summary="Get a single perk by ID",
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Perk not found", "model": ErrorResponse},
    },
)
async def get_perk(
    perk_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PerkEnvelope:
    perk = await perk_service.get_perk(db, perk_id)
    return _envelope(perk)


@router.post(
    "/perks",
    response_model=PerkEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a perk",
    responses={
        400: {"description": "Validation failed", "model": ErrorResponse},
        409: {"description": "Duplicate perk for this merchant", "model": ErrorResponse},
    },
)
async def create_perk(
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> PerkEnvelope:
    perk = await perk_service.create_perk(db, payload)
    return _envelope(perk)


@router.api_route(
    "/perks/{perk_id}",
    methods=["PATCH", "PUT"],
    response_model=PerkEnvelope,
    summary="Partially update a perk",
    description=(
        "Only the supplied fields are validated and changed. Unknown fields "
        "are ignored; every validation problem is reported at once."
    ),
    responses={
        400: {"description": "Missing fields, bad id or validation failure", "model": ErrorResponse},
        404: {"description": "Perk not found", "model": ErrorResponse},
        409: {"description": "Duplicate perk for this merchant", "model": ErrorResponse},
    },
)
async def update_perk(
    perk_id: str,
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> PerkEnvelope:
    perk = await perk_service.update_perk(db, perk_id, payload)
    return _envelope(perk)


@router.delete(
    "/perks/{perk_id}",
    response_model=DeleteResponse,
    summary="Delete a perk",
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Perk not found", "model": ErrorResponse},
    },
)
async def delete_perk(
    perk_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse:
    await perk_service.delete_perk(db, perk_id)
    return DeleteResponse(ok=True)
