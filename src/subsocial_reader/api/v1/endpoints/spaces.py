# src/subsocial_reader/api/v1/endpoints/spaces.py
"""Space read endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from subsocial_reader.schemas.entity import SpaceData
from subsocial_reader.utils.collections import first_or_none

from ..dependencies import (
    IdsDep,
    SubsocialApiDep,
    VisibilityParam,
    VisibilityQuery,
    build_query,
    not_found,
)

router = APIRouter(prefix="/spaces", tags=["spaces"])


@router.get("", response_model=list[SpaceData])
async def list_spaces(
    ids: IdsDep,
    api: SubsocialApiDep,
    visibility: VisibilityQuery = VisibilityParam.ALL,
) -> list[SpaceData]:
    """List spaces by id, filtered by visibility."""
    return await api.find_spaces(build_query(ids, visibility))


@router.get("/{space_id}", response_model=SpaceData)
async def get_space(
    space_id: str,
    api: SubsocialApiDep,
    visibility: VisibilityQuery = VisibilityParam.ALL,
) -> SpaceData:
    """Get a single space by id."""
    if visibility is VisibilityParam.PUBLIC:
        space = await api.find_public_space(space_id)
    elif visibility is VisibilityParam.UNLISTED:
        space = await api.find_unlisted_space(space_id)
    else:
        space = first_or_none(await api.find_spaces(build_query([space_id], visibility)))

    if space is None:
        raise not_found("Space")
    return space
