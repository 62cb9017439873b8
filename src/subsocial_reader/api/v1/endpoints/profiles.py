# src/subsocial_reader/api/v1/endpoints/profiles.py
"""Profile read endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from subsocial_reader.schemas.entity import ProfileData

from ..dependencies import IdsDep, SubsocialApiDep, not_found

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=list[ProfileData])
async def list_profiles(ids: IdsDep, api: SubsocialApiDep) -> list[ProfileData]:
    """List profiles by account id."""
    return await api.find_profiles(ids)


@router.get("/{account_id}", response_model=ProfileData)
async def get_profile(account_id: str, api: SubsocialApiDep) -> ProfileData:
    """Get a single profile by account id."""
    profile = await api.find_profile(account_id)
    if profile is None:
        raise not_found("Profile")
    return profile
