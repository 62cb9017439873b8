"""Shared API dependencies for the read endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status

from subsocial_reader.schemas.query import FindStructsQuery, Visibility
from subsocial_reader.services.api import SubsocialApi, get_subsocial_api

# Upper bound on ids per request, to keep one request to one gateway batch
MAX_IDS_PER_REQUEST = 100

SubsocialApiDep = Annotated[SubsocialApi, Depends(get_subsocial_api)]


class VisibilityParam(str, Enum):
    """Visibility filter as exposed on the HTTP API."""

    ALL = "all"
    PUBLIC = "public"
    UNLISTED = "unlisted"
    VISIBLE = "visible"
    HIDDEN = "hidden"


_VISIBILITY_FILTERS: dict[VisibilityParam, Visibility | None] = {
    VisibilityParam.ALL: None,
    VisibilityParam.PUBLIC: Visibility.ONLY_PUBLIC,
    VisibilityParam.UNLISTED: Visibility.ONLY_UNLISTED,
    VisibilityParam.VISIBLE: Visibility.ONLY_VISIBLE,
    VisibilityParam.HIDDEN: Visibility.ONLY_HIDDEN,
}


def to_visibility(param: VisibilityParam) -> Visibility | None:
    """Map the HTTP visibility parameter onto a finder filter."""
    return _VISIBILITY_FILTERS[param]


def parse_ids(
    ids: Annotated[list[str], Query(description="Ids, repeated or comma separated")],
) -> list[str]:
    """Collect ids from `?ids=1&ids=2` and `?ids=1,2` forms.

    Raises:
        HTTPException: If no ids are given or too many are requested.
    """
    parsed = [part.strip() for value in ids for part in value.split(",") if part.strip()]
    if not parsed:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="At least one id is required",
        )
    if len(parsed) > MAX_IDS_PER_REQUEST:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"At most {MAX_IDS_PER_REQUEST} ids can be requested at once",
        )
    return parsed


IdsDep = Annotated[list[str], Depends(parse_ids)]
VisibilityQuery = Annotated[VisibilityParam, Query()]


def build_query(ids: list[str], visibility: VisibilityParam) -> FindStructsQuery:
    """Build a finder query; public results always carry content."""
    return FindStructsQuery(
        ids=ids,
        visibility=to_visibility(visibility),
        with_content_only=visibility is VisibilityParam.PUBLIC,
    )


def not_found(kind: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{kind} not found")
