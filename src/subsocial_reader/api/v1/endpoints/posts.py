# src/subsocial_reader/api/v1/endpoints/posts.py
"""Post read endpoints, with or without related details."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from subsocial_reader.schemas.entity import PostData, PostWithSomeDetails
from subsocial_reader.schemas.query import FindPostsWithDetailsQuery, FindPostWithDetailsQuery
from subsocial_reader.utils.collections import first_or_none

from ..dependencies import (
    IdsDep,
    SubsocialApiDep,
    VisibilityParam,
    VisibilityQuery,
    build_query,
    not_found,
    to_visibility,
)

router = APIRouter(prefix="/posts", tags=["posts"])

WithSpaceQuery = Annotated[bool, Query(description="Attach the post's space")]
WithOwnerQuery = Annotated[bool, Query(description="Attach the owner's profile")]


@router.get("", response_model=list[PostData])
async def list_posts(
    ids: IdsDep,
    api: SubsocialApiDep,
    visibility: VisibilityQuery = VisibilityParam.ALL,
) -> list[PostData]:
    """List posts by id, filtered by visibility."""
    return await api.find_posts(build_query(ids, visibility))


@router.get("/details", response_model=list[PostWithSomeDetails])
async def list_posts_with_details(
    ids: IdsDep,
    api: SubsocialApiDep,
    visibility: VisibilityQuery = VisibilityParam.ALL,
    with_space: WithSpaceQuery = False,
    with_owner: WithOwnerQuery = False,
) -> list[PostWithSomeDetails]:
    """List posts with their shared post and, on request, their space and owner."""
    query = FindPostsWithDetailsQuery(
        ids=ids,
        visibility=to_visibility(visibility),
        with_content_only=visibility is VisibilityParam.PUBLIC,
        with_space=with_space,
        with_owner=with_owner,
    )
    if visibility is VisibilityParam.PUBLIC:
        return await api.find_public_posts_with_some_details(query)
    if visibility is VisibilityParam.UNLISTED:
        return await api.find_unlisted_posts_with_some_details(query)
    return await api.find_posts_with_some_details(query)


@router.get("/{post_id}", response_model=PostData)
async def get_post(
    post_id: str,
    api: SubsocialApiDep,
    visibility: VisibilityQuery = VisibilityParam.ALL,
) -> PostData:
    """Get a single post by id."""
    if visibility is VisibilityParam.PUBLIC:
        post = await api.find_public_post(post_id)
    elif visibility is VisibilityParam.UNLISTED:
        post = await api.find_unlisted_post(post_id)
    else:
        post = first_or_none(await api.find_posts(build_query([post_id], visibility)))

    if post is None:
        raise not_found("Post")
    return post


@router.get("/{post_id}/details", response_model=PostWithSomeDetails)
async def get_post_with_details(
    post_id: str,
    api: SubsocialApiDep,
    visibility: VisibilityQuery = VisibilityParam.ALL,
    with_space: WithSpaceQuery = False,
    with_owner: WithOwnerQuery = False,
) -> PostWithSomeDetails:
    """Get a single post with details."""
    query = FindPostWithDetailsQuery(
        id=post_id,
        visibility=to_visibility(visibility),
        with_content_only=visibility is VisibilityParam.PUBLIC,
        with_space=with_space,
        with_owner=with_owner,
    )
    if visibility is VisibilityParam.PUBLIC:
        details = await api.find_public_post_with_some_details(query)
    elif visibility is VisibilityParam.UNLISTED:
        details = await api.find_unlisted_post_with_some_details(query)
    else:
        details = await api.find_post_with_some_details(query)

    if details is None:
        raise not_found("Post")
    return details
