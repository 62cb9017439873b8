"""Attach related structs (shared post, space, owner) to a list of posts.

Lookups are batched across all posts. Shared posts are found first, then the
spaces and owners of both the posts and their shared posts are resolved
concurrently, one finder call per relation kind. Posts keep their order, and a
post whose relation could not be resolved is kept with that relation left unset.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from subsocial_reader.schemas.entity import (
    EntityData,
    PostData,
    PostWithSomeDetails,
    ProfileData,
    SpaceData,
)
from subsocial_reader.schemas.query import PostDetailsOpts, Visibility

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=EntityData)
P = TypeVar("P", bound=PostWithSomeDetails)

FindSpacesFn = Callable[[list[str]], Awaitable[list[SpaceData]]]
FindPostsFn = Callable[[list[str], Visibility | None], Awaitable[list[PostData]]]
FindProfilesFn = Callable[[list[str]], Awaitable[list[ProfileData]]]


@dataclass(frozen=True)
class StructFinders:
    """Finders used to resolve each relation kind."""

    find_spaces: FindSpacesFn
    find_posts: FindPostsFn
    find_profiles: FindProfilesFn


def _distinct(ids: Iterable[str | None]) -> list[str]:
    return list(dict.fromkeys(i for i in ids if i))


async def _resolve_by_id(
    ids: list[str], find: Callable[[list[str]], Awaitable[list[E]]]
) -> dict[str, E]:
    if not ids:
        return {}
    return {entity.id: entity for entity in await find(ids)}


async def _find_shared_posts(
    posts: Sequence[PostData], finders: StructFinders, opts: PostDetailsOpts
) -> dict[str, PostData]:
    """Follow shared posts for `opts.ext_depth` hops, one posts call per hop."""
    ext_by_id: dict[str, PostData] = {}
    frontier: Sequence[PostData] = posts
    for _ in range(opts.ext_depth):
        ext_ids = [
            ext_id
            for ext_id in _distinct(p.struct.extension_id for p in frontier)
            if ext_id not in ext_by_id
        ]
        if not ext_ids:
            break
        found = await finders.find_posts(ext_ids, opts.visibility)
        ext_by_id.update((post.id, post) for post in found)
        frontier = found
    return ext_by_id


async def load_post_details(
    posts: Sequence[PostData],
    finders: StructFinders,
    opts: PostDetailsOpts | None = None,
    *,
    result_model: type[P] = PostWithSomeDetails,  # type: ignore[assignment]
) -> list[P]:
    """Wrap each post with the related entities requested in `opts`.

    Shared posts are resolved first. Spaces and owners of the posts and of
    their shared posts are then resolved together, one call per kind.

    Args:
        posts: Posts that already passed their own visibility filter.
        finders: Finder functions for spaces, posts and profiles.
        opts: Relations to load. Shared posts are resolved with `opts.visibility`.
        result_model: Model to build for each post.

    Returns:
        One entry per input post, in input order.
    """
    opts = opts or PostDetailsOpts()
    if not posts:
        return []

    ext_by_id = await _find_shared_posts(posts, finders, opts)
    related = [*posts, *ext_by_id.values()]
    space_ids = _distinct(p.struct.space_id for p in related) if opts.with_space else []
    owner_ids = _distinct(p.struct.owner_id for p in related) if opts.with_owner else []

    space_by_id, owner_by_id = await asyncio.gather(
        _resolve_by_id(space_ids, finders.find_spaces),
        _resolve_by_id(owner_ids, finders.find_profiles),
    )
    logger.debug(
        "Resolved %d shared posts, %d/%d spaces, %d/%d owners for %d posts",
        len(ext_by_id),
        len(space_by_id), len(space_ids),
        len(owner_by_id), len(owner_ids),
        len(posts),
    )

    def build(post: PostData, depth: int) -> P:
        struct = post.struct
        ext_post = ext_by_id.get(struct.extension_id) if struct.extension_id else None
        return result_model(
            post=post,
            ext=build(ext_post, depth - 1) if ext_post is not None and depth > 0 else None,
            space=space_by_id.get(struct.space_id) if struct.space_id else None,
            owner=owner_by_id.get(struct.owner_id),
        )

    return [build(post, opts.ext_depth) for post in posts]
