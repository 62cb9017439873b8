"""Query and filter types shared by finders and the API facade."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Visibility(str, Enum):
    """Visibility filters applied to spaces and posts.

    - `onlyVisible` – the `hidden` field on the chain struct is `False`.
    - `onlyHidden` – the `hidden` field on the chain struct is `True`.
    - `onlyPublic` – `hidden` is `False` and the JSON content was found on IPFS.
    - `onlyUnlisted` – `hidden` is `True` or there is no JSON content on IPFS.
    """

    ONLY_VISIBLE = "onlyVisible"
    ONLY_HIDDEN = "onlyHidden"
    ONLY_PUBLIC = "onlyPublic"
    ONLY_UNLISTED = "onlyUnlisted"


class StructKind(str, Enum):
    """Kinds of chain structs the reader resolves."""

    SPACE = "space"
    POST = "post"
    PROFILE = "profile"


@dataclass(frozen=True)
class FindStructsQuery:
    """Ids plus the filters applied while resolving them."""

    ids: list[str]
    visibility: Visibility | None = None
    with_content_only: bool = False


@dataclass(frozen=True)
class PostDetailsOpts:
    """Which related structs to load for each post.

    `ext_depth` is the number of shared-post hops to follow. At the default of 1
    the shared post is loaded (with its own space and owner when requested) but
    the post it shares in turn is not. Each hop costs one posts lookup; spaces
    and owners are still resolved in one call each.
    """

    with_space: bool = False
    with_owner: bool = False
    visibility: Visibility | None = None
    ext_depth: int = 1


@dataclass(frozen=True)
class FindPostsWithDetailsQuery:
    """Post ids, visibility filters and detail options in one request."""

    ids: list[str]
    visibility: Visibility | None = None
    with_content_only: bool = False
    with_space: bool = False
    with_owner: bool = False
    ext_depth: int = 1

    @property
    def posts_query(self) -> FindStructsQuery:
        return FindStructsQuery(
            ids=self.ids,
            visibility=self.visibility,
            with_content_only=self.with_content_only,
        )

    @property
    def details_opts(self) -> PostDetailsOpts:
        return PostDetailsOpts(
            with_space=self.with_space,
            with_owner=self.with_owner,
            visibility=self.visibility,
            ext_depth=self.ext_depth,
        )

    def with_visibility(self, visibility: Visibility) -> FindPostsWithDetailsQuery:
        """Return a copy of the query filtered by `visibility`."""
        return replace(self, visibility=visibility)


@dataclass(frozen=True)
class FindPostWithDetailsQuery:
    """Single-post variant of `FindPostsWithDetailsQuery`."""

    id: str
    visibility: Visibility | None = None
    with_content_only: bool = False
    with_space: bool = False
    with_owner: bool = False
    ext_depth: int = 1

    def to_many(self) -> FindPostsWithDetailsQuery:
        """Wrap the sole id in a singleton list."""
        return FindPostsWithDetailsQuery(
            ids=[self.id],
            visibility=self.visibility,
            with_content_only=self.with_content_only,
            with_space=self.with_space,
            with_owner=self.with_owner,
            ext_depth=self.ext_depth,
        )
