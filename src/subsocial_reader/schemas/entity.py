# src/subsocial_reader/schemas/entity.py
"""Structs merged with their content, and posts with related entities attached."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field

from subsocial_reader.schemas.content import CommonContent, PostContent, ProfileContent, SpaceContent
from subsocial_reader.schemas.query import Visibility
from subsocial_reader.schemas.struct import ChainStruct, PostStruct, ProfileStruct, SpaceStruct
from subsocial_reader.services.visibility import classify_visibility, is_visible_by


class EntityData(BaseModel):
    """A chain struct together with its IPFS content, if the content was found."""

    struct: ChainStruct
    content: CommonContent | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def id(self) -> str:
        return self.struct.id

    @property
    def has_content(self) -> bool:
        return self.content is not None

    @property
    def is_public(self) -> bool:
        return self.visibility_category is Visibility.ONLY_PUBLIC

    @property
    def is_unlisted(self) -> bool:
        return self.visibility_category is Visibility.ONLY_UNLISTED

    @computed_field  # type: ignore[prop-decorator]
    @property
    def visibility_category(self) -> Visibility:
        """Either `onlyPublic` or `onlyUnlisted`; every entity is exactly one of them.

        The `onlyVisible`/`onlyHidden` split is exposed by `is_visible` and `is_hidden`.
        """
        return classify_visibility(self.struct.hidden, self.has_content)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_visible(self) -> bool:
        return is_visible_by(self.struct.hidden, self.has_content, Visibility.ONLY_VISIBLE)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_hidden(self) -> bool:
        return is_visible_by(self.struct.hidden, self.has_content, Visibility.ONLY_HIDDEN)

    def matches(self, visibility: Visibility | None) -> bool:
        """Return True if the entity passes the `visibility` filter."""
        return is_visible_by(self.struct.hidden, self.has_content, visibility)


class SpaceData(EntityData):
    struct: SpaceStruct
    content: SpaceContent | None = None


class PostData(EntityData):
    struct: PostStruct
    content: PostContent | None = None


class ProfileData(EntityData):
    struct: ProfileStruct
    content: ProfileContent | None = None


class PostWithSomeDetails(BaseModel):
    """A post with whichever related entities were requested and resolved.

    Any relation left as `None` was either not requested, filtered out by
    visibility, or not found.
    """

    post: PostData
    ext: PostWithSomeDetails | None = None
    space: SpaceData | None = None
    owner: ProfileData | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def id(self) -> str:
        return self.post.id


class PostWithAllDetails(PostWithSomeDetails):
    """Returned by the "all details" queries, which request both space and owner.

    The relations are still optional: a space or owner that could not be
    resolved is left as `None`.
    """
