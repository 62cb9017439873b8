# src/subsocial_reader/schemas/struct.py
"""Pydantic schemas for on-chain structs as returned by the chain gateway.

Structs are immutable: the reader never writes them back.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WhoAndWhen(BaseModel):
    """Account, block and timestamp of a create or update."""

    account: str
    block: int
    time: int = Field(..., description="Unix time in milliseconds")

    model_config = ConfigDict(frozen=True)


class ChainStruct(BaseModel):
    """Fields every struct kind shares."""

    id: str
    owner_id: str
    hidden: bool = False
    content_id: str | None = Field(None, description="IPFS CID of the content document")
    created: WhoAndWhen | None = None
    updated: WhoAndWhen | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class SpaceStruct(ChainStruct):
    """Space struct."""

    handle: str | None = None
    posts_count: int = 0
    hidden_posts_count: int = 0
    followers_count: int = 0
    score: int = 0


class PostExtensionKind(str, Enum):
    REGULAR_POST = "regular_post"
    COMMENT = "comment"
    SHARED_POST = "shared_post"


class PostExtension(BaseModel):
    """What a post is: a regular post, a comment, or a share of another post."""

    kind: PostExtensionKind = PostExtensionKind.REGULAR_POST
    parent_id: str | None = None
    root_post_id: str | None = None
    shared_post_id: str | None = None

    model_config = ConfigDict(frozen=True)


class PostStruct(ChainStruct):
    """Post struct."""

    space_id: str | None = None
    extension: PostExtension = Field(default_factory=PostExtension)
    replies_count: int = 0
    hidden_replies_count: int = 0
    shares_count: int = 0
    upvotes_count: int = 0
    downvotes_count: int = 0
    score: int = 0

    @property
    def is_shared_post(self) -> bool:
        return self.extension.kind is PostExtensionKind.SHARED_POST

    @property
    def is_comment(self) -> bool:
        return self.extension.kind is PostExtensionKind.COMMENT

    @property
    def extension_id(self) -> str | None:
        """Id of the post this post wraps, if it is a shared post."""
        if self.is_shared_post:
            return self.extension.shared_post_id
        return None


class ProfileStruct(ChainStruct):
    """Social account with an optional profile.

    The id and the owner are both the account address. Profiles cannot be
    hidden, so `hidden` is always `False`.
    """

    followers_count: int = 0
    following_accounts_count: int = 0
    following_spaces_count: int = 0
    reputation: int = 0
