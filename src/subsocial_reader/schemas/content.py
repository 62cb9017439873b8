"""Pydantic schemas for JSON content documents stored on IPFS.

Content is human-authored and loosely shaped, so unknown keys are kept and
every field is optional.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CommonContent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")


class SpaceContent(CommonContent):
    """Content of a space."""

    name: str | None = None
    about: str | None = None
    image: str | None = None
    email: str | None = None
    tags: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)


class PostContent(CommonContent):
    """Content of a post, comment or shared post."""

    title: str | None = None
    body: str | None = None
    image: str | None = None
    canonical: str | None = None
    tags: list[str] = Field(default_factory=list)


class ProfileContent(CommonContent):
    """Content of an account profile."""

    name: str | None = None
    avatar: str | None = None
    about: str | None = None
