"""Contracts for the two collaborators the reader depends on.

Both answer batch requests with partial results: an id or CID that is not in
the returned mapping is simply absent, never an error.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from subsocial_reader.schemas.query import StructKind


@runtime_checkable
class StructSource(Protocol):
    """Source of on-chain structs."""

    async def get_structs(
        self, kind: StructKind, ids: Sequence[str]
    ) -> Mapping[str, Mapping[str, Any]]:
        """Return raw struct payloads keyed by id for the ids that exist."""
        ...


@runtime_checkable
class ContentStore(Protocol):
    """Content-addressed store of JSON documents."""

    async def get_contents(self, cids: Sequence[str]) -> Mapping[str, Any]:
        """Return decoded JSON documents keyed by CID for the CIDs that were found."""
        ...
