"""Resolve ids into structs merged with their IPFS content.

One `StructFinder` exists per struct kind. Each call makes at most one request
to the struct source and at most one to the content store, whatever the number
of ids.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from subsocial_reader.schemas.content import CommonContent
from subsocial_reader.schemas.entity import EntityData
from subsocial_reader.schemas.query import FindStructsQuery, StructKind, Visibility
from subsocial_reader.schemas.struct import ChainStruct
from subsocial_reader.services.sources import ContentStore, StructSource
from subsocial_reader.services.visibility import is_visible_by, needs_content

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=ChainStruct)
C = TypeVar("C", bound=CommonContent)
E = TypeVar("E", bound=EntityData)


class StructFinder(Generic[S, C, E]):
    """Load structs of one kind, attach their content and apply visibility filters."""

    def __init__(
        self,
        kind: StructKind,
        *,
        struct_model: type[S],
        content_model: type[C],
        entity_model: type[E],
        struct_source: StructSource,
        content_store: ContentStore,
    ) -> None:
        self.kind = kind
        self.struct_model = struct_model
        self.content_model = content_model
        self.entity_model = entity_model
        self.struct_source = struct_source
        self.content_store = content_store

    def _parse_struct(self, raw: Mapping[str, Any]) -> S | None:
        try:
            return self.struct_model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Invalid %s struct %r: %s", self.kind.value, raw.get("id"), exc)
            return None

    def _parse_content(self, cid: str, raw: Any) -> C | None:
        if not isinstance(raw, Mapping):
            logger.warning("Content %s of a %s is not a JSON object", cid, self.kind.value)
            return None
        try:
            return self.content_model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Invalid %s content %s: %s", self.kind.value, cid, exc)
            return None

    async def _load_structs(self, ids: list[str]) -> list[S]:
        raw_structs = await self.struct_source.get_structs(self.kind, ids)
        structs: list[S] = []
        for struct_id in ids:
            raw = raw_structs.get(struct_id)
            if raw is None:
                continue
            struct = self._parse_struct(raw)
            if struct is not None:
                structs.append(struct)
        return structs

    async def _load_contents(self, structs: list[S]) -> dict[str, C]:
        cids = list(dict.fromkeys(s.content_id for s in structs if s.content_id))
        if not cids:
            return {}

        raw_contents = await self.content_store.get_contents(cids)
        contents: dict[str, C] = {}
        for cid in cids:
            if cid not in raw_contents:
                continue
            content = self._parse_content(cid, raw_contents[cid])
            if content is not None:
                contents[cid] = content
        return contents

    async def find(self, query: FindStructsQuery) -> list[E]:
        """Return the entities for `query.ids` that pass its filters.

        Ids without a struct are left out. The result keeps the order of
        `query.ids`.

        Args:
            query: Ids to resolve plus the visibility and content filters.

        Returns:
            Entities that exist and pass the filters, possibly an empty list.
        """
        ids = list(query.ids)
        if not ids:
            return []

        visibility = Visibility(query.visibility) if query.visibility is not None else None
        structs = await self._load_structs(ids)

        # onlyVisible / onlyHidden are decided by the hidden flag alone
        if visibility is not None and not needs_content(visibility):
            structs = [s for s in structs if is_visible_by(s.hidden, True, visibility)]

        contents = await self._load_contents(structs)

        entities: list[E] = []
        for struct in structs:
            content = contents.get(struct.content_id) if struct.content_id else None
            has_content = content is not None
            if not is_visible_by(struct.hidden, has_content, visibility):
                continue
            if query.with_content_only and not has_content:
                continue
            entities.append(self.entity_model(struct=struct, content=content))

        logger.debug(
            "Found %d of %d %ss (visibility=%s, with_content_only=%s)",
            len(entities),
            len(ids),
            self.kind.value,
            visibility.value if visibility is not None else "all",
            query.with_content_only,
        )
        return entities
