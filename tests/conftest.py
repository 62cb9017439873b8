# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from subsocial_reader.main import app as fastapi_app
from subsocial_reader.schemas.query import StructKind
from subsocial_reader.services.api import SubsocialApi, get_subsocial_api

# Spaces: 1 is public, 2 is hidden, 3 has a CID that IPFS does not know
SPACES: dict[str, dict[str, Any]] = {
    "1": {"id": "1", "owner_id": "alice", "hidden": False, "content_id": "cid-space-1", "handle": "one"},
    "2": {"id": "2", "owner_id": "bob", "hidden": True, "content_id": "cid-space-2"},
    "3": {"id": "3", "owner_id": "alice", "hidden": False, "content_id": "cid-space-3-missing"},
}

# Posts: 10, 13 and 14 are public; 11 is hidden; 12 has no content.
# 13 shares 10 and lives in a space that does not exist; 14 shares the hidden 11.
POSTS: dict[str, dict[str, Any]] = {
    "10": {"id": "10", "owner_id": "alice", "space_id": "1", "content_id": "cid-post-10"},
    "11": {"id": "11", "owner_id": "bob", "space_id": "2", "hidden": True, "content_id": "cid-post-11"},
    "12": {"id": "12", "owner_id": "alice", "space_id": "3", "content_id": None},
    "13": {
        "id": "13",
        "owner_id": "carol",
        "space_id": "404",
        "content_id": "cid-post-13",
        "extension": {"kind": "shared_post", "shared_post_id": "10"},
    },
    "14": {
        "id": "14",
        "owner_id": "bob",
        "space_id": "1",
        "content_id": "cid-post-14",
        "extension": {"kind": "shared_post", "shared_post_id": "11"},
    },
}

PROFILES: dict[str, dict[str, Any]] = {
    "alice": {"id": "alice", "owner_id": "alice", "content_id": "cid-profile-alice"},
    "bob": {"id": "bob", "owner_id": "bob", "content_id": None},
}

CONTENTS: dict[str, Any] = {
    "cid-space-1": {"name": "Space One", "about": "First space", "tags": ["one"]},
    "cid-space-2": {"name": "Space Two"},
    "cid-post-10": {"title": "Hello", "body": "First post"},
    "cid-post-11": {"title": "Hidden", "body": "Nobody sees this"},
    "cid-post-13": {"body": "Sharing post 10"},
    "cid-post-14": {"body": "Sharing post 11"},
    "cid-profile-alice": {"name": "Alice", "avatar": "cid-avatar"},
}


class FakeStructSource:
    """In-memory struct source that records each batch request."""

    def __init__(self, structs: Mapping[StructKind, Mapping[str, Mapping[str, Any]]]) -> None:
        self.structs = structs
        self.calls: list[tuple[StructKind, list[str]]] = []

    async def get_structs(
        self, kind: StructKind, ids: Sequence[str]
    ) -> Mapping[str, Mapping[str, Any]]:
        self.calls.append((kind, list(ids)))
        known = self.structs.get(kind, {})
        return {struct_id: known[struct_id] for struct_id in ids if struct_id in known}

    def calls_for(self, kind: StructKind) -> list[list[str]]:
        return [ids for call_kind, ids in self.calls if call_kind is kind]


class FakeContentStore:
    """In-memory content store that records each batch request."""

    def __init__(self, contents: Mapping[str, Any]) -> None:
        self.contents = contents
        self.calls: list[list[str]] = []

    async def get_contents(self, cids: Sequence[str]) -> Mapping[str, Any]:
        self.calls.append(list(cids))
        return {cid: self.contents[cid] for cid in cids if cid in self.contents}


@pytest.fixture()
def struct_source() -> FakeStructSource:
    return FakeStructSource(
        {
            StructKind.SPACE: SPACES,
            StructKind.POST: POSTS,
            StructKind.PROFILE: PROFILES,
        }
    )


@pytest.fixture()
def content_store() -> FakeContentStore:
    return FakeContentStore(CONTENTS)


@pytest.fixture()
def api(struct_source: FakeStructSource, content_store: FakeContentStore) -> SubsocialApi:
    return SubsocialApi(struct_source, content_store)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI, api: SubsocialApi) -> Iterator[TestClient]:
    app.dependency_overrides[get_subsocial_api] = lambda: api
    try:
        with TestClient(app, base_url="http://test") as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_subsocial_api, None)
