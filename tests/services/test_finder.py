"""Tests for StructFinder: batching, ordering and visibility filtering."""

import logging

import pytest

from subsocial_reader.schemas.content import PostContent, SpaceContent
from subsocial_reader.schemas.entity import PostData, SpaceData
from subsocial_reader.schemas.query import FindStructsQuery, StructKind, Visibility
from subsocial_reader.schemas.struct import PostStruct, SpaceStruct
from subsocial_reader.services.finder import StructFinder
from tests.conftest import FakeContentStore, FakeStructSource


@pytest.fixture
def post_finder(struct_source, content_store) -> StructFinder:
    return StructFinder(
        StructKind.POST,
        struct_model=PostStruct,
        content_model=PostContent,
        entity_model=PostData,
        struct_source=struct_source,
        content_store=content_store,
    )


@pytest.fixture
def space_finder(struct_source, content_store) -> StructFinder:
    return StructFinder(
        StructKind.SPACE,
        struct_model=SpaceStruct,
        content_model=SpaceContent,
        entity_model=SpaceData,
        struct_source=struct_source,
        content_store=content_store,
    )


def _ids(entities) -> list[str]:
    return [entity.id for entity in entities]


@pytest.mark.asyncio
async def test_empty_ids_make_no_calls(post_finder, struct_source, content_store):
    for visibility in (None, *Visibility):
        assert await post_finder.find(FindStructsQuery(ids=[], visibility=visibility)) == []
    assert struct_source.calls == []
    assert content_store.calls == []


@pytest.mark.asyncio
async def test_missing_structs_are_omitted_in_request_order(post_finder):
    result = await post_finder.find(FindStructsQuery(ids=["12", "missing", "10"]))
    assert _ids(result) == ["12", "10"]


@pytest.mark.asyncio
async def test_single_batch_per_collaborator(post_finder, struct_source, content_store):
    await post_finder.find(FindStructsQuery(ids=["10", "11", "12", "13"]))

    assert struct_source.calls == [(StructKind.POST, ["10", "11", "12", "13"])]
    # post 12 has no CID, so only three documents are requested
    assert content_store.calls == [["cid-post-10", "cid-post-11", "cid-post-13"]]


@pytest.mark.asyncio
async def test_content_is_merged(post_finder):
    [post] = await post_finder.find(FindStructsQuery(ids=["10"]))
    assert isinstance(post.struct, PostStruct)
    assert post.content == PostContent(title="Hello", body="First post")
    assert post.is_public


@pytest.mark.asyncio
async def test_hidden_only_filter_skips_content_for_visible_structs(post_finder, content_store):
    result = await post_finder.find(
        FindStructsQuery(ids=["10", "11", "12"], visibility=Visibility.ONLY_HIDDEN)
    )
    assert _ids(result) == ["11"]
    assert content_store.calls == [["cid-post-11"]]


@pytest.mark.asyncio
async def test_visible_only_filter_keeps_posts_without_content(post_finder):
    result = await post_finder.find(
        FindStructsQuery(ids=["10", "11", "12"], visibility=Visibility.ONLY_VISIBLE)
    )
    assert _ids(result) == ["10", "12"]
    assert result[1].content is None


@pytest.mark.asyncio
async def test_with_content_only_applies_under_any_filter(post_finder):
    result = await post_finder.find(
        FindStructsQuery(
            ids=["10", "11", "12"],
            visibility=Visibility.ONLY_VISIBLE,
            with_content_only=True,
        )
    )
    assert _ids(result) == ["10"]


@pytest.mark.asyncio
async def test_public_and_unlisted_partition_found_spaces(space_finder):
    ids = ["1", "2", "3", "missing"]
    public = await space_finder.find(FindStructsQuery(ids=ids, visibility=Visibility.ONLY_PUBLIC))
    unlisted = await space_finder.find(
        FindStructsQuery(ids=ids, visibility=Visibility.ONLY_UNLISTED)
    )
    everything = await space_finder.find(FindStructsQuery(ids=ids))

    assert _ids(public) == ["1"]
    assert _ids(unlisted) == ["2", "3"]
    assert set(_ids(public)).isdisjoint(_ids(unlisted))
    assert set(_ids(public)) | set(_ids(unlisted)) == set(_ids(everything))


@pytest.mark.asyncio
async def test_invalid_content_is_treated_as_missing(caplog):
    struct_source = FakeStructSource(
        {StructKind.POST: {"1": {"id": "1", "owner_id": "a", "content_id": "bad"}}}
    )
    content_store = FakeContentStore({"bad": ["not", "an", "object"]})
    finder = StructFinder(
        StructKind.POST,
        struct_model=PostStruct,
        content_model=PostContent,
        entity_model=PostData,
        struct_source=struct_source,
        content_store=content_store,
    )

    with caplog.at_level(logging.WARNING, logger="subsocial_reader.services.finder"):
        public = await finder.find(FindStructsQuery(ids=["1"], visibility=Visibility.ONLY_PUBLIC))
        unlisted = await finder.find(FindStructsQuery(ids=["1"], visibility=Visibility.ONLY_UNLISTED))

    assert public == []
    assert _ids(unlisted) == ["1"]
    assert unlisted[0].content is None
    assert "not a JSON object" in caplog.text


@pytest.mark.asyncio
async def test_malformed_struct_is_skipped():
    struct_source = FakeStructSource(
        {
            StructKind.SPACE: {
                "1": {"id": "1", "owner_id": "a"},
                "2": {"id": "2"},  # no owner
            }
        }
    )
    finder = StructFinder(
        StructKind.SPACE,
        struct_model=SpaceStruct,
        content_model=SpaceContent,
        entity_model=SpaceData,
        struct_source=struct_source,
        content_store=FakeContentStore({}),
    )
    result = await finder.find(FindStructsQuery(ids=["1", "2"]))
    assert _ids(result) == ["1"]


@pytest.mark.asyncio
async def test_repeated_queries_are_equal(post_finder):
    query = FindStructsQuery(ids=["13", "10", "11"], visibility=Visibility.ONLY_UNLISTED)
    assert await post_finder.find(query) == await post_finder.find(query)
