# tests/test_visibility.py
"""Tests for the visibility rules."""

import pytest

from subsocial_reader.schemas.content import SpaceContent
from subsocial_reader.schemas.entity import SpaceData
from subsocial_reader.schemas.query import Visibility
from subsocial_reader.schemas.struct import SpaceStruct
from subsocial_reader.services.visibility import classify_visibility, is_visible_by, needs_content

V = Visibility


@pytest.mark.parametrize(
    ("hidden", "has_content", "visibility", "expected"),
    [
        (False, False, V.ONLY_VISIBLE, True),
        (False, True, V.ONLY_VISIBLE, True),
        (True, False, V.ONLY_VISIBLE, False),
        (True, True, V.ONLY_VISIBLE, False),
        (False, False, V.ONLY_HIDDEN, False),
        (False, True, V.ONLY_HIDDEN, False),
        (True, False, V.ONLY_HIDDEN, True),
        (True, True, V.ONLY_HIDDEN, True),
        (False, False, V.ONLY_PUBLIC, False),
        (False, True, V.ONLY_PUBLIC, True),
        (True, False, V.ONLY_PUBLIC, False),
        (True, True, V.ONLY_PUBLIC, False),
        (False, False, V.ONLY_UNLISTED, True),
        (False, True, V.ONLY_UNLISTED, False),
        (True, False, V.ONLY_UNLISTED, True),
        (True, True, V.ONLY_UNLISTED, True),
    ],
)
def test_is_visible_by(hidden: bool, has_content: bool, visibility: Visibility, expected: bool) -> None:
    assert is_visible_by(hidden, has_content, visibility) is expected


@pytest.mark.parametrize("hidden", [False, True])
@pytest.mark.parametrize("has_content", [False, True])
def test_no_filter_includes_everything(hidden: bool, has_content: bool) -> None:
    assert is_visible_by(hidden, has_content, None) is True


@pytest.mark.parametrize("hidden", [False, True])
@pytest.mark.parametrize("has_content", [False, True])
def test_public_and_unlisted_are_complementary(hidden: bool, has_content: bool) -> None:
    public = is_visible_by(hidden, has_content, V.ONLY_PUBLIC)
    unlisted = is_visible_by(hidden, has_content, V.ONLY_UNLISTED)
    assert public != unlisted
    assert classify_visibility(hidden, has_content) is (V.ONLY_PUBLIC if public else V.ONLY_UNLISTED)


def test_plain_string_filters_are_accepted() -> None:
    assert is_visible_by(False, True, "onlyPublic") is True
    assert is_visible_by(True, True, "onlyVisible") is False


def test_needs_content() -> None:
    assert needs_content(V.ONLY_PUBLIC)
    assert needs_content(V.ONLY_UNLISTED)
    assert not needs_content(V.ONLY_VISIBLE)
    assert not needs_content(V.ONLY_HIDDEN)
    assert not needs_content(None)


@pytest.mark.parametrize("hidden", [False, True])
@pytest.mark.parametrize("has_content", [False, True])
def test_entity_exposes_every_category(hidden: bool, has_content: bool) -> None:
    entity = SpaceData(
        struct=SpaceStruct(id="1", owner_id="alice", hidden=hidden),
        content=SpaceContent(name="Space") if has_content else None,
    )

    assert entity.is_visible is (not hidden)
    assert entity.is_hidden is hidden
    assert entity.is_public is is_visible_by(hidden, has_content, V.ONLY_PUBLIC)
    for visibility in V:
        assert entity.matches(visibility) is is_visible_by(hidden, has_content, visibility)
    dumped = entity.model_dump()
    assert dumped["is_visible"] is (not hidden)
    assert dumped["is_hidden"] is hidden
    assert dumped["visibility_category"] is entity.visibility_category
