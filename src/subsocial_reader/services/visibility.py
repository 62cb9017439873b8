"""Visibility rules shared by every struct kind.

A struct's visibility depends on two independent facts: the `hidden` flag on
chain and whether its JSON content could be loaded from IPFS.
"""

from __future__ import annotations

from subsocial_reader.schemas.query import Visibility

# Filters whose decision depends on the content lookup
CONTENT_DEPENDENT = frozenset({Visibility.ONLY_PUBLIC, Visibility.ONLY_UNLISTED})


def is_visible_by(hidden: bool, has_content: bool, visibility: Visibility | None) -> bool:
    """Return True if a struct with the given facts passes the `visibility` filter.

    Args:
        hidden: The `hidden` flag of the chain struct.
        has_content: Whether the struct's content document was found.
        visibility: Filter to apply. `None` lets everything through.

    Returns:
        Whether the struct should be included in the result.
    """
    if visibility is None:
        return True
    visibility = Visibility(visibility)
    if visibility is Visibility.ONLY_VISIBLE:
        return not hidden
    if visibility is Visibility.ONLY_HIDDEN:
        return hidden
    if visibility is Visibility.ONLY_PUBLIC:
        return not hidden and has_content
    return hidden or not has_content


def needs_content(visibility: Visibility | None) -> bool:
    """Return True if `visibility` cannot be decided from the `hidden` flag alone."""
    return visibility in CONTENT_DEPENDENT


def classify_visibility(hidden: bool, has_content: bool) -> Visibility:
    """Return `onlyPublic` or `onlyUnlisted`, whichever the struct belongs to."""
    if is_visible_by(hidden, has_content, Visibility.ONLY_PUBLIC):
        return Visibility.ONLY_PUBLIC
    return Visibility.ONLY_UNLISTED
