# src/subsocial_reader/utils/collections.py
"""Small helpers for working with query results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def first_or_none(items: Sequence[T]) -> T | None:
    """Return the first item, or None for an empty sequence."""
    return items[0] if items else None
