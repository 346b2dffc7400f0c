"""Dense zero-based ranks among siblings sharing one parent."""

from __future__ import annotations

from dataclasses import replace
from operator import attrgetter
from typing import Iterable, Sequence, TypeVar

T = TypeVar("T")


def sort_by_position(items: Iterable[T]) -> list[T]:
    """Sort siblings by position. Equal positions keep insertion order."""
    return sorted(items, key=attrgetter("position"))


def renumber(items: Sequence[T]) -> tuple[T, ...]:
    """Return items with ``position == index``.

    Items already at the right rank are reused as-is, so identity-based
    sharing between snapshots survives.
    """
    return tuple(item if item.position == i else replace(item, position=i) for i, item in enumerate(items))


def is_contiguous(items: Sequence) -> bool:
    """True if positions are exactly 0..n-1 in sequence order."""
    return [item.position for item in items] == list(range(len(items)))


def next_position(items: Sequence) -> int:
    """Position for an entity appended after items."""
    return len(items)
