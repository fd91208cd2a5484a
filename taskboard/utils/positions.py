"""Helpers for the integer ``position`` ordering key."""
from __future__ import annotations

from typing import Iterable, List, Protocol, TypeVar


class Positioned(Protocol):
    position: int


P = TypeVar("P", bound=Positioned)


def sort_by_position(items: Iterable[P]) -> List[P]:
    """Sort ascending by position; equal positions keep their incoming order."""
    return sorted(items, key=lambda item: item.position)


def next_position(siblings: Iterable[Positioned]) -> int:
    """Append rule: one past the highest sibling position, ``0`` for an empty parent."""
    positions = [sibling.position for sibling in siblings]
    if not positions:
        return 0
    return max(positions) + 1
