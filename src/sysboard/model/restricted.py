"""Policy for the read-mostly "assigned to me" view of a board."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from sysboard.errors import ValidationError
from sysboard.model.entities import Board, Card

# The only card field a restricted actor may change.
RESTRICTED_EDIT_FIELDS = frozenset({"status"})


def member_boards(boards: Iterable[Board], user_id: str) -> list[Board]:
    """Boards whose members include user_id."""
    return [board for board in boards if user_id in board.members]


def assigned_to(user_id: str) -> Callable[[Card], bool]:
    """Card filter keeping only cards assigned to user_id."""

    def keep(card: Card) -> bool:
        return card.assigned_to == user_id

    return keep


def check_edit(card: Card, user_id: str, changes: dict[str, Any]) -> None:
    """Raise ValidationError unless user_id may apply changes to card."""
    if card.assigned_to != user_id:
        raise ValidationError(f"card {card.id!r} is not assigned to {user_id!r}")
    forbidden = set(changes) - RESTRICTED_EDIT_FIELDS
    if forbidden:
        raise ValidationError(f"restricted view may only change status, not {', '.join(sorted(forbidden))}")
