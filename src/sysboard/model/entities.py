"""Board, list and card records as held by the client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any


class CardStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "OnHold"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str | None) -> CardStatus:
        """Parse a status label, tolerating spacing variants. Missing means Pending.

        "In Progress" -> IN_PROGRESS, "InProgress" -> IN_PROGRESS, None -> PENDING
        """
        if not raw:
            return cls.PENDING
        compact = raw.replace(" ", "").replace("_", "").lower()
        for status in cls:
            if status.value.replace(" ", "").lower() == compact:
                return status
        raise ValueError(f"unknown card status: {raw!r}")


def ref_id(value: Any) -> str | None:
    """Reduce a user reference (bare id or ``{"_id": ...}`` object) to its id."""
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("_id") or value.get("id")
        return str(value) if value is not None else None
    return str(value)


def parse_date(raw: Any) -> date | None:
    """Parse an ISO date or datetime string into a date."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, date):
        return raw
    text = str(raw)
    if "T" in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


@dataclass(frozen=True)
class Board:
    id: str
    name: str
    description: str | None = None
    owner: str | None = None
    members: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Board:
        members = frozenset(m for m in (ref_id(raw) for raw in data.get("members") or []) if m)
        return cls(
            id=str(data["_id"]),
            name=data.get("name", ""),
            description=data.get("description"),
            owner=ref_id(data.get("createdBy")),
            members=members,
        )


@dataclass(frozen=True)
class BoardList:
    id: str
    title: str
    board_id: str
    position: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any], board_id: str | None = None) -> BoardList:
        return cls(
            id=str(data["_id"]),
            title=data.get("title", ""),
            board_id=str(data.get("boardId") or board_id),
            position=int(data.get("position") or 0),
        )


@dataclass(frozen=True)
class Card:
    id: str
    title: str
    list_id: str
    position: int = 0
    description: str | None = None
    assigned_to: str | None = None
    status: CardStatus = CardStatus.PENDING
    due_date: date | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any], list_id: str | None = None) -> Card:
        return cls(
            id=str(data["_id"]),
            title=data.get("title", ""),
            list_id=str(data.get("listId") or list_id),
            position=int(data.get("position") or 0),
            description=data.get("description"),
            assigned_to=ref_id(data.get("assignedTo")),
            status=CardStatus.parse(data.get("status")),
            due_date=parse_date(data.get("dueDate")),
        )


# Fields a card edit may touch, by Python name.
CARD_EDIT_FIELDS = frozenset({"title", "description", "status", "due_date", "assigned_to"})
