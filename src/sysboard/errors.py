"""Error taxonomy for board loading, persistence and moves."""

from __future__ import annotations

from typing import Any


class BoardError(Exception):
    """Base class for sysboard errors."""


class LoadError(BoardError):
    """Fetching a board's lists or cards failed. The prior tree is kept."""


class ValidationError(BoardError):
    """Malformed move or edit input."""


class ApiError(BoardError):
    """A storage collaborator call failed."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class PersistError(BoardError):
    """A single change-set item failed to save."""

    def __init__(self, kind: str, entity_id: str, fields: dict[str, Any], cause: BaseException) -> None:
        super().__init__(f"failed to persist {kind} {entity_id} {fields}: {cause}")
        self.kind = kind
        self.entity_id = entity_id
        self.fields = fields
        self.cause = cause
