"""The storage collaborator contract the board client relies on.

Updates are field-sparse: only keys present in ``changes`` are written and
every other field is left untouched. Keys use Python names (``list_id``,
``due_date``, ``assigned_to``); adapters translate them for the wire.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sysboard.model.entities import Board, BoardList, Card


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str | None = None


class BoardApi(ABC):
    async def aclose(self) -> None:
        """Release any resources held by the collaborator."""

    # --- boards ---

    @abstractmethod
    async def boards(self) -> list[Board]:
        """Boards visible to the current actor."""

    @abstractmethod
    async def create_board(self, name: str, description: str | None = None) -> Board: ...

    @abstractmethod
    async def delete_board(self, board_id: str) -> None: ...

    @abstractmethod
    async def add_member(self, board_id: str, user_id: str) -> None: ...

    @abstractmethod
    async def users(self) -> list[User]:
        """Every user that can be added as a board member."""

    # --- lists ---

    @abstractmethod
    async def lists(self, board_id: str) -> list[BoardList]: ...

    @abstractmethod
    async def create_list(self, board_id: str, title: str) -> BoardList: ...

    @abstractmethod
    async def update_list(self, list_id: str, changes: dict[str, Any]) -> None: ...

    @abstractmethod
    async def delete_list(self, list_id: str) -> None:
        """Delete a list and every card in it."""

    # --- cards ---

    @abstractmethod
    async def cards(self, list_id: str) -> list[Card]: ...

    @abstractmethod
    async def create_card(self, list_id: str, title: str) -> Card: ...

    @abstractmethod
    async def update_card(self, card_id: str, changes: dict[str, Any]) -> None: ...

    @abstractmethod
    async def delete_card(self, card_id: str) -> None: ...
