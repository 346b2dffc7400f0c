"""In-process storage collaborator keeping every entity in dicts."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sysboard.api.base import BoardApi, User
from sysboard.errors import ApiError
from sysboard.ids import prefixed_id
from sysboard.model.entities import Board, BoardList, Card, CardStatus, parse_date

LIST_FIELDS = frozenset({"position", "title"})
CARD_FIELDS = frozenset({"position", "list_id", "title", "description", "status", "due_date", "assigned_to"})


class MemoryBoardApi(BoardApi):
    """Dict-backed collaborator.

    Creates append after existing siblings. Deleting a list deletes its
    cards; deleting a board deletes its lists and their cards. Updates
    to unknown ids raise ApiError with status 404.
    """

    def __init__(self, actor: str | None = None, users: list[User] | None = None) -> None:
        self.actor = actor
        self._boards: dict[str, Board] = {}
        self._lists: dict[str, BoardList] = {}
        self._cards: dict[str, Card] = {}
        self._users: dict[str, User] = {u.id: u for u in users or []}

    def put(self, *entities: Board | BoardList | Card) -> None:
        """Store entities as-is, replacing any with the same id."""
        for entity in entities:
            if isinstance(entity, Board):
                self._boards[entity.id] = entity
            elif isinstance(entity, BoardList):
                self._lists[entity.id] = entity
            else:
                self._cards[entity.id] = entity

    def get_card(self, card_id: str) -> Card | None:
        return self._cards.get(card_id)

    def get_list(self, list_id: str) -> BoardList | None:
        return self._lists.get(list_id)

    # --- boards ---

    async def boards(self) -> list[Board]:
        return list(self._boards.values())

    async def create_board(self, name: str, description: str | None = None) -> Board:
        board = Board(
            id=prefixed_id("b", list(self._boards)),
            name=name,
            description=description,
            owner=self.actor,
            members=frozenset({self.actor}) if self.actor else frozenset(),
        )
        self._boards[board.id] = board
        return board

    async def delete_board(self, board_id: str) -> None:
        self._get(self._boards, board_id, "board")
        for lst in [lst for lst in self._lists.values() if lst.board_id == board_id]:
            await self.delete_list(lst.id)
        del self._boards[board_id]

    async def add_member(self, board_id: str, user_id: str) -> None:
        board = self._get(self._boards, board_id, "board")
        self._boards[board_id] = replace(board, members=board.members | {user_id})

    async def users(self) -> list[User]:
        return list(self._users.values())

    # --- lists ---

    async def lists(self, board_id: str) -> list[BoardList]:
        self._get(self._boards, board_id, "board")
        return [lst for lst in self._lists.values() if lst.board_id == board_id]

    async def create_list(self, board_id: str, title: str) -> BoardList:
        siblings = await self.lists(board_id)
        lst = BoardList(id=prefixed_id("l", list(self._lists)), title=title, board_id=board_id, position=len(siblings))
        self._lists[lst.id] = lst
        return lst

    async def update_list(self, list_id: str, changes: dict[str, Any]) -> None:
        lst = self._get(self._lists, list_id, "list")
        self._lists[list_id] = replace(lst, **_accept(changes, LIST_FIELDS))

    async def delete_list(self, list_id: str) -> None:
        self._get(self._lists, list_id, "list")
        for card_id in [c.id for c in self._cards.values() if c.list_id == list_id]:
            del self._cards[card_id]
        del self._lists[list_id]

    # --- cards ---

    async def cards(self, list_id: str) -> list[Card]:
        self._get(self._lists, list_id, "list")
        return [card for card in self._cards.values() if card.list_id == list_id]

    async def create_card(self, list_id: str, title: str) -> Card:
        siblings = await self.cards(list_id)
        card = Card(id=prefixed_id("c", list(self._cards)), title=title, list_id=list_id, position=len(siblings))
        self._cards[card.id] = card
        return card

    async def update_card(self, card_id: str, changes: dict[str, Any]) -> None:
        card = self._get(self._cards, card_id, "card")
        accepted = _accept(changes, CARD_FIELDS)
        if "list_id" in accepted:
            self._get(self._lists, accepted["list_id"], "list")
        if "status" in accepted and not isinstance(accepted["status"], CardStatus):
            accepted["status"] = CardStatus.parse(accepted["status"])
        if "due_date" in accepted:
            accepted["due_date"] = parse_date(accepted["due_date"])
        self._cards[card_id] = replace(card, **accepted)

    async def delete_card(self, card_id: str) -> None:
        self._get(self._cards, card_id, "card")
        del self._cards[card_id]

    @staticmethod
    def _get(table: dict, key: str, kind: str) -> Any:
        value = table.get(key)
        if value is None:
            raise ApiError(f"{kind} {key} not found", status=404)
        return value


def _accept(changes: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    unknown = set(changes) - allowed
    if unknown:
        raise ApiError(f"unsupported fields: {', '.join(sorted(unknown))}", status=400)
    return dict(changes)
