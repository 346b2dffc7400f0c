"""One user's interaction with a board: drags, edits and their persistence.

A drop runs synchronously through Dragging → LocalApplied → Reconciling →
Dispatched → Idle. The new tree is in the store before any network call
starts, and the dispatched calls are not awaited, so the next drag always
works on the latest local tree.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from enum import Enum
from typing import Any, Callable

from sysboard.api.base import BoardApi
from sysboard.errors import LoadError, ValidationError
from sysboard.model import editing
from sysboard.model.changeset import CardChange, ChangeSet, ListChange, diff_trees
from sysboard.model.entities import Board, BoardList, Card, CardStatus, parse_date
from sysboard.model.reorder import Move, card_move, list_move, reorder
from sysboard.model.restricted import assigned_to, check_edit, member_boards
from sysboard.model.store import BoardStore
from sysboard.model.tree import BoardTree
from sysboard.sync import SyncDispatcher

logger = logging.getLogger(__name__)


class InteractionState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    LOCAL_APPLIED = "local-applied"
    RECONCILING = "reconciling"
    DISPATCHED = "dispatched"


StateCallback = Callable[[InteractionState, InteractionState], None]


class BoardSession:
    """Owns the store and dispatcher for one actor.

    With ``restricted=True`` the session is the "assigned to me" view:
    only member boards are listed, only cards assigned to ``actor`` are
    loaded, drags are ignored, and card edits are limited to status.
    """

    def __init__(
        self,
        api: BoardApi,
        actor: str | None = None,
        restricted: bool = False,
        store: BoardStore | None = None,
        dispatcher: SyncDispatcher | None = None,
    ) -> None:
        if restricted and not actor:
            raise ValueError("a restricted session needs an actor")
        self.api = api
        self.actor = actor
        self.restricted = restricted
        self.store = store or BoardStore(api)
        self.dispatcher = dispatcher or SyncDispatcher(api)
        self.state = InteractionState.IDLE
        self._state_watchers: list[StateCallback] = []

    @property
    def tree(self) -> BoardTree:
        tree = self.store.current
        if tree is None:
            raise ValidationError("no board loaded")
        return tree

    # --- state machine ---

    def watch_state(self, callback: StateCallback) -> Callable[[], None]:
        """Watch interaction state transitions. Returns an unwatch callable."""
        self._state_watchers.append(callback)
        return lambda: callback in self._state_watchers and self._state_watchers.remove(callback)

    def _set_state(self, new: InteractionState) -> None:
        old, self.state = self.state, new
        logger.debug("interaction %s -> %s", old.value, new.value)
        for cb in list(self._state_watchers):
            cb(old, new)

    def begin_drag(self) -> None:
        self._set_state(InteractionState.DRAGGING)

    def cancel_drag(self) -> None:
        if self.state is InteractionState.DRAGGING:
            self._set_state(InteractionState.IDLE)

    def drop(self, move: Move) -> ChangeSet:
        """Apply a drop locally, then dispatch the resulting updates without waiting.

        Returns the dispatched change-set; empty for no-op, rejected or
        restricted-view drops, in which case the store is not touched.
        Needs a running event loop when the drop changes anything.
        """
        if self.state is not InteractionState.DRAGGING:
            self.begin_drag()
        old = self.tree
        new = old if self.restricted else reorder(old, move)
        if new is old:
            self._set_state(InteractionState.IDLE)
            return ChangeSet()

        self.store.replace(new)
        self._set_state(InteractionState.LOCAL_APPLIED)
        self._set_state(InteractionState.RECONCILING)
        changes = diff_trees(self.store.previous, self.store.current)
        self.dispatcher.dispatch(changes)
        self._set_state(InteractionState.DISPATCHED)
        self._set_state(InteractionState.IDLE)
        return changes

    def move_list(self, list_id: str, index: int) -> ChangeSet:
        """Drop list_id at index on the loaded board."""
        try:
            move = list_move(self.tree, list_id, index)
        except ValidationError as exc:
            logger.debug("ignoring list move: %s", exc)
            return ChangeSet()
        return self.drop(move)

    def move_card(self, card_id: str, list_id: str, index: int) -> ChangeSet:
        """Drop card_id into list_id at index."""
        try:
            move = card_move(self.tree, card_id, list_id, index)
        except ValidationError as exc:
            logger.debug("ignoring card move: %s", exc)
            return ChangeSet()
        return self.drop(move)

    def _commit(self, new: BoardTree) -> ChangeSet:
        """Swap in an edited tree and dispatch whatever ranks it changed."""
        self.store.replace(new)
        changes = diff_trees(self.store.previous, new)
        self.dispatcher.dispatch(changes)
        return changes

    # --- boards ---

    async def boards(self) -> list[Board]:
        boards = await self.api.boards()
        if self.restricted:
            return member_boards(boards, self.actor)
        return boards

    async def open(self, board_id: str) -> BoardTree:
        """Load a board into the store. Raises LoadError, keeping the prior tree.

        A restricted session only opens boards the actor is a member of.
        """
        if not self.restricted:
            return await self.store.load(board_id)
        board = next((b for b in await self.boards() if b.id == board_id), None)
        if board is None:
            raise LoadError(f"board {board_id} not found")
        return await self.store.load(board_id, board=board, card_filter=assigned_to(self.actor))

    async def create_board(self, name: str, description: str | None = None) -> Board:
        self._require_full()
        if not name.strip():
            raise ValidationError("board name is empty")
        return await self.api.create_board(name.strip(), description)

    async def delete_board(self, board_id: str) -> None:
        self._require_full()
        await self.api.delete_board(board_id)

    async def add_member(self, board_id: str, user_id: str) -> None:
        self._require_full()
        await self.api.add_member(board_id, user_id)

    async def add_all_members(self, board_id: str) -> int:
        """Add every known user to the board concurrently. Returns how many were added."""
        self._require_full()
        users = await self.api.users()
        await asyncio.gather(*(self.api.add_member(board_id, user.id) for user in users))
        return len(users)

    # --- lists ---

    async def create_list(self, title: str) -> BoardList:
        """Create a list at the end of the loaded board."""
        self._require_full()
        if not title.strip():
            raise ValidationError("list title is empty")
        tree = self.tree
        created = await self.api.create_list(tree.board.id, title.strip())
        new = editing.append_list(self.tree, created)
        self.store.replace(new)
        lst = new.lists[-1]
        if created.position != lst.position:
            self.dispatcher.dispatch(ChangeSet(lists=(ListChange(lst.id, lst.position),)))
        return lst

    async def delete_list(self, list_id: str) -> ChangeSet:
        """Delete a list and its cards, then renumber the remaining lists."""
        self._require_full()
        if self.tree.get_list(list_id) is None:
            raise ValidationError(f"unknown list {list_id!r}")
        await self.api.delete_list(list_id)
        return self._commit(editing.remove_list(self.tree, list_id))

    # --- cards ---

    async def create_card(self, list_id: str, title: str) -> Card:
        """Create a card at the end of list_id."""
        self._require_full()
        if not title.strip():
            raise ValidationError("card title is empty")
        if self.tree.get_list(list_id) is None:
            raise ValidationError(f"unknown list {list_id!r}")
        created = await self.api.create_card(list_id, title.strip())
        new = editing.append_card(self.tree, created)
        self.store.replace(new)
        card = new.cards_in(list_id)[-1]
        if created.position != card.position:
            self.dispatcher.dispatch(ChangeSet(cards=(CardChange(card.id, card.position),)))
        return card

    async def delete_card(self, card_id: str) -> ChangeSet:
        """Delete a card and renumber the rest of its list."""
        self._require_full()
        if self.tree.get_card(card_id) is None:
            raise ValidationError(f"unknown card {card_id!r}")
        await self.api.delete_card(card_id)
        return self._commit(editing.remove_card(self.tree, card_id))

    async def update_card(self, card_id: str, **changes: Any) -> Card:
        """Edit a card's fields. Waits for the server before changing the local tree."""
        card = self.tree.get_card(card_id)
        if card is None:
            raise ValidationError(f"unknown card {card_id!r}")
        changes = _normalize_card_changes(changes)
        if self.restricted:
            check_edit(card, self.actor, changes)
        editing.edit_card(self.tree, card_id, **changes)
        await self.api.update_card(card_id, changes)
        if self.tree.get_card(card_id) is None:
            return replace(card, **changes)
        new = editing.edit_card(self.tree, card_id, **changes)
        self.store.replace(new)
        return new.get_card(card_id)

    def _require_full(self) -> None:
        if self.restricted:
            raise ValidationError("restricted view cannot change board structure")


def _normalize_card_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Coerce status labels and date strings to their model types."""
    out = dict(changes)
    if isinstance(out.get("status"), str) and not isinstance(out["status"], CardStatus):
        try:
            out["status"] = CardStatus.parse(out["status"])
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
    if isinstance(out.get("due_date"), str):
        try:
            out["due_date"] = parse_date(out["due_date"])
        except ValueError as exc:
            raise ValidationError(f"invalid due date {out['due_date']!r}") from exc
    return out
