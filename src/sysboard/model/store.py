"""Local board store: the single in-memory tree used for rendering and diffing."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable

from sysboard.errors import LoadError
from sysboard.model.entities import Board, Card
from sysboard.model.position import sort_by_position
from sysboard.model.tree import BoardTree

if TYPE_CHECKING:
    from sysboard.api.base import BoardApi

logger = logging.getLogger(__name__)

Callback = Callable[["BoardTree | None", "BoardTree"], None]
CardFilter = Callable[[Card], bool]


class BoardStore:
    """Holds the current board tree and the one it replaced.

    The tree is only ever swapped whole via ``replace``; nothing mutates it
    in place. Watchers are called synchronously on every swap with
    ``(old, new)``.
    """

    def __init__(self, api: BoardApi, tree: BoardTree | None = None) -> None:
        self.api = api
        self._current = tree
        self._previous: BoardTree | None = None
        self._watchers: list[Callback] = []
        self._version = 0

    @property
    def current(self) -> BoardTree | None:
        return self._current

    @property
    def previous(self) -> BoardTree | None:
        """The tree in place before the last replace, for diffing."""
        return self._previous

    @property
    def version(self) -> int:
        return self._version

    def watch(self, callback: Callback) -> Callable[[], None]:
        """Watch tree swaps. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def replace(self, tree: BoardTree) -> None:
        """Atomically swap in a new tree."""
        old = self._current
        self._previous = old
        self._current = tree
        self._version += 1
        for cb in list(self._watchers):
            cb(old, tree)

    async def load(
        self,
        board_id: str,
        board: Board | None = None,
        card_filter: CardFilter | None = None,
    ) -> BoardTree:
        """Fetch a board's lists, then every list's cards concurrently, and swap them in.

        All-or-nothing: any failed fetch raises LoadError and leaves the
        current tree as it was. ``card_filter`` drops cards from the loaded
        tree (restricted views).
        """
        try:
            if board is None:
                board = await self._find_board(board_id)
            lists = sort_by_position(await self.api.lists(board_id))
            fetched = await asyncio.gather(*(self.api.cards(lst.id) for lst in lists))
        except LoadError:
            raise
        except Exception as exc:
            logger.error("loading board %s failed: %s", board_id, exc)
            raise LoadError(f"failed to load board {board_id}: {exc}") from exc

        cards = {}
        for lst, seq in zip(lists, fetched):
            ordered = sort_by_position(seq)
            if card_filter is not None:
                ordered = [card for card in ordered if card_filter(card)]
            cards[lst.id] = tuple(ordered)

        tree = BoardTree(board=board, lists=tuple(lists), cards=cards)
        self.replace(tree)
        logger.debug("loaded board %s: %d lists, %d cards", board_id, len(lists), tree.card_count())
        return tree

    async def _find_board(self, board_id: str) -> Board:
        for board in await self.api.boards():
            if board.id == board_id:
                return board
        raise LoadError(f"board {board_id} not found")
