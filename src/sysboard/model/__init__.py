"""Board tree model: positions, store, reordering and change-sets."""

from sysboard.model.changeset import CardChange, ChangeSet, ListChange, diff_trees
from sysboard.model.editing import append_card, append_list, edit_card, remove_card, remove_list
from sysboard.model.entities import Board, BoardList, Card, CardStatus
from sysboard.model.position import is_contiguous, renumber, sort_by_position
from sysboard.model.reorder import EntityKind, Location, Move, card_move, list_move, reorder
from sysboard.model.store import BoardStore
from sysboard.model.tree import BoardTree

__all__ = [
    "Board",
    "BoardList",
    "BoardStore",
    "BoardTree",
    "Card",
    "CardChange",
    "CardStatus",
    "ChangeSet",
    "EntityKind",
    "ListChange",
    "Location",
    "Move",
    "append_card",
    "append_list",
    "card_move",
    "diff_trees",
    "edit_card",
    "is_contiguous",
    "list_move",
    "remove_card",
    "remove_list",
    "renumber",
    "reorder",
    "sort_by_position",
]
