"""Pure reordering of lists and cards within a board tree.

A drop is described by a ``Move``: what kind of entity was dragged, where it
was picked up (parent id and index) and where it was dropped. ``reorder``
never raises. Malformed moves and drops outside any target leave the tree
untouched, and the caller can tell by identity (``new is old``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from sysboard.errors import ValidationError
from sysboard.model.position import renumber
from sysboard.model.tree import BoardTree

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    LIST = "list"
    CARD = "card"


@dataclass(frozen=True)
class Location:
    """A slot in a sibling sequence: the parent's id and an index within it."""

    parent_id: str
    index: int


@dataclass(frozen=True)
class Move:
    kind: EntityKind
    source: Location
    destination: Location | None

    @property
    def is_noop(self) -> bool:
        return self.destination is not None and self.destination == self.source


def list_move(tree: BoardTree, list_id: str, index: int) -> Move:
    """Build a move of list_id to index. Raises ValidationError for unknown ids."""
    source_index = tree.list_index(list_id)
    if source_index is None:
        raise ValidationError(f"list {list_id!r} is not on board {tree.board.id!r}")
    board_id = tree.board.id
    return Move(EntityKind.LIST, Location(board_id, source_index), Location(board_id, index))


def card_move(tree: BoardTree, card_id: str, list_id: str, index: int) -> Move:
    """Build a move of card_id into list_id at index. Raises ValidationError for unknown ids."""
    located = tree.locate_card(card_id)
    if located is None:
        raise ValidationError(f"card {card_id!r} is not on board {tree.board.id!r}")
    source_list, source_index, _ = located
    return Move(EntityKind.CARD, Location(source_list, source_index), Location(list_id, index))


def validate(tree: BoardTree, move: Move) -> None:
    """Raise ValidationError if move cannot apply to tree."""
    if move.destination is None:
        raise ValidationError("dropped outside any target")
    source, dest = move.source, move.destination
    if dest.index < 0:
        raise ValidationError(f"negative destination index {dest.index}")

    if move.kind is EntityKind.LIST:
        board_id = tree.board.id
        if source.parent_id != board_id or dest.parent_id != board_id:
            raise ValidationError("list moves must stay on the loaded board")
        if not 0 <= source.index < len(tree.lists):
            raise ValidationError(f"no list at index {source.index}")
        return

    if tree.get_list(source.parent_id) is None:
        raise ValidationError(f"unknown source list {source.parent_id!r}")
    if tree.get_list(dest.parent_id) is None:
        raise ValidationError(f"unknown destination list {dest.parent_id!r}")
    if not 0 <= source.index < len(tree.cards_in(source.parent_id)):
        raise ValidationError(f"no card at index {source.index} of list {source.parent_id!r}")


def reorder(tree: BoardTree, move: Move) -> BoardTree:
    """Apply move to tree and return the new tree.

    Returns tree itself (unchanged) for no-op or malformed moves.
    """
    try:
        validate(tree, move)
    except ValidationError as exc:
        logger.debug("ignoring move %s: %s", move, exc)
        return tree
    if move.is_noop or _lands_in_place(tree, move):
        return tree

    if move.kind is EntityKind.LIST:
        return move_list(tree, move.source.index, move.destination.index)
    return move_card(
        tree,
        move.source.parent_id,
        move.source.index,
        move.destination.parent_id,
        move.destination.index,
    )


def _lands_in_place(tree: BoardTree, move: Move) -> bool:
    """True when a same-parent drop past the end clamps back onto the source slot."""
    source, dest = move.source, move.destination
    if source.parent_id != dest.parent_id:
        return False
    if move.kind is EntityKind.LIST:
        last = len(tree.lists) - 1
    else:
        last = len(tree.cards_in(source.parent_id)) - 1
    return min(dest.index, last) == source.index


def move_list(tree: BoardTree, source_index: int, dest_index: int) -> BoardTree:
    """Move the list at source_index to dest_index and renumber every list."""
    lists = list(tree.lists)
    moved = lists.pop(source_index)
    lists.insert(min(dest_index, len(lists)), moved)
    return BoardTree(board=tree.board, lists=renumber(lists), cards=tree.cards)


def move_card(
    tree: BoardTree,
    source_list: str,
    source_index: int,
    dest_list: str,
    dest_index: int,
) -> BoardTree:
    """Move a card between (or within) lists and renumber the affected lists.

    Same-list moves renumber only that list. Cross-list moves reassign the
    card's list_id and renumber both the source and destination lists.
    """
    source = list(tree.cards_in(source_list))
    card = source.pop(source_index)

    if source_list == dest_list:
        source.insert(min(dest_index, len(source)), card)
        return tree.with_cards(source_list, renumber(source))

    dest = list(tree.cards_in(dest_list))
    dest.insert(min(dest_index, len(dest)), replace(card, list_id=dest_list))
    return tree.with_cards(source_list, renumber(source)).with_cards(dest_list, renumber(dest))
