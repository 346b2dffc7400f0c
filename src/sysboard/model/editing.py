"""Lifecycle edits: appending, removing and rewriting lists and cards.

New entities go at the end of their sibling sequence. Removals renumber
the remaining siblings so ranks stay contiguous.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from sysboard.errors import ValidationError
from sysboard.model.entities import CARD_EDIT_FIELDS, BoardList, Card
from sysboard.model.position import next_position, renumber
from sysboard.model.tree import BoardTree


def append_list(tree: BoardTree, lst: BoardList) -> BoardTree:
    """Add lst after the board's last list, with an empty card sequence."""
    if lst.board_id != tree.board.id:
        raise ValidationError(f"list {lst.id!r} belongs to board {lst.board_id!r}")
    lst = replace(lst, position=next_position(tree.lists))
    cards = dict(tree.cards)
    cards[lst.id] = ()
    return BoardTree(board=tree.board, lists=tree.lists + (lst,), cards=cards)


def append_card(tree: BoardTree, card: Card) -> BoardTree:
    """Add card after the last card of its list."""
    if tree.get_list(card.list_id) is None:
        raise ValidationError(f"unknown list {card.list_id!r}")
    seq = tree.cards_in(card.list_id)
    return tree.with_cards(card.list_id, seq + (replace(card, position=next_position(seq)),))


def remove_list(tree: BoardTree, list_id: str) -> BoardTree:
    """Drop a list together with its cards and renumber the remaining lists."""
    if tree.get_list(list_id) is None:
        raise ValidationError(f"unknown list {list_id!r}")
    lists = renumber([lst for lst in tree.lists if lst.id != list_id])
    cards = {key: seq for key, seq in tree.cards.items() if key != list_id}
    return BoardTree(board=tree.board, lists=lists, cards=cards)


def remove_card(tree: BoardTree, card_id: str) -> BoardTree:
    """Drop a card and renumber the rest of its list."""
    located = tree.locate_card(card_id)
    if located is None:
        raise ValidationError(f"unknown card {card_id!r}")
    list_id, index, _ = located
    seq = list(tree.cards_in(list_id))
    del seq[index]
    return tree.with_cards(list_id, renumber(seq))


def edit_card(tree: BoardTree, card_id: str, **changes: Any) -> BoardTree:
    """Rewrite a card's editable fields in place. Ordering fields are not editable here."""
    unknown = set(changes) - CARD_EDIT_FIELDS
    if unknown:
        raise ValidationError(f"cannot edit card fields: {', '.join(sorted(unknown))}")
    located = tree.locate_card(card_id)
    if located is None:
        raise ValidationError(f"unknown card {card_id!r}")
    list_id, index, card = located
    seq = list(tree.cards_in(list_id))
    seq[index] = replace(card, **changes)
    return tree.with_cards(list_id, tuple(seq))
