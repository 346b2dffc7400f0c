"""Immutable snapshot of one loaded board: its lists and each list's cards."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from sysboard.model.entities import Board, BoardList, Card


@dataclass(frozen=True)
class BoardTree:
    """One Board, its Lists in display order, and each List's Card sequence.

    ``cards`` maps list id to that list's cards in display order. Every list
    in ``lists`` has an entry, possibly empty. Trees are never mutated;
    edits build a new tree that shares untouched records.
    """

    board: Board
    lists: tuple[BoardList, ...] = ()
    cards: dict[str, tuple[Card, ...]] = field(default_factory=dict)

    def get_list(self, list_id: str) -> BoardList | None:
        for lst in self.lists:
            if lst.id == list_id:
                return lst
        return None

    def list_index(self, list_id: str) -> int | None:
        for i, lst in enumerate(self.lists):
            if lst.id == list_id:
                return i
        return None

    def cards_in(self, list_id: str) -> tuple[Card, ...]:
        return self.cards.get(list_id, ())

    def iter_cards(self) -> Iterator[Card]:
        """Yield every card, list by list in display order."""
        for lst in self.lists:
            yield from self.cards_in(lst.id)

    def get_card(self, card_id: str) -> Card | None:
        located = self.locate_card(card_id)
        return located[2] if located else None

    def locate_card(self, card_id: str) -> tuple[str, int, Card] | None:
        """Find a card's (list_id, index, card), or None if not on this board."""
        for list_id, seq in self.cards.items():
            for i, card in enumerate(seq):
                if card.id == card_id:
                    return list_id, i, card
        return None

    def with_cards(self, list_id: str, seq: tuple[Card, ...]) -> BoardTree:
        """Return a copy of this tree with one list's card sequence replaced."""
        cards = dict(self.cards)
        cards[list_id] = seq
        return BoardTree(board=self.board, lists=self.lists, cards=cards)

    def card_count(self) -> int:
        return sum(len(seq) for seq in self.cards.values())
