"""Diff two board snapshots into the minimal set of persistence updates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Union

from sysboard.model.tree import BoardTree


@dataclass(frozen=True)
class ListChange:
    list_id: str
    position: int

    kind = "list"

    @property
    def entity_id(self) -> str:
        return self.list_id

    def fields(self) -> dict[str, Any]:
        return {"position": self.position}


@dataclass(frozen=True)
class CardChange:
    """A card whose rank and/or parent changed.

    The new position is always carried; ``list_id`` only when the card
    changed lists.
    """

    card_id: str
    position: int
    list_id: str | None = None

    kind = "card"

    @property
    def entity_id(self) -> str:
        return self.card_id

    def fields(self) -> dict[str, Any]:
        changed: dict[str, Any] = {"position": self.position}
        if self.list_id is not None:
            changed["list_id"] = self.list_id
        return changed


Change = Union[ListChange, CardChange]


@dataclass(frozen=True)
class ChangeSet:
    lists: tuple[ListChange, ...] = ()
    cards: tuple[CardChange, ...] = ()

    def __iter__(self) -> Iterator[Change]:
        yield from self.lists
        yield from self.cards

    def __len__(self) -> int:
        return len(self.lists) + len(self.cards)

    def __bool__(self) -> bool:
        return len(self) > 0


def diff_trees(old: BoardTree, new: BoardTree) -> ChangeSet:
    """Collect lists and cards whose persisted ordering fields differ.

    Entities are matched by id. Anything only present in ``new`` was created
    elsewhere and is skipped; anything only present in ``old`` was deleted.
    """
    if old is new:
        return ChangeSet()

    old_lists = {lst.id: lst for lst in old.lists}
    list_changes = []
    for lst in new.lists:
        prior = old_lists.get(lst.id)
        if prior is not None and prior.position != lst.position:
            list_changes.append(ListChange(lst.id, lst.position))

    old_cards = {card.id: card for seq in old.cards.values() for card in seq}
    card_changes = []
    for list_id, seq in new.cards.items():
        if old.cards.get(list_id) is seq:
            continue
        for card in seq:
            prior = old_cards.get(card.id)
            if prior is None:
                continue
            moved = prior.list_id != card.list_id
            ranked = prior.position != card.position
            if moved or ranked:
                card_changes.append(
                    CardChange(
                        card.id,
                        position=card.position,
                        list_id=card.list_id if moved else None,
                    )
                )

    return ChangeSet(lists=tuple(list_changes), cards=tuple(card_changes))
