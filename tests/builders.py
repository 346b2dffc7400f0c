"""Builders for board trees used across the test suite."""

from sysboard.model.entities import Board, BoardList, Card
from sysboard.model.tree import BoardTree


def make_tree(layout, board_id="b1", members=()):
    """Build a tree from {list_id: [card_id, ...]} in display order.

    Positions are dense; card titles are the upper-cased ids.
    """
    board = Board(id=board_id, name="Sprint", members=frozenset(members))
    lists = tuple(
        BoardList(id=list_id, title=list_id.upper(), board_id=board_id, position=i) for i, list_id in enumerate(layout)
    )
    cards = {
        list_id: tuple(
            Card(id=card_id, title=card_id.upper(), list_id=list_id, position=i) for i, card_id in enumerate(card_ids)
        )
        for list_id, card_ids in layout.items()
    }
    return BoardTree(board=board, lists=lists, cards=cards)


def seed_api(api, tree):
    """Store every entity of tree in a MemoryBoardApi."""
    api.put(tree.board, *tree.lists, *tree.iter_cards())
    return api


def layout_of(tree):
    """{list_id: [card_id, ...]} of a tree, for compact assertions."""
    return {lst.id: [card.id for card in tree.cards_in(lst.id)] for lst in tree.lists}
