"""Shared fixtures: a small board tree and a collaborator seeded with it."""

import pytest
from builders import make_tree, seed_api

from sysboard.api.base import User
from sysboard.api.memory import MemoryBoardApi


@pytest.fixture
def board_tree():
    """Board b1 with lists l1=[a, b, c], l2=[d], l3=[]."""
    return make_tree({"l1": ["a", "b", "c"], "l2": ["d"], "l3": []}, members=("u1", "u2"))


@pytest.fixture
def memory_api(board_tree):
    """MemoryBoardApi holding board_tree, with two known users."""
    api = MemoryBoardApi(actor="u1", users=[User("u1", "Asha"), User("u2", "Ravi")])
    return seed_api(api, board_tree)
