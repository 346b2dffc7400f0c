"""Shared fixtures for CLI tests: handlers talk to an in-process collaborator."""

import pytest
from builders import make_tree, seed_api

from sysboard.api.base import User
from sysboard.api.memory import MemoryBoardApi
from sysboard.model.entities import Card


@pytest.fixture
def cli_api(monkeypatch):
    """Board b1 (Backlog=[First, Second], Doing=[], Done=[]) behind every CLI command."""
    tree = make_tree({"l1": ["c1", "c2"], "l2": [], "l3": []}, members=("u1",))
    api = seed_api(MemoryBoardApi(actor="u1", users=[User("u1", "Asha"), User("u2", "Ravi")]), tree)
    api.put(Card(id="c1", title="First card", list_id="l1", position=0, assigned_to="u1"))
    api.put(Card(id="c2", title="Second card", list_id="l1", position=1))
    monkeypatch.setattr("sysboard.cli._common.make_api", lambda args: api)
    monkeypatch.delenv("SYSBOARD_USER", raising=False)
    return api
