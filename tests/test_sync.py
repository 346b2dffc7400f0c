"""Tests for fire-and-forget change-set dispatch."""

import asyncio

import pytest
from builders import make_tree, seed_api
from recording import RecordingApi

from sysboard.errors import PersistError
from sysboard.model.changeset import CardChange, ChangeSet, ListChange
from sysboard.sync import SyncDispatcher


@pytest.fixture
def api():
    return seed_api(RecordingApi(), make_tree({"L1": ["a", "b"], "L2": []}))


@pytest.mark.asyncio
async def test_one_call_per_change(api):
    dispatcher = SyncDispatcher(api)
    changes = ChangeSet(
        lists=(ListChange("L2", 0), ListChange("L1", 1)),
        cards=(CardChange("a", 0, list_id="L2"), CardChange("b", 0)),
    )
    tasks = dispatcher.dispatch(changes)
    assert len(tasks) == 4
    await dispatcher.drain()

    assert sorted(api.updates) == sorted(
        [
            ("list", "L2", {"position": 0}),
            ("list", "L1", {"position": 1}),
            ("card", "a", {"position": 0, "list_id": "L2"}),
            ("card", "b", {"position": 0}),
        ]
    )
    assert api.get_card("a").list_id == "L2"
    assert api.get_list("L1").position == 1
    assert dispatcher.failures == []


@pytest.mark.asyncio
async def test_empty_changeset_starts_nothing(api):
    dispatcher = SyncDispatcher(api)
    assert dispatcher.dispatch(ChangeSet()) == []
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_dispatch_does_not_wait(api):
    api.gate = asyncio.Event()
    dispatcher = SyncDispatcher(api)
    dispatcher.dispatch(ChangeSet(cards=(CardChange("a", 1),)))
    assert dispatcher.pending == 1
    await asyncio.sleep(0)
    assert api.get_card("a").position == 0

    api.gate.set()
    await dispatcher.drain()
    assert dispatcher.pending == 0
    assert api.get_card("a").position == 1


@pytest.mark.asyncio
async def test_failure_is_logged_and_others_still_persist(api, caplog):
    api.fail = {"a"}
    dispatcher = SyncDispatcher(api)
    dispatcher.dispatch(ChangeSet(cards=(CardChange("a", 1), CardChange("b", 0))))
    await dispatcher.drain()

    assert len(dispatcher.failures) == 1
    failure = dispatcher.failures[0]
    assert isinstance(failure, PersistError)
    assert failure.kind == "card"
    assert failure.entity_id == "a"
    assert failure.fields == {"position": 1}
    assert "failed to persist card a" in caplog.text
    assert api.get_card("b").position == 0


@pytest.mark.asyncio
async def test_take_failures_clears_them(api):
    api.fail = {"a", "b"}
    dispatcher = SyncDispatcher(api)
    dispatcher.dispatch(ChangeSet(cards=(CardChange("a", 1), CardChange("b", 0))))
    await dispatcher.drain()

    taken = dispatcher.take_failures()
    assert sorted(f.entity_id for f in taken) == ["a", "b"]
    assert dispatcher.failures == []
    assert dispatcher.take_failures() == []


@pytest.mark.asyncio
async def test_no_retry(api):
    api.fail = {"L1"}
    dispatcher = SyncDispatcher(api)
    dispatcher.dispatch(ChangeSet(lists=(ListChange("L1", 1),)))
    await dispatcher.drain()
    assert api.updates == [("list", "L1", {"position": 1})]
