"""Tests for the REST collaborator against a mocked transport."""

import json
from datetime import date

import httpx
import pytest

from sysboard.api.http import HttpBoardApi, to_wire, unwrap
from sysboard.errors import ApiError
from sysboard.model.entities import CardStatus


def _api(handler, token="t0k"):
    return HttpBoardApi("http://api.test", token=token, transport=httpx.MockTransport(handler))


def test_to_wire_translates_keys_and_values():
    body = to_wire({"list_id": "l2", "position": 0, "status": CardStatus.ON_HOLD, "due_date": date(2026, 5, 1)})
    assert body == {"listId": "l2", "position": 0, "status": "OnHold", "dueDate": "2026-05-01"}


def test_unwrap():
    assert unwrap({"lists": [1]}, "lists") == [1]
    assert unwrap([1], "lists") == [1]
    assert unwrap({"_id": "x"}, "card") == {"_id": "x"}


@pytest.mark.asyncio
async def test_lists_sends_token_and_parses_envelope():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"lists": [{"_id": "l1", "title": "Todo", "position": 1}]})

    async with _api(handler) as api:
        lists = await api.lists("b1")

    assert seen[0].url.path == "/api/lists/b1"
    assert seen[0].headers["Authorization"] == "Bearer t0k"
    assert lists[0].board_id == "b1"
    assert lists[0].position == 1


@pytest.mark.asyncio
async def test_cards_bare_array():
    def handler(request):
        return httpx.Response(200, json=[{"_id": "c1", "title": "A", "position": 0, "status": "In Progress"}])

    async with _api(handler, token=None) as api:
        cards = await api.cards("l9")

    assert cards[0].list_id == "l9"
    assert cards[0].status is CardStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_no_token_no_auth_header():
    headers = []

    def handler(request):
        headers.append(request.headers)
        return httpx.Response(200, json={"boards": []})

    async with _api(handler, token=None) as api:
        assert await api.boards() == []
    assert "Authorization" not in headers[0]


@pytest.mark.asyncio
async def test_update_card_is_field_sparse():
    bodies = []

    def handler(request):
        bodies.append((request.method, request.url.path, json.loads(request.content)))
        return httpx.Response(200, json={"card": {"_id": "c1"}})

    async with _api(handler) as api:
        await api.update_card("c1", {"position": 2, "list_id": "l3"})
        await api.update_list("l3", {"position": 0})

    assert bodies == [
        ("PUT", "/api/cards/c1", {"position": 2, "listId": "l3"}),
        ("PUT", "/api/lists/l3", {"position": 0}),
    ]


@pytest.mark.asyncio
async def test_create_endpoints():
    def handler(request):
        body = json.loads(request.content)
        if request.url.path == "/api/boards":
            return httpx.Response(201, json={"board": {"_id": "b7", "name": body["name"], "members": ["u1"]}})
        if request.url.path == "/api/lists":
            return httpx.Response(201, json={"list": {"_id": "l7", "title": body["title"], "position": 4}})
        return httpx.Response(201, json={"_id": "c7", "title": body["title"], "listId": body["listId"]})

    async with _api(handler) as api:
        board = await api.create_board("Ops", "desc")
        lst = await api.create_list("b7", "Doing")
        card = await api.create_card("l7", "Ship")

    assert board.members == frozenset({"u1"})
    assert (lst.id, lst.board_id, lst.position) == ("l7", "b7", 4)
    assert (card.id, card.list_id) == ("c7", "l7")


@pytest.mark.asyncio
async def test_add_member_and_users():
    calls = []

    def handler(request):
        calls.append((request.method, request.url.path, request.content))
        if request.url.path == "/api/auth/employees":
            return httpx.Response(200, json={"employees": [{"_id": "u1", "name": "Asha", "email": "a@x.io"}]})
        return httpx.Response(200, json={"message": "ok"})

    async with _api(handler) as api:
        users = await api.users()
        await api.add_member("b1", "u1")

    assert users[0].email == "a@x.io"
    assert calls[1][1] == "/api/boards/add-member"
    assert json.loads(calls[1][2]) == {"boardId": "b1", "userId": "u1"}


@pytest.mark.asyncio
async def test_error_uses_server_message():
    def handler(request):
        return httpx.Response(403, json={"message": "Only admins can delete boards"})

    async with _api(handler) as api:
        with pytest.raises(ApiError, match="Only admins") as info:
            await api.delete_board("b1")
    assert info.value.status == 403


@pytest.mark.asyncio
async def test_error_without_body():
    def handler(request):
        return httpx.Response(500)

    async with _api(handler) as api:
        with pytest.raises(ApiError, match="returned 500"):
            await api.delete_list("l1")


@pytest.mark.asyncio
async def test_transport_error_becomes_api_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with _api(handler) as api:
        with pytest.raises(ApiError, match="refused") as info:
            await api.boards()
    assert info.value.status is None
