"""Storage collaborator backed by the dashboard's REST API."""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Any

import httpx

from sysboard.api.base import BoardApi, User
from sysboard.config import Settings
from sysboard.errors import ApiError
from sysboard.model.entities import Board, BoardList, Card

logger = logging.getLogger(__name__)

WIRE_KEYS = {
    "list_id": "listId",
    "board_id": "boardId",
    "due_date": "dueDate",
    "assigned_to": "assignedTo",
}


def to_wire(changes: dict[str, Any]) -> dict[str, Any]:
    """Translate a Python-keyed change dict into the API's JSON body."""
    body = {}
    for key, value in changes.items():
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, date):
            value = value.isoformat()
        body[WIRE_KEYS.get(key, key)] = value
    return body


def unwrap(payload: Any, key: str) -> Any:
    """Return payload[key] for enveloped responses, else payload itself.

    The API answers both ``{"lists": [...]}`` and a bare ``[...]``.
    """
    if isinstance(payload, dict) and key in payload:
        return payload[key]
    return payload


class HttpBoardApi(BoardApi):
    """REST collaborator over an ``httpx.AsyncClient``.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpBoardApi:
        return cls(settings.api_url, token=settings.token, timeout=settings.timeout)

    async def __aenter__(self) -> HttpBoardApi:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, json: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.RequestError as exc:
            raise ApiError(f"{method} {url} failed: {exc}") from exc
        if response.is_error:
            raise ApiError(_error_message(response), status=response.status_code)
        if not response.content:
            return None
        return response.json()

    # --- boards ---

    async def boards(self) -> list[Board]:
        payload = await self._request("GET", "/api/boards")
        items = unwrap(payload, "boards")
        return [Board.from_api(item) for item in items] if isinstance(items, list) else []

    async def create_board(self, name: str, description: str | None = None) -> Board:
        payload = await self._request("POST", "/api/boards", json={"name": name, "description": description or ""})
        return Board.from_api(unwrap(payload, "board"))

    async def delete_board(self, board_id: str) -> None:
        await self._request("DELETE", f"/api/boards/{board_id}")

    async def add_member(self, board_id: str, user_id: str) -> None:
        await self._request("POST", "/api/boards/add-member", json={"boardId": board_id, "userId": user_id})

    async def users(self) -> list[User]:
        payload = await self._request("GET", "/api/auth/employees")
        return [
            User(id=str(item["_id"]), name=item.get("name", ""), email=item.get("email"))
            for item in unwrap(payload, "employees") or []
        ]

    # --- lists ---

    async def lists(self, board_id: str) -> list[BoardList]:
        payload = await self._request("GET", f"/api/lists/{board_id}")
        return [BoardList.from_api(item, board_id=board_id) for item in unwrap(payload, "lists")]

    async def create_list(self, board_id: str, title: str) -> BoardList:
        payload = await self._request("POST", "/api/lists", json={"boardId": board_id, "title": title})
        return BoardList.from_api(unwrap(payload, "list"), board_id=board_id)

    async def update_list(self, list_id: str, changes: dict[str, Any]) -> None:
        await self._request("PUT", f"/api/lists/{list_id}", json=to_wire(changes))

    async def delete_list(self, list_id: str) -> None:
        await self._request("DELETE", f"/api/lists/{list_id}")

    # --- cards ---

    async def cards(self, list_id: str) -> list[Card]:
        payload = await self._request("GET", f"/api/cards/{list_id}")
        return [Card.from_api(item, list_id=list_id) for item in unwrap(payload, "cards")]

    async def create_card(self, list_id: str, title: str) -> Card:
        payload = await self._request("POST", "/api/cards", json={"listId": list_id, "title": title})
        return Card.from_api(unwrap(payload, "card"), list_id=list_id)

    async def update_card(self, card_id: str, changes: dict[str, Any]) -> None:
        await self._request("PUT", f"/api/cards/{card_id}", json=to_wire(changes))

    async def delete_card(self, card_id: str) -> None:
        await self._request("DELETE", f"/api/cards/{card_id}")


def _error_message(response: httpx.Response) -> str:
    """Prefer the server's ``message`` field, fall back to the status line."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"{response.request.method} {response.request.url.path} returned {response.status_code}"
