"""Shared helpers for CLI command handlers."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable

from sysboard.api.base import BoardApi
from sysboard.api.http import HttpBoardApi
from sysboard.config import Settings, load_settings
from sysboard.errors import BoardError, ValidationError
from sysboard.model.tree import BoardTree
from sysboard.session import BoardSession

Handler = Callable[[BoardSession, Any], Awaitable[int]]


def settings_from_args(args) -> Settings:
    """Environment settings overridden by any global flags on args."""
    return load_settings(
        api_url=getattr(args, "api_url", None),
        token=getattr(args, "token", None),
        user=getattr(args, "user", None),
    )


def make_api(args) -> BoardApi:
    """Build the storage collaborator for a command."""
    return HttpBoardApi.from_settings(settings_from_args(args))


def run_session(args, handler: Handler) -> int:
    """Run handler with a fresh session and wait for dispatched updates before returning.

    Errors from the board layer are printed and exit 1. Updates that fail
    to persist are reported on stderr but do not change the exit code.
    """
    json_mode = getattr(args, "json", False)
    settings = settings_from_args(args)
    restricted = bool(getattr(args, "mine", False))
    if restricted and not settings.user:
        error("--mine needs a user (--user or SYSBOARD_USER)", json_mode)

    async def main() -> int:
        api = make_api(args)
        session = BoardSession(api, actor=settings.user, restricted=restricted)
        try:
            return await handler(session, args)
        finally:
            await session.dispatcher.drain()
            for failure in session.dispatcher.take_failures():
                print(f"warning: {failure}", file=sys.stderr)
            await api.aclose()

    try:
        return asyncio.run(main())
    except BoardError as e:
        error(str(e), json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def position_arg(position: int | None) -> int | None:
    """Convert a 1-indexed CLI position to a 0-indexed one. Raises ValidationError below 1."""
    if position is None:
        return None
    if position < 1:
        raise ValidationError(f"position must be 1 or more, got {position}")
    return position - 1


def card_to_dict(card) -> dict:
    return {
        "id": card.id,
        "title": card.title,
        "listId": card.list_id,
        "position": card.position,
        "status": card.status.value,
        "assignedTo": card.assigned_to,
        "dueDate": card.due_date.isoformat() if card.due_date else None,
    }


def tree_to_dict(tree: BoardTree) -> dict:
    return {
        "id": tree.board.id,
        "name": tree.board.name,
        "lists": [
            {
                "id": lst.id,
                "title": lst.title,
                "position": lst.position,
                "cards": [card_to_dict(card) for card in tree.cards_in(lst.id)],
            }
            for lst in tree.lists
        ],
    }


def changes_summary(changes) -> str:
    n = len(changes)
    return f"{n} update{'s' if n != 1 else ''}"
