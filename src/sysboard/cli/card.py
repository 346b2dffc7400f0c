"""Handlers for 'sysboard card' commands."""

from sysboard.cli._common import card_to_dict, changes_summary, output_result, position_arg, run_session
from sysboard.errors import ValidationError


def card_add(args) -> int:
    """Create a card at the end of a list."""

    async def handler(session, args):
        await session.open(args.board)
        card = await session.create_card(args.list, args.title)
        output_result(card_to_dict(card), f"Created card {card.id} in {card.list_id}", args.json)
        return 0

    return run_session(args, handler)


def card_move(args) -> int:
    """Move a card within its list or to another list (default: to the end)."""

    async def handler(session, args):
        tree = await session.open(args.board)
        if tree.get_card(args.id) is None:
            raise ValidationError(f"card {args.id!r} not found")
        if tree.get_list(args.list) is None:
            raise ValidationError(f"list {args.list!r} not found")
        index = position_arg(args.position)
        if index is None:
            index = len(tree.cards_in(args.list))
        changes = session.move_card(args.id, args.list, index)
        output_result(
            {"id": args.id, "list": args.list, "updates": len(changes)},
            f"Moved card {args.id} to {args.list} ({changes_summary(changes)})",
            args.json,
        )
        return 0

    return run_session(args, handler)


def card_set(args) -> int:
    """Edit card fields. With --mine only the status may change."""

    async def handler(session, args):
        changes = {
            key: value
            for key, value in (
                ("title", args.title),
                ("description", args.description),
                ("status", args.status),
                ("due_date", args.due),
                ("assigned_to", args.assign),
            )
            if value is not None
        }
        if not changes:
            raise ValidationError("nothing to change")
        await session.open(args.board)
        card = await session.update_card(args.id, **changes)
        output_result(card_to_dict(card), f"Updated card {card.id}", args.json)
        return 0

    return run_session(args, handler)


def card_delete(args) -> int:
    """Delete a card."""

    async def handler(session, args):
        await session.open(args.board)
        changes = await session.delete_card(args.id)
        output_result(
            {"id": args.id, "updates": len(changes)},
            f"Deleted card {args.id} ({changes_summary(changes)})",
            args.json,
        )
        return 0

    return run_session(args, handler)
