"""Handlers for 'sysboard list' commands."""

from sysboard.cli._common import changes_summary, output_result, position_arg, run_session
from sysboard.errors import ValidationError


def list_add(args) -> int:
    """Create a list at the end of a board."""

    async def handler(session, args):
        await session.open(args.board)
        lst = await session.create_list(args.title)
        output_result(
            {"id": lst.id, "title": lst.title, "position": lst.position},
            f"Created list {lst.id} ({lst.title}) at position {lst.position + 1}",
            args.json,
        )
        return 0

    return run_session(args, handler)


def list_move(args) -> int:
    """Move a list to a new position on its board."""

    async def handler(session, args):
        tree = await session.open(args.board)
        if tree.get_list(args.id) is None:
            raise ValidationError(f"list {args.id!r} not found")
        changes = session.move_list(args.id, position_arg(args.position))
        output_result(
            {"id": args.id, "updates": len(changes)},
            f"Moved list {args.id} ({changes_summary(changes)})",
            args.json,
        )
        return 0

    return run_session(args, handler)


def list_delete(args) -> int:
    """Delete a list and its cards."""

    async def handler(session, args):
        await session.open(args.board)
        changes = await session.delete_list(args.id)
        output_result(
            {"id": args.id, "updates": len(changes)},
            f"Deleted list {args.id} ({changes_summary(changes)})",
            args.json,
        )
        return 0

    return run_session(args, handler)
