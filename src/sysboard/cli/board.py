"""Handlers for 'sysboard board' commands."""

from sysboard.cli._common import output_json, output_result, run_session, tree_to_dict


def board_list(args) -> int:
    """List boards visible to the current actor (or only member boards with --mine)."""

    async def handler(session, args):
        boards = await session.boards()
        if args.json:
            output_json(
                [{"id": b.id, "name": b.name, "description": b.description, "members": sorted(b.members)} for b in boards]
            )
        else:
            for b in boards:
                members = "member" if len(b.members) == 1 else "members"
                print(f"{b.id}  {b.name:<20} {len(b.members)} {members}")
        return 0

    return run_session(args, handler)


def board_show(args) -> int:
    """Show a board's lists and cards in display order."""

    async def handler(session, args):
        tree = await session.open(args.board)
        if args.json:
            output_json(tree_to_dict(tree))
            return 0
        print(f"{tree.board.id}  {tree.board.name}")
        for lst in tree.lists:
            print(f"  {lst.id}  {lst.title}")
            for card in tree.cards_in(lst.id):
                assignee = f"  @{card.assigned_to}" if card.assigned_to else ""
                print(f"    {card.id}  {card.title}  [{card.status.value}]{assignee}")
        return 0

    return run_session(args, handler)


def board_add(args) -> int:
    """Create a board."""

    async def handler(session, args):
        board = await session.create_board(args.name, args.description)
        output_result({"id": board.id, "name": board.name}, f"Created board {board.id} ({board.name})", args.json)
        return 0

    return run_session(args, handler)


def board_delete(args) -> int:
    """Delete a board with all its lists and cards."""

    async def handler(session, args):
        await session.delete_board(args.board)
        output_result({"id": args.board}, f"Deleted board {args.board}", args.json)
        return 0

    return run_session(args, handler)


def board_member(args) -> int:
    """Add one user, or every user with --all, to a board."""

    async def handler(session, args):
        if args.all:
            count = await session.add_all_members(args.board)
            output_result({"id": args.board, "added": count}, f"Added {count} members to {args.board}", args.json)
        else:
            await session.add_member(args.board, args.user_id)
            output_result(
                {"id": args.board, "added": 1}, f"Added {args.user_id} to {args.board}", args.json
            )
        return 0

    return run_session(args, handler)
