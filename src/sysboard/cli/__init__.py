"""CLI argument parser and dispatch for sysboard."""

import argparse

from sysboard.cli.board import board_add, board_delete, board_list, board_member, board_show
from sysboard.cli.card import card_add, card_delete, card_move, card_set
from sysboard.cli.lists import list_add, list_delete, list_move
from sysboard.model.entities import CardStatus


def add_global_flags(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    """Flags accepted before or after any noun and verb.

    Subcommand copies use ``suppress`` so an unset flag there leaves
    whatever was given earlier on the command line.
    """

    def default(value):
        return argparse.SUPPRESS if suppress else value

    parser.add_argument(
        "--api-url", dest="api_url", default=default(None), help="API base URL (default: $SYSBOARD_API_URL)"
    )
    parser.add_argument("--token", default=default(None), help="Bearer token (default: $SYSBOARD_TOKEN)")
    parser.add_argument("--user", default=default(None), help="Current user id (default: $SYSBOARD_USER)")
    parser.add_argument("--json", action="store_true", default=default(False), help="Machine-readable JSON output")
    parser.add_argument(
        "-v", "--verbose", action="count", default=default(0), help="More logging (repeat for debug)"
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    add_global_flags(common, suppress=True)

    parser = argparse.ArgumentParser(prog="sysboard", description="Kanban board client")
    add_global_flags(parser)

    nouns = parser.add_subparsers(dest="noun")

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_list_p = board_verbs.add_parser("list", help="List boards", parents=[common])
    board_list_p.add_argument("--mine", action="store_true", help="Only boards I am a member of")
    board_list_p.set_defaults(func=board_list)

    board_show_p = board_verbs.add_parser("show", help="Show lists and cards", parents=[common])
    board_show_p.add_argument("board", help="Board ID")
    board_show_p.add_argument("--mine", action="store_true", help="Only cards assigned to me")
    board_show_p.set_defaults(func=board_show)

    board_add_p = board_verbs.add_parser("add", help="Create a board", parents=[common])
    board_add_p.add_argument("name", help="Board name")
    board_add_p.add_argument("--description", help="Board description")
    board_add_p.set_defaults(func=board_add)

    board_delete_p = board_verbs.add_parser("delete", help="Delete a board", parents=[common])
    board_delete_p.add_argument("board", help="Board ID")
    board_delete_p.set_defaults(func=board_delete)

    board_member_p = board_verbs.add_parser("member", help="Add board members", parents=[common])
    board_member_p.add_argument("board", help="Board ID")
    who = board_member_p.add_mutually_exclusive_group(required=True)
    who.add_argument("user_id", nargs="?", help="User ID to add")
    who.add_argument("--all", action="store_true", help="Add every user")
    board_member_p.set_defaults(func=board_member)

    # board with no verb = list
    board_p.set_defaults(func=board_list, mine=False)

    # --- list ---
    list_p = nouns.add_parser("list", help="List operations", parents=[common])
    list_verbs = list_p.add_subparsers(dest="verb", required=True)

    list_add_p = list_verbs.add_parser("add", help="Create a list", parents=[common])
    list_add_p.add_argument("board", help="Board ID")
    list_add_p.add_argument("title", help="List title")
    list_add_p.set_defaults(func=list_add)

    list_move_p = list_verbs.add_parser("move", help="Move a list", parents=[common])
    list_move_p.add_argument("board", help="Board ID")
    list_move_p.add_argument("id", help="List ID")
    list_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    list_move_p.set_defaults(func=list_move)

    list_delete_p = list_verbs.add_parser("delete", help="Delete a list and its cards", parents=[common])
    list_delete_p.add_argument("board", help="Board ID")
    list_delete_p.add_argument("id", help="List ID")
    list_delete_p.set_defaults(func=list_delete)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb", required=True)

    card_add_p = card_verbs.add_parser("add", help="Create a card", parents=[common])
    card_add_p.add_argument("board", help="Board ID")
    card_add_p.add_argument("list", help="List ID")
    card_add_p.add_argument("title", help="Card title")
    card_add_p.set_defaults(func=card_add)

    card_move_p = card_verbs.add_parser("move", help="Move a card", parents=[common])
    card_move_p.add_argument("board", help="Board ID")
    card_move_p.add_argument("id", help="Card ID")
    card_move_p.add_argument("--list", required=True, help="Target list ID")
    card_move_p.add_argument("--position", type=int, help="Position in list (1-indexed, default: end)")
    card_move_p.set_defaults(func=card_move)

    card_set_p = card_verbs.add_parser("set", help="Edit card fields", parents=[common])
    card_set_p.add_argument("board", help="Board ID")
    card_set_p.add_argument("id", help="Card ID")
    card_set_p.add_argument("--title")
    card_set_p.add_argument("--description")
    card_set_p.add_argument("--status", choices=[s.value for s in CardStatus])
    card_set_p.add_argument("--due", help="Due date (YYYY-MM-DD)")
    card_set_p.add_argument("--assign", help="Assignee user ID")
    card_set_p.add_argument("--mine", action="store_true", help="Restricted view: status only")
    card_set_p.set_defaults(func=card_set)

    card_delete_p = card_verbs.add_parser("delete", help="Delete a card", parents=[common])
    card_delete_p.add_argument("board", help="Board ID")
    card_delete_p.add_argument("id", help="Card ID")
    card_delete_p.set_defaults(func=card_delete)

    return parser
