"""Storage collaborators for boards, lists and cards."""

from sysboard.api.base import BoardApi, User
from sysboard.api.http import HttpBoardApi
from sysboard.api.memory import MemoryBoardApi

__all__ = ["BoardApi", "HttpBoardApi", "MemoryBoardApi", "User"]
