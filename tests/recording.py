"""Collaborator doubles that record or fail update calls."""

import asyncio

from sysboard.api.memory import MemoryBoardApi
from sysboard.errors import ApiError


class RecordingApi(MemoryBoardApi):
    """Records every update call; updates to ids in ``fail`` raise ApiError.

    When ``gate`` is set, updates wait on it before applying.
    """

    def __init__(self, *args, fail=(), gate=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail = set(fail)
        self.gate = gate
        self.updates = []

    async def _maybe_wait(self):
        if self.gate is not None:
            await self.gate.wait()

    async def update_list(self, list_id, changes):
        self.updates.append(("list", list_id, dict(changes)))
        await self._maybe_wait()
        if list_id in self.fail:
            raise ApiError(f"list {list_id} rejected", status=500)
        await super().update_list(list_id, changes)

    async def update_card(self, card_id, changes):
        self.updates.append(("card", card_id, dict(changes)))
        await self._maybe_wait()
        if card_id in self.fail:
            raise ApiError(f"card {card_id} rejected", status=500)
        await super().update_card(card_id, changes)


def gate():
    return asyncio.Event()
