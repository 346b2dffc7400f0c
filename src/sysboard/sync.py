"""Fire-and-forget persistence of change-sets.

Every changed entity gets its own update call, run as an independent
asyncio task. Nothing waits for them before the next local edit, failures
are logged and recorded but never undo the local tree, and there is no
retry. Overlapping dispatches race on the server (last write wins).
"""

from __future__ import annotations

import asyncio
import logging

from sysboard.api.base import BoardApi
from sysboard.errors import PersistError
from sysboard.model.changeset import Change, ChangeSet

logger = logging.getLogger(__name__)


class SyncDispatcher:
    def __init__(self, api: BoardApi) -> None:
        self.api = api
        self.failures: list[PersistError] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of persistence calls still in flight."""
        return len(self._tasks)

    def dispatch(self, changes: ChangeSet) -> list[asyncio.Task]:
        """Start one update per change. Must be called with a running event loop.

        Returns immediately with the started tasks.
        """
        tasks = []
        for change in changes:
            task = asyncio.create_task(self._persist(change), name=f"persist-{change.kind}-{change.entity_id}")
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            tasks.append(task)
        if tasks:
            logger.debug("dispatched %d updates", len(tasks))
        return tasks

    async def _persist(self, change: Change) -> None:
        fields = change.fields()
        try:
            if change.kind == "list":
                await self.api.update_list(change.entity_id, fields)
            else:
                await self.api.update_card(change.entity_id, fields)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            error = PersistError(change.kind, change.entity_id, fields, exc)
            self.failures.append(error)
            logger.warning("%s", error)

    def take_failures(self) -> list[PersistError]:
        """Return the recorded failures and forget them."""
        taken, self.failures = self.failures, []
        return taken

    async def drain(self) -> None:
        """Wait for every in-flight call, including ones started while waiting."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
