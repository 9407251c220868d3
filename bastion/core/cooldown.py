"""Per-user, per-command rate limiting backed by the store."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..database.stores import CooldownStore
from .errors import CooldownError, StoreError

logger = logging.getLogger(__name__)


class CooldownTracker:
    """Answers "may this user run this command now?" and records uses.

    Timestamps are whole UNIX seconds from ``clock``. No state is kept in
    memory; every call goes to the store.
    """

    def __init__(self, store: CooldownStore, clock: Callable[[], float] = time.time) -> None:
        self.store = store
        self.clock = clock

    def now(self) -> int:
        return int(self.clock())

    async def remaining(self, user_id: int, command_name: str, cooldown_secs: int) -> int:
        """Seconds the user must still wait, or 0 if the command is ready."""
        if cooldown_secs <= 0:
            return 0

        try:
            last_used = await self.store.get_last_use(user_id, command_name)
        except StoreError as e:
            raise CooldownError(f"Could not read cooldown for /{command_name}: {e}") from e

        if last_used is None:
            return 0

        elapsed = self.now() - last_used
        if elapsed >= cooldown_secs:
            return 0
        # Clock skew can make elapsed negative; never report more than the full cooldown.
        return min(cooldown_secs, cooldown_secs - elapsed)

    async def is_ready(self, user_id: int, command_name: str, cooldown_secs: int) -> bool:
        return await self.remaining(user_id, command_name, cooldown_secs) == 0

    async def record_use(self, user_id: int, command_name: str, now: int | None = None) -> None:
        timestamp = self.now() if now is None else now
        try:
            await self.store.set_last_use(user_id, command_name, timestamp)
        except StoreError as e:
            raise CooldownError(f"Could not record use of /{command_name}: {e}") from e
        logger.debug(f"Recorded use of /{command_name} by {user_id} at {timestamp}")
