from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SessionState:
    """Connection state for one bot session.

    ``discord_ready`` flips when the gateway reports ready; ``ready_to_go``
    flips once guild commands are synced and the bot may serve commands.
    """

    discord_ready: bool = False
    ready_to_go: bool = False
    bot_user_id: int | None = None
    application_id: int | None = None

    def mark_discord_ready(self, bot_user_id: int, application_id: int | None = None) -> None:
        self.discord_ready = True
        self.bot_user_id = bot_user_id
        self.application_id = application_id if application_id is not None else bot_user_id

    def mark_ready_to_go(self) -> None:
        self.ready_to_go = True


async def startup_watchdog(
    session: SessionState,
    timeout: float,
    on_timeout: Callable[[], Awaitable[None]],
    poll_interval: float = 0.5,
) -> bool:
    """Wait up to ``timeout`` seconds for the gateway to become ready.

    Calls ``on_timeout`` and returns False if it never does.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not session.discord_ready:
        if loop.time() >= deadline:
            logger.error(f"Gateway did not become ready within {timeout} seconds, shutting down")
            await on_timeout()
            return False
        await asyncio.sleep(poll_interval)
    return True
