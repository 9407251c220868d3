"""Tests for session state and the startup watchdog."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from bastion.core.session import SessionState, startup_watchdog


class TestSessionState:
    def test_initial_state(self):
        session = SessionState()

        assert not session.discord_ready
        assert not session.ready_to_go

    def test_application_id_defaults_to_bot_user(self):
        session = SessionState()
        session.mark_discord_ready(42)

        assert session.discord_ready
        assert session.application_id == 42

    def test_mark_ready_to_go(self):
        session = SessionState()
        session.mark_discord_ready(42, application_id=7)
        session.mark_ready_to_go()

        assert session.ready_to_go
        assert session.application_id == 7


class TestStartupWatchdog:
    @pytest.mark.asyncio
    async def test_times_out(self):
        on_timeout = AsyncMock()

        result = await startup_watchdog(SessionState(), 0.05, on_timeout, poll_interval=0.01)

        assert result is False
        on_timeout.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_ready_in_time(self):
        session = SessionState()
        on_timeout = AsyncMock()

        async def become_ready():
            await asyncio.sleep(0.02)
            session.mark_discord_ready(1)

        watchdog = asyncio.create_task(startup_watchdog(session, 5, on_timeout, poll_interval=0.01))
        await become_ready()

        assert await watchdog is True
        on_timeout.assert_not_awaited()
