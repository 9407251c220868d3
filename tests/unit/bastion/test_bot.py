"""Tests for the bot wiring."""

from unittest.mock import AsyncMock, MagicMock, patch

import hikari
import pytest

from bastion.core.bot import BastionBot
from bastion.core.errors import PlatformError
from bastion.database import DatabaseManager


@pytest.fixture
def hikari_bot():
    """Mocked gateway bot that records registered listeners."""
    bot = MagicMock()
    bot.listeners = {}

    def listen(event_type):
        def decorator(callback):
            bot.listeners[event_type] = callback
            return callback

        return decorator

    bot.listen.side_effect = listen
    bot.update_presence = AsyncMock()
    bot.close = AsyncMock()
    bot.cache.get_guilds_view.return_value = {}
    return bot


@pytest.fixture
def bastion_bot(hikari_bot, command_table):
    db = MagicMock()
    db.create_tables = AsyncMock()
    db.close = AsyncMock()
    with patch("bastion.core.bot.hikari.GatewayBot", return_value=hikari_bot):
        bot = BastionBot(table=command_table, db=db)
    bot.command_sync.sync_guild = AsyncMock()
    return bot


class TestBastionBot:
    def test_bot_creation(self, bastion_bot, hikari_bot):
        assert bastion_bot.hikari_bot is hikari_bot
        assert not bastion_bot.session.discord_ready
        assert hikari.InteractionCreateEvent in hikari_bot.listeners
        assert hikari.ShardReadyEvent in hikari_bot.listeners

    def test_run_method(self, bastion_bot, hikari_bot):
        bastion_bot.run()

        hikari_bot.run.assert_called_once()
        assert hikari_bot.run.call_args.kwargs["status"] == hikari.Status.DO_NOT_DISTURB

    @pytest.mark.asyncio
    async def test_ready_syncs_cached_guilds(self, bastion_bot, hikari_bot):
        hikari_bot.cache.get_guilds_view.return_value = {hikari.Snowflake(1): MagicMock()}
        event = MagicMock(application_id=hikari.Snowflake(42))
        event.my_user.id = hikari.Snowflake(7)

        await hikari_bot.listeners[hikari.ShardReadyEvent](event)

        assert bastion_bot.session.ready_to_go
        assert bastion_bot.command_sync.application_id == 42
        bastion_bot.command_sync.sync_guild.assert_awaited_once_with(1)
        hikari_bot.update_presence.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sync_skipped_before_ready(self, bastion_bot):
        await bastion_bot.sync_guild(1)

        bastion_bot.command_sync.sync_guild.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sync_failure_is_logged(self, bastion_bot):
        bastion_bot.command_sync.application_id = 42
        bastion_bot.command_sync.sync_guild.side_effect = PlatformError("missing access")

        await bastion_bot.sync_guild(1)

    @pytest.mark.asyncio
    async def test_component_interactions_are_ignored(self, bastion_bot, hikari_bot):
        bastion_bot.dispatcher.dispatch = AsyncMock()
        event = MagicMock()
        event.interaction = MagicMock(spec=hikari.ComponentInteraction)

        await hikari_bot.listeners[hikari.InteractionCreateEvent](event)

        bastion_bot.dispatcher.dispatch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_command_interactions_are_dispatched(self, bastion_bot, hikari_bot):
        bastion_bot.dispatcher.dispatch = AsyncMock()
        event = MagicMock()
        event.interaction = MagicMock(spec=hikari.CommandInteraction)

        with patch("bastion.core.bot.invocation_from_interaction") as mock_convert:
            await hikari_bot.listeners[hikari.InteractionCreateEvent](event)

        mock_convert.assert_called_once_with(event.interaction)
        bastion_bot.dispatcher.dispatch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stopping_closes_database(self, bastion_bot, hikari_bot):
        await hikari_bot.listeners[hikari.StoppingEvent](MagicMock())

        bastion_bot.db.close.assert_awaited_once()


class TestStartupOrdering:
    """Tables must exist before any guild sync or interaction touches the store."""

    @pytest.mark.asyncio
    async def test_tables_exist_before_first_sync(self, hikari_bot, command_table, tmp_path, ids):
        db = DatabaseManager(f"sqlite:///{tmp_path / 'fresh.db'}")
        with patch("bastion.core.bot.hikari.GatewayBot", return_value=hikari_bot):
            bot = BastionBot(table=command_table, db=db)
        synced = {}

        async def read_enabled(guild_id):
            synced[guild_id] = await bot.registry.enabled_commands(guild_id)

        bot.command_sync.sync_guild = AsyncMock(side_effect=read_enabled)
        hikari_bot.cache.get_guilds_view.return_value = {hikari.Snowflake(ids.guild): MagicMock()}
        ready = MagicMock(application_id=hikari.Snowflake(42))
        ready.my_user.id = hikari.Snowflake(7)

        try:
            await hikari_bot.listeners[hikari.StartingEvent](MagicMock())
            await hikari_bot.listeners[hikari.ShardReadyEvent](ready)

            assert {descriptor.name for descriptor in synced[ids.guild]} >= {"ban", "ping", "enable"}
            assert bot.session.ready_to_go
        finally:
            if bot._watchdog:
                bot._watchdog.cancel()
            await db.close()

    def test_no_database_work_after_shards_start(self, hikari_bot, bastion_bot):
        assert hikari.StartedEvent not in hikari_bot.listeners
