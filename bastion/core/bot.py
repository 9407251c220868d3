import asyncio
import logging

import hikari

from config.settings import settings

from ..commands.registry import GuildCommandSync
from ..commands.table import CommandTable
from ..database import CooldownStore, DatabaseManager, PluginStore, db_manager
from ..platform import HikariGuildGateway, InteractionResponder, invocation_from_interaction
from ..plugins.registry import PluginRegistry
from .cooldown import CooldownTracker
from .dispatch import Dispatcher
from .errors import PlatformError, StoreError
from .session import SessionState, startup_watchdog

logger = logging.getLogger(__name__)


class BastionBot:
    def __init__(self, table: CommandTable | None = None, db: DatabaseManager | None = None) -> None:
        if table is None:
            from plugins import COMMAND_TABLE

            table = COMMAND_TABLE

        # Member intent is needed to resolve hierarchy positions from the cache
        intents = hikari.Intents.ALL_UNPRIVILEGED | hikari.Intents.GUILD_MEMBERS
        self.hikari_bot = hikari.GatewayBot(token=settings.discord_token, intents=intents)

        self.db = db or db_manager
        self.table = table
        self.session = SessionState()
        self.registry = PluginRegistry(self.table, PluginStore(self.db))
        self.cooldowns = CooldownTracker(CooldownStore(self.db))
        self.command_sync = GuildCommandSync(self.hikari_bot.rest, self.registry)
        self.dispatcher = Dispatcher(self.table, self.registry, self.cooldowns, sync=self.command_sync)
        self.gateway = HikariGuildGateway(self.hikari_bot)

        self._watchdog: asyncio.Task | None = None
        self._setup_event_listeners()

    def _setup_event_listeners(self) -> None:
        @self.hikari_bot.listen(hikari.StartingEvent)
        async def on_starting(event: hikari.StartingEvent) -> None:
            logger.info("Bot is starting, initializing database...")
            # Shards start only after this listener returns
            await self.db.create_tables()
            self._watchdog = asyncio.create_task(
                startup_watchdog(self.session, settings.ready_timeout_seconds, self.hikari_bot.close)
            )

        @self.hikari_bot.listen(hikari.ShardReadyEvent)
        async def on_ready(event: hikari.ShardReadyEvent) -> None:
            if self.session.discord_ready:
                return
            logger.info(f"Bot is ready! Logged in as {event.my_user}")
            self.session.mark_discord_ready(int(event.my_user.id), int(event.application_id))
            self.command_sync.application_id = self.session.application_id

            for guild_id in self.hikari_bot.cache.get_guilds_view():
                await self.sync_guild(guild_id)

            self.session.mark_ready_to_go()
            await self.hikari_bot.update_presence(
                status=hikari.Status.ONLINE,
                activity=hikari.Activity(name="over the server", type=hikari.ActivityType.WATCHING),
            )
            logger.info("Ready to serve commands")

        @self.hikari_bot.listen(hikari.GuildAvailableEvent)
        async def on_guild_available(event: hikari.GuildAvailableEvent) -> None:
            await self.sync_guild(event.guild_id)

        @self.hikari_bot.listen(hikari.GuildJoinEvent)
        async def on_guild_join(event: hikari.GuildJoinEvent) -> None:
            logger.info(f"Joined guild {event.guild_id}")
            await self.sync_guild(event.guild_id)

        @self.hikari_bot.listen(hikari.InteractionCreateEvent)
        async def on_interaction(event: hikari.InteractionCreateEvent) -> None:
            if not isinstance(event.interaction, hikari.CommandInteraction):
                return
            await self.dispatcher.dispatch(
                self.session,
                invocation_from_interaction(event.interaction),
                InteractionResponder(event.interaction),
                self.gateway,
            )

        @self.hikari_bot.listen(hikari.StoppingEvent)
        async def on_stopping(event: hikari.StoppingEvent) -> None:
            logger.info("Bot is stopping...")
            await self._cleanup()

    async def sync_guild(self, guild_id: int) -> None:
        if self.command_sync.application_id is None:
            logger.debug(f"Skipping command sync for guild {guild_id}, application id not known yet")
            return
        try:
            await self.command_sync.sync_guild(int(guild_id))
        except (PlatformError, StoreError) as e:
            logger.error(f"Failed to sync commands for guild {guild_id}: {e}")

    async def _cleanup(self) -> None:
        if self._watchdog and not self._watchdog.done():
            self._watchdog.cancel()
        await self.db.close()

    def run(self) -> None:
        self.hikari_bot.run(
            status=hikari.Status.DO_NOT_DISTURB,
            activity=hikari.Activity(name="myself get ready", type=hikari.ActivityType.WATCHING),
        )
