"""Routing of inbound invocations to command handlers.

:meth:`Dispatcher.dispatch` is the single entry point for every command. It
runs the same ordered checks for each invocation (session readiness, guild,
command lookup, plugin enablement, option validation, cooldown) before the
handler runs, and turns any check failure into an ephemeral report for the
invoking user. Store failures during the checks abort the command.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from ..commands.descriptor import CommandDescriptor
from ..commands.options import Invocation, InvocationOptions
from ..commands.table import CommandTable
from ..commands.validation import format_duration, validate
from ..platform.gateway import GuildGateway
from ..platform.responder import Responder
from ..plugins.registry import PluginRegistry
from .cooldown import CooldownTracker
from .errors import InvalidOptionError, ModerationError, PlatformError, StoreError
from .reports import Report
from .session import SessionState

logger = logging.getLogger(__name__)

GuildSync = Callable[[int], Awaitable[None]]

NOT_READY_MESSAGE = "Rude! I'm not even done getting ready!"


class Outcome(Enum):
    NOT_READY = "not_ready"
    NO_GUILD = "no_guild"
    UNKNOWN_COMMAND = "unknown_command"
    PLUGIN_DISABLED = "plugin_disabled"
    INVALID_OPTIONS = "invalid_options"
    ON_COOLDOWN = "on_cooldown"
    CHECKS_FAILED = "checks_failed"
    COMPLETED = "completed"
    MODERATION_FAILED = "moderation_failed"
    HANDLER_FAILED = "handler_failed"


@dataclass(slots=True)
class CommandContext:
    """Everything a command handler may use while serving one invocation."""

    invocation: Invocation
    descriptor: CommandDescriptor
    responder: Responder
    gateway: GuildGateway
    registry: PluginRegistry
    table: CommandTable
    session: SessionState
    sync: GuildSync | None = None

    @property
    def options(self) -> InvocationOptions:
        return self.invocation.options

    @property
    def actor_id(self) -> int:
        return self.invocation.actor_id

    @property
    def guild_id(self) -> int:
        if self.invocation.guild_id is None:
            raise RuntimeError(f"/{self.invocation.command_name} was not invoked in a guild")
        return self.invocation.guild_id

    @property
    def invoked_name(self) -> str:
        return self.invocation.command_name

    async def respond(self, report: Report, ephemeral: bool = False) -> None:
        await self.responder.respond(report, ephemeral=ephemeral)

    async def sync_commands(self) -> None:
        if self.sync is None:
            logger.debug(f"No command sync configured, skipping resync of guild {self.guild_id}")
            return
        await self.sync(self.guild_id)


class Dispatcher:
    def __init__(
        self,
        table: CommandTable,
        registry: PluginRegistry,
        cooldowns: CooldownTracker,
        sync: GuildSync | None = None,
    ) -> None:
        self.table = table
        self.registry = registry
        self.cooldowns = cooldowns
        self.sync = sync

    async def _reply(self, responder: Responder, report: Report, ephemeral: bool = True) -> None:
        try:
            await responder.respond(report, ephemeral=ephemeral)
        except PlatformError as e:
            logger.error(f"Failed to deliver '{report.title}' report: {e}")

    async def dispatch(
        self,
        session: SessionState,
        invocation: Invocation,
        responder: Responder,
        gateway: GuildGateway,
    ) -> Outcome:
        tag = f"[{invocation.interaction_id}] /{invocation.command_name} by {invocation.actor_id}"

        if not session.ready_to_go:
            logger.info(f"{tag}: rejected, session not ready")
            await self._reply(responder, Report.error(NOT_READY_MESSAGE, "Please try again in a few seconds."))
            return Outcome.NOT_READY

        guild_id = invocation.guild_id
        if guild_id is None:
            logger.info(f"{tag}: rejected, not invoked in a guild")
            await self._reply(responder, Report.error("Guilds only!", "Commands can only be used inside a guild."))
            return Outcome.NO_GUILD

        descriptor = self.table.resolve(invocation.command_name)
        if descriptor is None:
            logger.warning(f"{tag}: unknown command")
            await self._reply(
                responder,
                Report.error("Unknown command!", f"There is no command named /{invocation.command_name}."),
            )
            return Outcome.UNKNOWN_COMMAND

        try:
            enabled = await self.registry.is_enabled(guild_id, descriptor.plugin)
        except StoreError as e:
            return await self._checks_failed(tag, responder, e)

        if not enabled:
            logger.info(f"{tag}: plugin {descriptor.plugin.value} is not enabled in guild {guild_id}")
            await self._reply(
                responder,
                Report.error(
                    "Command unavailable!",
                    f"The {descriptor.plugin.display_name} plugin is not enabled in this guild.",
                    hint=f"An administrator can run /enable {descriptor.plugin.value}.",
                ),
            )
            return Outcome.PLUGIN_DISABLED

        try:
            validate(descriptor.validation, invocation.options)
        except InvalidOptionError as e:
            logger.info(f"{tag}: invalid options: {e}")
            await self._reply(responder, Report.error("Invalid option!", cause=str(e)))
            return Outcome.INVALID_OPTIONS

        if descriptor.cooldown_secs > 0:
            try:
                remaining = await self.cooldowns.remaining(
                    invocation.actor_id, descriptor.name, descriptor.cooldown_secs
                )
                if remaining > 0:
                    logger.info(f"{tag}: on cooldown for {remaining}s")
                    await self._reply(
                        responder,
                        Report.warning(
                            "Slow down!",
                            f"You can use /{descriptor.name} again in "
                            f"{format_duration(timedelta(seconds=remaining))}.",
                        ),
                    )
                    return Outcome.ON_COOLDOWN
                await self.cooldowns.record_use(invocation.actor_id, descriptor.name)
            except StoreError as e:
                return await self._checks_failed(tag, responder, e)

        ctx = CommandContext(
            invocation=invocation,
            descriptor=descriptor,
            responder=responder,
            gateway=gateway,
            registry=self.registry,
            table=self.table,
            session=session,
            sync=self.sync,
        )

        try:
            await descriptor.handler(ctx)
        except ModerationError as e:
            # The moderation pipeline has already reported the outcome to the user.
            logger.info(f"{tag}: {e}")
            return Outcome.MODERATION_FAILED
        except Exception as e:
            logger.exception(f"{tag}: handler raised {type(e).__name__}")
            await self._reply(responder, Report.error("Something went wrong!", cause=str(e) or type(e).__name__))
            return Outcome.HANDLER_FAILED

        logger.info(f"{tag}: completed")
        return Outcome.COMPLETED

    async def _checks_failed(self, tag: str, responder: Responder, error: StoreError) -> Outcome:
        logger.error(f"{tag}: pre-execution checks failed: {error}")
        await self._reply(
            responder,
            Report.error(
                "Checks failed!",
                "The bot could not run its pre-execution checks, so the command was aborted.",
                cause=str(error),
            ),
        )
        return Outcome.CHECKS_FAILED
