"""Registration of guild slash commands with the platform."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import hikari

from ..core.errors import PlatformError
from ..plugins.registry import PluginRegistry
from .descriptor import CommandDescriptor
from .table import CommandTable

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 100


class GuildCommandSync:
    """Overwrites a guild's registered commands with its enabled command set.

    Each alias is registered as its own slash command with the same options.
    """

    def __init__(self, rest: hikari.api.RESTClient, registry: PluginRegistry, application_id: int | None = None):
        self.rest = rest
        self.registry = registry
        self.application_id = application_id

    def build(self, descriptors: Iterable[CommandDescriptor]) -> list[hikari.api.SlashCommandBuilder]:
        builders = []
        for descriptor in sorted(descriptors, key=lambda d: d.name):
            for name in descriptor.all_names:
                description = CommandTable.describe_with_alias_note(descriptor, name)
                builder = self.rest.slash_command_builder(name, description[:MAX_DESCRIPTION_LENGTH])
                for argument in descriptor.arguments:
                    builder.add_option(argument.to_option())
                if descriptor.default_member_permissions is not None:
                    builder.set_default_member_permissions(descriptor.default_member_permissions)
                builders.append(builder)
        return builders

    async def sync_guild(self, guild_id: int) -> None:
        """Replace the guild's command list. Raises ``PlatformError`` on failure."""
        if self.application_id is None:
            raise PlatformError("Cannot register commands before the application id is known")

        commands = await self.registry.enabled_commands(guild_id)
        builders = self.build(commands)
        try:
            await self.rest.set_application_commands(self.application_id, builders, guild=guild_id)
        except hikari.HikariError as e:
            raise PlatformError(f"Failed to register commands for guild {guild_id}: {e}") from e

        logger.info(f"Registered {len(builders)} commands ({len(commands)} unique) for guild {guild_id}")

    async def __call__(self, guild_id: int) -> None:
        await self.sync_guild(guild_id)
