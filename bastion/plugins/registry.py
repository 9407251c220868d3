"""Which plugins, and therefore which commands, each guild has switched on."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.errors import AlreadyDisabled, AlreadyEnabled, CannotDisableDefault
from ..database.stores import PluginStore
from .plugin import DEFAULT_PLUGINS, Plugin

if TYPE_CHECKING:
    from ..commands.descriptor import CommandDescriptor
    from ..commands.table import CommandTable

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Guild plugin state on top of the static command table.

    Only optional plugins are persisted. Default plugins are implicitly
    enabled everywhere.
    """

    def __init__(self, table: CommandTable, store: PluginStore) -> None:
        self.table = table
        self.store = store

    def commands_for(self, plugin: Plugin) -> frozenset[CommandDescriptor]:
        return self.table.commands_for(plugin)

    async def enabled_plugins(self, guild_id: int) -> frozenset[Plugin]:
        plugins = set(DEFAULT_PLUGINS)
        for name in await self.store.get_enabled(guild_id):
            plugin = Plugin.from_name(name)
            if plugin is None:
                logger.warning(f"Ignoring unknown plugin {name!r} stored for guild {guild_id}")
                continue
            plugins.add(plugin)
        return frozenset(plugins)

    async def enabled_commands(self, guild_id: int) -> frozenset[CommandDescriptor]:
        commands: set[CommandDescriptor] = set()
        for plugin in await self.enabled_plugins(guild_id):
            commands.update(self.commands_for(plugin))
        return frozenset(commands)

    async def is_enabled(self, guild_id: int, plugin: Plugin) -> bool:
        if plugin.is_default:
            return True
        return plugin in await self.enabled_plugins(guild_id)

    async def enable(self, guild_id: int, plugin: Plugin) -> None:
        if await self.is_enabled(guild_id, plugin):
            raise AlreadyEnabled(plugin)
        await self.store.add(guild_id, plugin.value)
        logger.info(f"Enabled plugin {plugin.value} for guild {guild_id}")

    async def disable(self, guild_id: int, plugin: Plugin) -> None:
        if plugin.is_default:
            raise CannotDisableDefault(plugin)
        if not await self.is_enabled(guild_id, plugin):
            raise AlreadyDisabled(plugin)
        await self.store.remove(guild_id, plugin.value)
        logger.info(f"Disabled plugin {plugin.value} for guild {guild_id}")
