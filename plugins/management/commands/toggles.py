from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import hikari

from bastion.commands import CommandArgument, command
from bastion.core.errors import PlatformError, RegistryError, StoreError
from bastion.core.reports import Report
from bastion.plugins import Plugin

from ..config import TOGGLE_COOLDOWN_SECONDS

if TYPE_CHECKING:
    from bastion.core.dispatch import CommandContext

logger = logging.getLogger(__name__)


def _plugin_argument(verb: str) -> CommandArgument:
    return CommandArgument(
        "plugin",
        hikari.OptionType.STRING,
        f"The plugin to {verb} for the current guild.",
        choices=[plugin.value for plugin in Plugin.optional()],
    )


def commands_string(ctx: CommandContext, plugin: Plugin) -> str:
    names = sorted(descriptor.name for descriptor in ctx.registry.commands_for(plugin))
    return ", ".join(f"`/{name}`" for name in names) or "none"


async def _selected_plugin(ctx: CommandContext) -> Plugin | None:
    raw = ctx.options.string("plugin") or ""
    plugin = Plugin.from_name(raw)
    if plugin is None:
        await ctx.respond(Report.error("Unknown plugin!", f"There is no plugin named `{raw}`."), ephemeral=True)
    return plugin


async def _resync(ctx: CommandContext) -> None:
    try:
        await ctx.sync_commands()
    except (PlatformError, StoreError) as e:
        logger.warning(f"Command resync for guild {ctx.guild_id} failed: {e}")
        await ctx.responder.followup(
            Report.warning(
                "Command sync failed!",
                "The plugin setting was saved, but the guild's command list could not be updated yet. "
                "It will be corrected the next time commands are synced.",
                cause=str(e),
            )
        )


@command(
    name="enable",
    description="Enables a plugin for the current guild.",
    plugin=Plugin.PLUGINS,
    cooldown=TOGGLE_COOLDOWN_SECONDS,
    arguments=[_plugin_argument("enable")],
    default_member_permissions=hikari.Permissions.MANAGE_GUILD,
)
async def enable(ctx: CommandContext) -> None:
    plugin = await _selected_plugin(ctx)
    if plugin is None:
        return

    await ctx.respond(Report.info("Wait a moment...", "Flipping the switches on..."))
    try:
        await ctx.registry.enable(ctx.guild_id, plugin)
    except RegistryError as e:
        await ctx.responder.edit(
            Report.error(
                f"An error happened: {e}",
                f"The plugin `{plugin.value}` might have been already enabled.",
            )
        )
        return

    await ctx.responder.edit(
        Report.success(
            f"Plugin {plugin.value} enabled!",
            f"Successfully enabled plugin {plugin.value}! "
            f"Commands that were enabled for your guild were: {commands_string(ctx, plugin)}",
        )
    )
    await _resync(ctx)


@command(
    name="disable",
    description="Disables a plugin for the current guild.",
    plugin=Plugin.PLUGINS,
    cooldown=TOGGLE_COOLDOWN_SECONDS,
    arguments=[_plugin_argument("disable")],
    default_member_permissions=hikari.Permissions.MANAGE_GUILD,
)
async def disable(ctx: CommandContext) -> None:
    plugin = await _selected_plugin(ctx)
    if plugin is None:
        return

    await ctx.respond(Report.info("Wait a moment...", "Flipping the switches off..."))
    try:
        await ctx.registry.disable(ctx.guild_id, plugin)
    except RegistryError as e:
        await ctx.responder.edit(
            Report.error(
                f"An error happened: {e}",
                f"The plugin `{plugin.value}` might have been already disabled.",
            )
        )
        return

    await ctx.responder.edit(
        Report.success(
            f"Plugin {plugin.value} disabled!",
            f"Successfully disabled plugin {plugin.value}! "
            f"Commands that were removed from your guild were: {commands_string(ctx, plugin)}",
        )
    )
    await _resync(ctx)


@command(
    name="plugins",
    description="Lists every plugin and whether it is enabled in this guild.",
    plugin=Plugin.PLUGINS,
)
async def list_plugins(ctx: CommandContext) -> None:
    enabled = await ctx.registry.enabled_plugins(ctx.guild_id)

    report = Report.info("Plugins", "Default plugins are always enabled. Use /enable and /disable for the rest.")
    for plugin in Plugin:
        if plugin.is_default:
            status = "Default"
        elif plugin in enabled:
            status = "Enabled"
        else:
            status = "Disabled"
        report.add_field(plugin.display_name, status, inline=True)
    await ctx.respond(report, ephemeral=True)
