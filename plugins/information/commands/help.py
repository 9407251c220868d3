from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from bastion.commands import CommandDescriptor, command
from bastion.core.reports import Report
from bastion.plugins import Plugin

if TYPE_CHECKING:
    from bastion.core.dispatch import CommandContext


def command_line(descriptor: CommandDescriptor) -> str:
    line = f"`/{descriptor.name}` {descriptor.description}"
    if descriptor.aliases:
        line += f" (aliases: {', '.join(f'/{alias}' for alias in descriptor.aliases)})"
    return line


def help_report(commands: Iterable[CommandDescriptor]) -> Report:
    """One field per plugin, listing its commands alphabetically."""
    by_plugin: dict[Plugin, list[CommandDescriptor]] = {}
    for descriptor in commands:
        by_plugin.setdefault(descriptor.plugin, []).append(descriptor)

    report = Report.info("Commands", "These are the commands available in this guild.")
    for plugin in Plugin:
        descriptors = sorted(by_plugin.get(plugin, []), key=lambda d: d.name)
        if descriptors:
            report.add_field(plugin.display_name, "\n".join(command_line(d) for d in descriptors))
    return report


@command(
    name="help",
    description="Lists the commands available in this guild.",
    plugin=Plugin.INFORMATION,
    aliases=["commands"],
)
async def help_command(ctx: CommandContext) -> None:
    commands = await ctx.registry.enabled_commands(ctx.guild_id)
    await ctx.respond(help_report(commands), ephemeral=True)
