"""Feature plugins. Every command the bot knows is declared in one of these packages."""

from bastion.commands import CommandTable

from . import information, management, moderation, utility

ALL_COMMANDS = (*information.COMMANDS, *moderation.COMMANDS, *management.COMMANDS, *utility.COMMANDS)


def build_command_table() -> CommandTable:
    return CommandTable(ALL_COMMANDS)


COMMAND_TABLE = build_command_table()

__all__ = ["ALL_COMMANDS", "COMMAND_TABLE", "build_command_table"]
