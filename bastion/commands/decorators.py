"""Command decorators for declarative command creation."""

from collections.abc import Callable
from typing import Any

import hikari

from ..plugins.plugin import Plugin
from .argument_types import CommandArgument
from .descriptor import CommandDescriptor, CommandHandler
from .validation import ValidationSpec


def command(
    name: str,
    description: str,
    plugin: Plugin,
    *,
    cooldown: int = 0,
    aliases: list[str] | None = None,
    arguments: list[CommandArgument] | None = None,
    validation: ValidationSpec | None = None,
    default_member_permissions: hikari.Permissions | None = None,
) -> Callable[[CommandHandler], CommandHandler]:
    """
    Declare a command handler.

    The metadata is stored on the function and collected into the static
    command table by each plugin package with :func:`collect_descriptors`.
    """

    def decorator(func: CommandHandler) -> CommandHandler:
        func._command_descriptor = CommandDescriptor(  # type: ignore[attr-defined]
            name=name,
            description=description,
            plugin=plugin,
            handler=func,
            cooldown_secs=cooldown,
            aliases=tuple(aliases or ()),
            arguments=tuple(arguments or ()),
            validation=validation or ValidationSpec(),
            default_member_permissions=default_member_permissions,
        )
        return func

    return decorator


def descriptor_of(func: Any) -> CommandDescriptor:
    descriptor = getattr(func, "_command_descriptor", None)
    if descriptor is None:
        raise TypeError(f"{func!r} is not decorated with @command")
    return descriptor


def collect_descriptors(*funcs: Any) -> tuple[CommandDescriptor, ...]:
    return tuple(descriptor_of(func) for func in funcs)
