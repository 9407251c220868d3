from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import hikari

from ..plugins.plugin import Plugin
from .argument_types import CommandArgument
from .validation import ValidationSpec

if TYPE_CHECKING:
    from ..core.dispatch import CommandContext

CommandHandler = Callable[["CommandContext"], Awaitable[None]]


@dataclass(frozen=True, eq=False)
class CommandDescriptor:
    """Immutable metadata for one command plus the coroutine that runs it.

    Descriptors compare and hash by primary name only.
    """

    name: str
    description: str
    plugin: Plugin
    handler: CommandHandler = field(repr=False)
    cooldown_secs: int = 0
    aliases: tuple[str, ...] = ()
    arguments: tuple[CommandArgument, ...] = ()
    validation: ValidationSpec = field(default_factory=ValidationSpec)
    default_member_permissions: hikari.Permissions | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "arguments", tuple(self.arguments))
        if self.cooldown_secs < 0:
            raise ValueError(f"Command '{self.name}' has a negative cooldown")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandDescriptor):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def all_names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    def argument(self, name: str) -> CommandArgument | None:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None
