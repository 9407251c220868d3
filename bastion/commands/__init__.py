"""Command declaration, lookup and registration."""

from .argument_types import CommandArgument
from .decorators import collect_descriptors, command
from .descriptor import CommandDescriptor
from .options import ChannelRef, Invocation, InvocationOptions, UserRef
from .registry import GuildCommandSync
from .table import CommandTable
from .validation import ValidationSpec

__all__ = [
    "CommandArgument",
    "CommandDescriptor",
    "CommandTable",
    "GuildCommandSync",
    "ValidationSpec",
    "ChannelRef",
    "Invocation",
    "InvocationOptions",
    "UserRef",
    "collect_descriptors",
    "command",
]
