"""The static command table: every command, resolvable by name or alias."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from ..core.errors import CommandTableError
from ..plugins.plugin import Plugin
from .descriptor import CommandDescriptor

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[a-z0-9_-]{1,32}$")


class CommandTable:
    """Immutable lookup over all command descriptors.

    Names and aliases are checked once at construction: each must be a
    lowercase token and no two descriptors may share a name or alias.
    """

    def __init__(self, descriptors: Iterable[CommandDescriptor]) -> None:
        self._descriptors: tuple[CommandDescriptor, ...] = tuple(descriptors)
        self._by_name: dict[str, CommandDescriptor] = {}
        self._by_plugin: dict[Plugin, frozenset[CommandDescriptor]] = {}

        for descriptor in self._descriptors:
            for name in descriptor.all_names:
                if not NAME_PATTERN.match(name):
                    raise CommandTableError(f"Invalid command name or alias: {name!r}")
                owner = self._by_name.get(name)
                if owner is not None:
                    raise CommandTableError(
                        f"Command name /{name} of /{descriptor.name} collides with /{owner.name}"
                    )
                self._by_name[name] = descriptor

        for plugin in Plugin:
            self._by_plugin[plugin] = frozenset(d for d in self._descriptors if d.plugin is plugin)

        logger.debug(f"Command table built with {len(self._descriptors)} commands")

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def all_descriptors(self) -> frozenset[CommandDescriptor]:
        """Every command across every plugin, regardless of guild enablement."""
        return frozenset(self._descriptors)

    def commands_for(self, plugin: Plugin) -> frozenset[CommandDescriptor]:
        return self._by_plugin.get(plugin, frozenset())

    def resolve(self, name: str) -> CommandDescriptor | None:
        """Find the command whose primary name or alias is ``name``."""
        return self._by_name.get(name)

    @staticmethod
    def describe_with_alias_note(descriptor: CommandDescriptor, invoked_name: str) -> str:
        if invoked_name != descriptor.name and invoked_name in descriptor.aliases:
            return f"{descriptor.description} (alias for /{descriptor.name})"
        return descriptor.description
