"""The plugins that commands semantically belong to."""

from __future__ import annotations

from enum import Enum


class Plugin(str, Enum):
    """A togglable group of commands.

    Default plugins are always on for every guild and cannot be disabled;
    the rest are enabled per guild with ``/enable``.
    """

    INFORMATION = "information"
    MODERATION = "moderation"
    PLUGINS = "plugins"
    UTILITY = "utility"

    @property
    def display_name(self) -> str:
        return self.value.title()

    @property
    def is_default(self) -> bool:
        return self in DEFAULT_PLUGINS

    @classmethod
    def from_name(cls, name: str) -> Plugin | None:
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None

    @classmethod
    def defaults(cls) -> frozenset[Plugin]:
        return DEFAULT_PLUGINS

    @classmethod
    def optional(cls) -> list[Plugin]:
        return [plugin for plugin in cls if not plugin.is_default]


DEFAULT_PLUGINS: frozenset[Plugin] = frozenset({Plugin.INFORMATION, Plugin.MODERATION, Plugin.PLUGINS})
