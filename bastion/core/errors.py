"""Exception hierarchy shared by the command, plugin and moderation layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..moderation.models import ModerationEligibility
    from ..plugins.plugin import Plugin


class BastionError(Exception):
    """Base class for every error raised on purpose by the bot."""


# Option validation


class InvalidOptionError(BastionError):
    """An option failed validation that the platform does not do natively."""

    def __init__(self, value: object, message: str) -> None:
        super().__init__(message)
        self.value = value


class NotDate(InvalidOptionError):
    def __init__(self, value: str) -> None:
        super().__init__(value, f"Not a date (expected YYYY-MM-DD): {value}")


class NotDuration(InvalidOptionError):
    def __init__(self, value: str) -> None:
        super().__init__(value, f"Not a time duration (e.g. 1d, 2h30m): {value}")


class DurationTooLong(InvalidOptionError):
    def __init__(self, value: str) -> None:
        super().__init__(value, f"Time duration is too long (>28 days): {value}")


class NotGuildMember(InvalidOptionError):
    def __init__(self, user_id: int) -> None:
        super().__init__(user_id, f"Not a member of this guild: {user_id}")
        self.user_id = user_id


# Storage


class StoreError(BastionError):
    """The persistent store could not complete an operation."""


class CooldownError(StoreError):
    """Cooldown state could not be read or written."""


# Plugin registry


class RegistryError(BastionError):
    """A guild plugin configuration conflict."""

    def __init__(self, plugin: Plugin, message: str) -> None:
        super().__init__(message)
        self.plugin = plugin


class AlreadyEnabled(RegistryError):
    def __init__(self, plugin: Plugin) -> None:
        super().__init__(plugin, f"Plugin {plugin.display_name} is already enabled for this guild.")


class AlreadyDisabled(RegistryError):
    def __init__(self, plugin: Plugin) -> None:
        super().__init__(plugin, f"Plugin {plugin.display_name} is already disabled for this guild.")


class CannotDisableDefault(RegistryError):
    def __init__(self, plugin: Plugin) -> None:
        super().__init__(plugin, f"Plugin {plugin.display_name} is a default plugin and cannot be disabled.")


# Command table


class CommandTableError(BastionError, ValueError):
    """The static command table is malformed (duplicate or invalid names)."""


# Platform and moderation


class PlatformError(BastionError):
    """A call to the chat platform failed."""


class AssessmentError(BastionError):
    """Moderation eligibility could not be determined."""


class ModerationError(BastionError):
    """Terminal outcome of a moderation invocation that did not succeed."""


class AssessmentFailed(ModerationError):
    def __init__(self, cause: AssessmentError) -> None:
        super().__init__(f"Failed to assess moderation eligibility: {cause}")
        self.cause = cause


class Ineligible(ModerationError):
    def __init__(self, reason: ModerationEligibility) -> None:
        super().__init__(f"Target is not eligible for moderation: {reason.name}")
        self.reason = reason


class ActionFailed(ModerationError):
    def __init__(self, verb: str, cause: Exception) -> None:
        super().__init__(f"Failed to {verb} member: {cause}")
        self.verb = verb
        self.cause = cause
