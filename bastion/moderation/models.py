from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from config.settings import settings


class ModerationAction(Enum):
    BAN = "ban"
    KICK = "kick"
    TIMEOUT = "timeout"

    @property
    def verb(self) -> str:
        return self.value

    @property
    def verb_past(self) -> str:
        return _PAST_TENSE[self]

    @property
    def requires_duration(self) -> bool:
        return self is ModerationAction.TIMEOUT


_PAST_TENSE = {
    ModerationAction.BAN: "banned",
    ModerationAction.KICK: "kicked",
    ModerationAction.TIMEOUT: "timed out",
}


@dataclass(slots=True)
class ModerationParameters:
    """Who to moderate and how. ``duration`` only matters for timeouts."""

    user_id: int
    reason: str = ""
    duration: timedelta | None = None
    purge_messages: bool = False

    def __post_init__(self) -> None:
        if not self.reason or not self.reason.strip():
            self.reason = settings.default_reason


class ModerationEligibility(Enum):
    ELIGIBLE = "eligible"
    TARGET_IS_BOT = "target_is_bot"
    TARGET_IS_MODERATOR_SELF = "target_is_moderator_self"
    TARGET_IS_GUILD_OWNER = "target_is_guild_owner"
    TARGET_OUTRANKS_ACTOR = "target_outranks_actor"

    @property
    def is_eligible(self) -> bool:
        return self is ModerationEligibility.ELIGIBLE

    def describe(self, actor_mention: str, target_mention: str, action: ModerationAction) -> tuple[str, str]:
        """Return the (message, cause) pair explaining why the target can't be moderated."""
        verb, past = action.verb, action.verb_past

        if self is ModerationEligibility.TARGET_IS_BOT:
            return (
                f"{target_mention} is a bot user, and cannot be {past}. "
                f"Please manage the integration attached to {target_mention} instead.",
                f"Bot users are attached to integrations, so it is better to manage them "
                f"directly than to {verb} the bot users.",
            )
        if self is ModerationEligibility.TARGET_IS_GUILD_OWNER:
            return (
                f"{target_mention} is a server owner, and cannot be {past}.",
                f"Server owners are the highest in the hierarchy, so they cannot be {past}.",
            )
        if self is ModerationEligibility.TARGET_IS_MODERATOR_SELF:
            return (
                f"You cannot {verb} yourself, {actor_mention}.",
                "You don't have higher permissions than yourself.",
            )
        if self is ModerationEligibility.TARGET_OUTRANKS_ACTOR:
            return (
                f"{target_mention} is higher in the hierarchy than {actor_mention}, and cannot be {past}.",
                f"You don't have higher permissions than the member you are trying to {verb}.",
            )
        raise ValueError("An eligible target has no ineligibility description")
