from __future__ import annotations

from typing import TYPE_CHECKING

import hikari

from bastion.commands import CommandArgument, ValidationSpec, command
from bastion.commands.validation import parse_duration
from bastion.moderation import ModerationAction, ModerationParameters, moderate
from bastion.plugins import Plugin

from ..config import ACTION_COOLDOWN_SECONDS, REASON_MAX_LENGTH

if TYPE_CHECKING:
    from bastion.core.dispatch import CommandContext


def _reason_argument(action: str) -> CommandArgument:
    return CommandArgument(
        "reason",
        hikari.OptionType.STRING,
        f"The reason for the {action}.",
        required=False,
        max_length=REASON_MAX_LENGTH,
    )


@command(
    name="ban",
    description="Bans a member from the guild.",
    plugin=Plugin.MODERATION,
    cooldown=ACTION_COOLDOWN_SECONDS,
    aliases=["blacklist"],
    arguments=[
        CommandArgument("member", hikari.OptionType.USER, "The member to ban from the guild."),
        _reason_argument("ban"),
        CommandArgument(
            "cleanup",
            hikari.OptionType.BOOLEAN,
            "Delete the member's messages from the past day.",
            required=False,
        ),
    ],
    validation=ValidationSpec(guild_members=["member"]),
    default_member_permissions=hikari.Permissions.BAN_MEMBERS,
)
async def ban(ctx: CommandContext) -> None:
    params = ModerationParameters(
        user_id=ctx.options.user("member").id,
        reason=ctx.options.string("reason") or "",
        purge_messages=ctx.options.boolean("cleanup"),
    )
    await moderate(ctx, ModerationAction.BAN, params)


@command(
    name="kick",
    description="Kicks a member from the guild.",
    plugin=Plugin.MODERATION,
    cooldown=ACTION_COOLDOWN_SECONDS,
    arguments=[
        CommandArgument("member", hikari.OptionType.USER, "The member to kick from the guild."),
        _reason_argument("kick"),
    ],
    validation=ValidationSpec(guild_members=["member"]),
    default_member_permissions=hikari.Permissions.KICK_MEMBERS,
)
async def kick(ctx: CommandContext) -> None:
    params = ModerationParameters(
        user_id=ctx.options.user("member").id,
        reason=ctx.options.string("reason") or "",
    )
    await moderate(ctx, ModerationAction.KICK, params)


@command(
    name="timeout",
    description="Times out a member in the guild.",
    plugin=Plugin.MODERATION,
    cooldown=ACTION_COOLDOWN_SECONDS,
    aliases=["mute"],
    arguments=[
        CommandArgument("member", hikari.OptionType.USER, "The member to time out in the guild."),
        CommandArgument(
            "duration",
            hikari.OptionType.STRING,
            "How long to time the member out for, e.g. 10m, 2h30m or 7d (at most 28 days).",
            max_length=64,
        ),
        _reason_argument("timeout"),
    ],
    validation=ValidationSpec(durations=["duration"], guild_members=["member"]),
    default_member_permissions=hikari.Permissions.MODERATE_MEMBERS,
)
async def timeout(ctx: CommandContext) -> None:
    # Already validated by the dispatcher
    duration = parse_duration(ctx.options.string("duration") or "")
    params = ModerationParameters(
        user_id=ctx.options.user("member").id,
        reason=ctx.options.string("reason") or "",
        duration=duration,
    )
    await moderate(ctx, ModerationAction.TIMEOUT, params)
