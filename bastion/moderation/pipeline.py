"""The staged moderation flow shared by /ban, /kick and /timeout.

Stages run strictly in order and nothing is rolled back:

1. acknowledge the command;
2. assess eligibility, stopping with a report if the target can't be moderated;
3. DM the target (best effort) and report whether that worked;
4. perform the action;
5. report the result.

Every terminal outcome other than success is reported to the invoking user
and then raised as a :class:`~bastion.core.errors.ModerationError`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..commands.validation import format_duration
from ..core.errors import ActionFailed, AssessmentError, AssessmentFailed, Ineligible, PlatformError
from ..core.reports import Report
from .eligibility import assess
from .models import ModerationAction, ModerationParameters

if TYPE_CHECKING:
    from ..core.dispatch import CommandContext

logger = logging.getLogger(__name__)


def acknowledgement() -> Report:
    return Report.info("Wait a moment...", "Hang tight, I'm working on it.")


def mention(user_id: int) -> str:
    return f"<@{user_id}>"


async def notify_target(ctx: CommandContext, action: ModerationAction, params: ModerationParameters) -> None:
    """DM the target about the action. Raises ``PlatformError`` on failure."""
    guild_name = await ctx.gateway.guild_name(ctx.guild_id)
    notice = Report.info(
        f"{action.verb_past.capitalize()}!",
        f"You have been {action.verb_past} by guild {guild_name}.",
    )
    notice.add_field("Reason", params.reason)
    await ctx.gateway.dm_user(params.user_id, notice.to_embed())


async def perform(
    ctx: CommandContext,
    action: ModerationAction,
    params: ModerationParameters,
    now: datetime,
) -> None:
    gateway, guild_id = ctx.gateway, ctx.guild_id
    if action is ModerationAction.BAN:
        await gateway.ban(guild_id, params.user_id, params.reason, purge_messages=params.purge_messages)
    elif action is ModerationAction.KICK:
        await gateway.kick(guild_id, params.user_id, params.reason)
    elif action is ModerationAction.TIMEOUT:
        if params.duration is None:
            raise ValueError("A timeout needs a duration")
        await gateway.timeout_until(guild_id, params.user_id, now + params.duration, params.reason)


def success_report(action: ModerationAction, params: ModerationParameters) -> Report:
    target = mention(params.user_id)
    duration = format_duration(params.duration) if params.duration is not None else "Not applicable"
    report = Report.success("Success!", f"{target} has been successfully {action.verb_past}.")
    report.add_field("Action", action.verb.capitalize(), inline=True)
    report.add_field("Member", target, inline=True)
    report.add_field("Duration", duration, inline=True)
    report.add_field("Reason", params.reason)
    return report


async def moderate(
    ctx: CommandContext,
    action: ModerationAction,
    params: ModerationParameters,
    now: datetime | None = None,
) -> None:
    actor, target = ctx.actor_id, params.user_id
    responder = ctx.responder

    await responder.respond(acknowledgement())

    try:
        verdict = await assess(actor, target, ctx.gateway, ctx.guild_id)
    except AssessmentError as e:
        logger.warning(f"Could not assess {target} for {action.verb} by {actor}: {e}")
        await responder.edit(
            Report.error(
                "Failed to assess eligibility!",
                f"The bot failed to assess the eligibility of the member for moderation: {e}. "
                "To be safe, the bot will abort whatever moderation action that is being performed right now.",
            )
        )
        raise AssessmentFailed(e) from e

    if not verdict.is_eligible:
        message, cause = verdict.describe(mention(actor), mention(target), action)
        await responder.edit(Report.error(message, cause))
        raise Ineligible(verdict)

    try:
        await notify_target(ctx, action, params)
    except PlatformError as e:
        logger.info(f"Could not DM {target} about {action.verb}: {e}")
        await responder.followup(
            Report.warning(
                "Notification failed!",
                f"The bot failed to send {mention(target)} a DM. Please notify them manually.",
                cause=str(e),
            )
        )
    else:
        await responder.followup(Report.info("Notified!", f"{mention(target)} has been notified."))

    try:
        await perform(ctx, action, params, now or datetime.now(timezone.utc))
    except (PlatformError, ValueError) as e:
        logger.warning(f"Failed to {action.verb} {target} in guild {ctx.guild_id}: {e}")
        await responder.edit(Report.error(f"The bot failed to {action.verb} {mention(target)}.", str(e)))
        raise ActionFailed(action.verb, e) from e

    logger.info(f"{actor} {action.verb_past} {target} in guild {ctx.guild_id}: {params.reason}")
    await responder.edit(success_report(action, params))
