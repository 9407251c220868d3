from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import hikari

from bastion.commands import CommandArgument, ValidationSpec, command
from bastion.core.errors import PlatformError
from bastion.core.reports import Report
from bastion.platform.gateway import MemberSummary
from bastion.plugins import Plugin

if TYPE_CHECKING:
    from bastion.core.dispatch import CommandContext

logger = logging.getLogger(__name__)


def summary_report(summary: MemberSummary) -> Report:
    report = Report.info(f"👤 {summary.username}")
    report.add_field("User ID", str(summary.user_id), inline=True)
    report.add_field("Display Name", summary.display_name, inline=True)
    report.add_field("Bot Account", "Yes" if summary.is_bot else "No", inline=True)
    report.add_field("Account Created", f"<t:{int(summary.created_at.timestamp())}:R>", inline=True)
    if summary.joined_at:
        report.add_field("Joined Server", f"<t:{int(summary.joined_at.timestamp())}:R>", inline=True)
    report.add_field("Roles", str(summary.role_count), inline=True)
    if summary.top_role:
        report.add_field("Top Role", summary.top_role, inline=True)
    return report


@command(
    name="userinfo",
    description="Get detailed information about a guild member.",
    plugin=Plugin.UTILITY,
    arguments=[CommandArgument("member", hikari.OptionType.USER, "The member to get information about.")],
    validation=ValidationSpec(guild_members=["member"]),
)
async def userinfo(ctx: CommandContext) -> None:
    member = ctx.options.user("member")
    try:
        summary = await ctx.gateway.member_summary(ctx.guild_id, member.id)
    except PlatformError as e:
        logger.error(f"Error in userinfo command: {e}")
        await ctx.respond(Report.error("Failed to get user information!", cause=str(e)), ephemeral=True)
        return
    await ctx.respond(summary_report(summary))
