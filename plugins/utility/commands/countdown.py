from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import hikari

from bastion.commands import CommandArgument, ValidationSpec, command
from bastion.commands.validation import parse_date
from bastion.core.reports import Report
from bastion.plugins import Plugin

if TYPE_CHECKING:
    from bastion.core.dispatch import CommandContext


def countdown_text(target: date, today: date) -> str:
    days = (target - today).days
    if days == 0:
        return f"{target.isoformat()} is today!"
    unit = "day" if abs(days) == 1 else "days"
    if days > 0:
        return f"{days} {unit} until {target.isoformat()}."
    return f"{target.isoformat()} was {-days} {unit} ago."


@command(
    name="countdown",
    description="Counts the days until (or since) a date.",
    plugin=Plugin.UTILITY,
    arguments=[
        CommandArgument("date", hikari.OptionType.STRING, "The date to count to, as YYYY-MM-DD.", max_length=10),
    ],
    validation=ValidationSpec(dates=["date"]),
)
async def countdown(ctx: CommandContext) -> None:
    target = parse_date(ctx.options.string("date") or "")
    await ctx.respond(Report.info("Countdown", countdown_text(target, date.today())))
