"""Validation of command options beyond what the platform guarantees.

The platform already checks option types (a user option always holds a
user, an integer option an integer). What it cannot check is the
*semantic* shape of free-text values: whether a string is a calendar date or
a duration, or whether a referenced user is actually a member of the guild.
Commands declare those requirements with a :class:`ValidationSpec` and the
dispatcher runs :func:`validate` before the handler sees any option.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta

from ..core.errors import DurationTooLong, NotDate, NotDuration, NotGuildMember
from .options import InvocationOptions, UserRef

MAX_DURATION = timedelta(days=28)

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DURATION_TOKEN = re.compile(r"(\d+)\s*([a-z]+)")

_DURATION_UNITS = {
    "w": 604_800,
    "wk": 604_800,
    "week": 604_800,
    "weeks": 604_800,
    "d": 86_400,
    "day": 86_400,
    "days": 86_400,
    "h": 3_600,
    "hr": 3_600,
    "hrs": 3_600,
    "hour": 3_600,
    "hours": 3_600,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
}


@dataclass(frozen=True)
class ValidationSpec:
    """Option names that need semantic validation, grouped by kind."""

    dates: tuple[str, ...] = ()
    durations: tuple[str, ...] = ()
    guild_members: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for field_name in ("dates", "durations", "guild_members"):
            object.__setattr__(self, field_name, tuple(getattr(self, field_name)))

        seen: dict[str, str] = {}
        for field_name in ("dates", "durations", "guild_members"):
            for option_name in getattr(self, field_name):
                if option_name in seen:
                    raise ValueError(
                        f"Option '{option_name}' is tagged as both {seen[option_name]} and {field_name}"
                    )
                seen[option_name] = field_name

    @property
    def is_empty(self) -> bool:
        return not (self.dates or self.durations or self.guild_members)


def parse_duration_seconds(raw: str) -> int:
    """Parse a human duration such as ``1d``, ``2h30m`` or ``45 minutes``.

    A bare integer is read as seconds. Raises :class:`ValueError` when the
    text is not a duration.
    """
    text = raw.strip().lower()
    if not text:
        raise ValueError("empty duration")
    if text.isdigit():
        return int(text)

    total = 0
    position = 0
    for match in _DURATION_TOKEN.finditer(text):
        if text[position : match.start()].strip(" ,"):
            raise ValueError(f"unexpected text in duration: {raw!r}")
        unit = _DURATION_UNITS.get(match.group(2))
        if unit is None:
            raise ValueError(f"unknown duration unit {match.group(2)!r}")
        total += int(match.group(1)) * unit
        position = match.end()

    if position == 0 or text[position:].strip(" ,"):
        raise ValueError(f"not a duration: {raw!r}")
    return total


def parse_duration(raw: str) -> timedelta:
    seconds = parse_duration_seconds(raw)
    try:
        return timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ValueError(f"duration out of range: {raw!r}") from exc


def parse_date(raw: str) -> date:
    """Parse an ISO-8601 calendar date (``YYYY-MM-DD``)."""
    text = raw.strip()
    if not _DATE_PATTERN.match(text):
        raise ValueError(f"not an ISO-8601 calendar date: {raw!r}")
    return date.fromisoformat(text)


def format_duration(duration: timedelta) -> str:
    """Render a duration as e.g. ``2 hours, 30 minutes``."""
    remaining = int(duration.total_seconds())
    if remaining <= 0:
        return "0 seconds"

    parts = []
    for label, size in (("week", 604_800), ("day", 86_400), ("hour", 3_600), ("minute", 60), ("second", 1)):
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(f"{amount} {label}{'s' if amount != 1 else ''}")
    return ", ".join(parts)


def _validate_dates(spec: ValidationSpec, options: InvocationOptions) -> None:
    for name, value in options:
        if name not in spec.dates:
            continue
        if not isinstance(value, str):
            raise NotDate(repr(value))
        try:
            parse_date(value)
        except ValueError:
            raise NotDate(value) from None


def _validate_durations(spec: ValidationSpec, options: InvocationOptions) -> None:
    for name, value in options:
        if name not in spec.durations:
            continue
        if not isinstance(value, str):
            raise NotDuration(repr(value))
        try:
            seconds = parse_duration_seconds(value)
        except ValueError:
            raise NotDuration(value) from None
        if seconds > MAX_DURATION.total_seconds():
            raise DurationTooLong(value)


def _validate_guild_members(spec: ValidationSpec, options: InvocationOptions) -> None:
    for name, value in options:
        if name in spec.guild_members and isinstance(value, UserRef) and not value.is_member:
            raise NotGuildMember(value.id)


def validate(spec: ValidationSpec, options: InvocationOptions) -> None:
    """Validate ``options`` against ``spec``.

    Dates are checked first, then durations, then guild members; the first
    failure raises. Options named in ``spec`` but absent from the invocation
    are skipped.
    """
    if spec.is_empty:
        return
    _validate_dates(spec, options)
    _validate_durations(spec, options)
    _validate_guild_members(spec, options)
