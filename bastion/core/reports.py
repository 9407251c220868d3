"""Outbound notifications, independent of how they are rendered."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

import hikari


class ReportKind(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> hikari.Color:
        return KIND_COLORS[self]

    @property
    def emoji(self) -> str:
        return KIND_EMOJIS[self]


KIND_COLORS: dict[ReportKind, hikari.Color] = {
    ReportKind.SUCCESS: hikari.Color(0x57F287),
    ReportKind.INFO: hikari.Color(0x5865F2),
    ReportKind.WARNING: hikari.Color(0xFEE75C),
    ReportKind.ERROR: hikari.Color(0xED4245),
}

KIND_EMOJIS: dict[ReportKind, str] = {
    ReportKind.SUCCESS: "✅",
    ReportKind.INFO: "ℹ️",
    ReportKind.WARNING: "⚠️",
    ReportKind.ERROR: "❌",
}


@dataclass(slots=True, frozen=True)
class ReportField:
    name: str
    value: str
    inline: bool = False


@dataclass(slots=True)
class Report:
    """A titled message with ordered fields, rendered to an embed on send."""

    title: str
    body: str = ""
    kind: ReportKind = ReportKind.INFO
    fields: list[ReportField] = field(default_factory=list)

    @classmethod
    def success(cls, title: str, body: str = "") -> Report:
        return cls(title, body, ReportKind.SUCCESS)

    @classmethod
    def info(cls, title: str, body: str = "") -> Report:
        return cls(title, body, ReportKind.INFO)

    @classmethod
    def warning(cls, title: str, body: str = "", cause: str | None = None) -> Report:
        report = cls(title, body, ReportKind.WARNING)
        if cause:
            report.add_field("Failure reason", cause)
        return report

    @classmethod
    def error(cls, title: str, body: str = "", cause: str | None = None, hint: str | None = None) -> Report:
        report = cls(title, body, ReportKind.ERROR)
        if cause:
            report.add_field("Failure reason", cause)
        if hint:
            report.add_field("Hint", hint)
        return report

    def add_field(self, name: str, value: str, inline: bool = False) -> Report:
        self.fields.append(ReportField(name, value, inline))
        return self

    def field_value(self, name: str) -> str | None:
        for report_field in self.fields:
            if report_field.name == name:
                return report_field.value
        return None

    def to_embed(self, timestamp: datetime | None = None) -> hikari.Embed:
        embed = hikari.Embed(
            title=f"{self.kind.emoji} {self.title}",
            description=self.body or None,
            color=self.kind.color,
            timestamp=timestamp or datetime.now(timezone.utc),
        )
        for report_field in self.fields:
            embed.add_field(report_field.name, report_field.value, inline=report_field.inline)
        return embed
