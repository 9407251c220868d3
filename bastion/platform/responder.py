"""Sending reports back to the user who invoked a command."""

from __future__ import annotations

import logging
from typing import Protocol

import hikari

from ..core.errors import PlatformError
from ..core.reports import Report

logger = logging.getLogger(__name__)


class Responder(Protocol):
    async def respond(self, report: Report, ephemeral: bool = False) -> None: ...

    async def edit(self, report: Report) -> None: ...

    async def followup(self, report: Report, ephemeral: bool = False) -> None: ...


class InteractionResponder:
    """Responds to a hikari command interaction.

    ``respond`` creates the initial response; calling it a second time
    sends a followup instead, since an interaction accepts only one.
    """

    def __init__(self, interaction: hikari.CommandInteraction) -> None:
        self.interaction = interaction
        self.responded = False

    async def respond(self, report: Report, ephemeral: bool = False) -> None:
        if self.responded:
            await self.followup(report, ephemeral=ephemeral)
            return

        flags = hikari.MessageFlag.EPHEMERAL if ephemeral else hikari.MessageFlag.NONE
        try:
            await self.interaction.create_initial_response(
                hikari.ResponseType.MESSAGE_CREATE,
                embed=report.to_embed(),
                flags=flags,
            )
        except hikari.HikariError as e:
            raise PlatformError(f"Could not respond to interaction {self.interaction.id}: {e}") from e
        self.responded = True

    async def edit(self, report: Report) -> None:
        if not self.responded:
            await self.respond(report)
            return
        try:
            await self.interaction.edit_initial_response(embed=report.to_embed())
        except hikari.HikariError as e:
            raise PlatformError(f"Could not edit response to interaction {self.interaction.id}: {e}") from e

    async def followup(self, report: Report, ephemeral: bool = False) -> None:
        flags = hikari.MessageFlag.EPHEMERAL if ephemeral else hikari.MessageFlag.NONE
        try:
            await self.interaction.execute(embed=report.to_embed(), flags=flags)
        except hikari.HikariError as e:
            raise PlatformError(f"Could not send followup to interaction {self.interaction.id}: {e}") from e
