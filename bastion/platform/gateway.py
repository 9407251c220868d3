"""Guild operations the moderation pipeline and commands need from the platform."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

import hikari

from ..core.errors import AssessmentError, PlatformError

logger = logging.getLogger(__name__)

# Days of message history removed when a ban asks for cleanup.
PURGE_DAYS = 1


@dataclass(slots=True)
class MemberSummary:
    user_id: int
    username: str
    display_name: str
    is_bot: bool
    created_at: datetime
    joined_at: datetime | None
    role_count: int
    top_role: str | None


class GuildGateway(Protocol):
    async def kick(self, guild_id: int, user_id: int, reason: str) -> None: ...

    async def ban(self, guild_id: int, user_id: int, reason: str, purge_messages: bool = False) -> None: ...

    async def timeout_until(self, guild_id: int, user_id: int, until: datetime, reason: str) -> None: ...

    async def dm_user(self, user_id: int, report_embed: hikari.Embed) -> None: ...

    async def hierarchy_position(self, guild_id: int, user_id: int) -> int: ...

    async def guild_owner(self, guild_id: int) -> int: ...

    async def is_bot_account(self, user_id: int) -> bool: ...

    async def guild_name(self, guild_id: int) -> str: ...

    async def member_summary(self, guild_id: int, user_id: int) -> MemberSummary: ...


class HikariGuildGateway:
    """``GuildGateway`` backed by a hikari gateway bot's cache and REST client.

    Cache lookups fall back to REST. Platform errors from mutating calls are
    wrapped in ``PlatformError``; failures while gathering hierarchy facts
    become ``AssessmentError``.
    """

    def __init__(self, app: hikari.GatewayBot) -> None:
        self.app = app

    @property
    def rest(self) -> hikari.api.RESTClient:
        return self.app.rest

    @property
    def cache(self) -> hikari.api.Cache:
        return self.app.cache

    async def kick(self, guild_id: int, user_id: int, reason: str) -> None:
        try:
            await self.rest.kick_user(guild_id, user_id, reason=reason)
        except hikari.HikariError as e:
            raise PlatformError(str(e)) from e

    async def ban(self, guild_id: int, user_id: int, reason: str, purge_messages: bool = False) -> None:
        delete_seconds = PURGE_DAYS * 86_400 if purge_messages else 0
        try:
            await self.rest.ban_user(guild_id, user_id, delete_message_seconds=delete_seconds, reason=reason)
        except hikari.HikariError as e:
            raise PlatformError(str(e)) from e

    async def timeout_until(self, guild_id: int, user_id: int, until: datetime, reason: str) -> None:
        try:
            await self.rest.edit_member(guild_id, user_id, communication_disabled_until=until, reason=reason)
        except hikari.HikariError as e:
            raise PlatformError(str(e)) from e

    async def dm_user(self, user_id: int, report_embed: hikari.Embed) -> None:
        try:
            channel = await self.rest.create_dm_channel(user_id)
            await channel.send(embed=report_embed)
        except hikari.HikariError as e:
            raise PlatformError(str(e)) from e

    async def _member(self, guild_id: int, user_id: int) -> hikari.Member:
        member = self.cache.get_member(guild_id, user_id)
        if member is not None:
            return member
        return await self.rest.fetch_member(guild_id, user_id)

    async def _guild(self, guild_id: int) -> hikari.Guild:
        guild = self.cache.get_guild(guild_id)
        if guild is not None:
            return guild
        return await self.rest.fetch_guild(guild_id)

    async def hierarchy_position(self, guild_id: int, user_id: int) -> int:
        try:
            member = await self._member(guild_id, user_id)
            top_role = member.get_top_role()
            if top_role is None:
                roles = await member.fetch_roles()
                top_role = max(roles, key=lambda role: role.position, default=None)
        except hikari.HikariError as e:
            raise AssessmentError(f"Could not look up roles of member {user_id}: {e}") from e
        return top_role.position if top_role else 0

    async def guild_owner(self, guild_id: int) -> int:
        try:
            guild = await self._guild(guild_id)
        except hikari.HikariError as e:
            raise AssessmentError(f"Could not look up guild {guild_id}: {e}") from e
        return int(guild.owner_id)

    async def is_bot_account(self, user_id: int) -> bool:
        user = self.cache.get_user(user_id)
        if user is None:
            try:
                user = await self.rest.fetch_user(user_id)
            except hikari.HikariError as e:
                raise AssessmentError(f"Could not look up user {user_id}: {e}") from e
        return user.is_bot

    async def guild_name(self, guild_id: int) -> str:
        try:
            guild = await self._guild(guild_id)
        except hikari.HikariError as e:
            raise PlatformError(str(e)) from e
        return guild.name

    async def member_summary(self, guild_id: int, user_id: int) -> MemberSummary:
        try:
            member = await self._member(guild_id, user_id)
            roles = await member.fetch_roles()
        except hikari.HikariError as e:
            raise PlatformError(str(e)) from e

        # The @everyone role shares the guild's id and is not counted.
        roles = [role for role in roles if role.id != guild_id]
        top_role = max(roles, key=lambda role: role.position, default=None)
        return MemberSummary(
            user_id=int(member.id),
            username=member.username,
            display_name=member.display_name,
            is_bot=member.is_bot,
            created_at=member.created_at,
            joined_at=member.joined_at,
            role_count=len(roles),
            top_role=top_role.name if top_role else None,
        )
