"""Store access for cooldown timestamps and guild plugin state.

Every call opens its own session; nothing is cached between calls.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from ..core.errors import StoreError
from .manager import DatabaseManager
from .models import CommandCooldown, EnabledPlugin

logger = logging.getLogger(__name__)


def _insert(db: DatabaseManager, model: type) -> sqlite.Insert | postgresql.Insert:
    """Dialect-specific INSERT that supports ON CONFLICT clauses."""
    if db.engine.dialect.name == "postgresql":
        return postgresql.insert(model)
    return sqlite.insert(model)


class CooldownStore:
    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def get_last_use(self, user_id: int, command_name: str) -> int | None:
        try:
            async with self.db.session() as session:
                record = await session.get(CommandCooldown, (user_id, command_name))
                return record.last_used if record else None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read last use of /{command_name} for {user_id}: {e}") from e

    async def set_last_use(self, user_id: int, command_name: str, timestamp: int) -> None:
        try:
            async with self.db.session() as session:
                stmt = _insert(self.db, CommandCooldown).values(
                    user_id=user_id, command_name=command_name, last_used=timestamp
                )
                await session.execute(
                    stmt.on_conflict_do_update(
                        index_elements=["user_id", "command_name"],
                        set_={"last_used": stmt.excluded.last_used},
                    )
                )
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to record use of /{command_name} for {user_id}: {e}") from e

    async def keys(self) -> list[tuple[int, str]]:
        try:
            async with self.db.session() as session:
                result = await session.execute(select(CommandCooldown.user_id, CommandCooldown.command_name))
                return [(row.user_id, row.command_name) for row in result]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list cooldown records: {e}") from e


class PluginStore:
    def __init__(self, db: DatabaseManager) -> None:
        self.db = db

    async def get_enabled(self, guild_id: int) -> set[str]:
        try:
            async with self.db.session() as session:
                result = await session.execute(
                    select(EnabledPlugin.plugin_name).where(EnabledPlugin.guild_id == guild_id)
                )
                return set(result.scalars())
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read enabled plugins for guild {guild_id}: {e}") from e

    async def add(self, guild_id: int, plugin_name: str) -> None:
        try:
            async with self.db.session() as session:
                stmt = _insert(self.db, EnabledPlugin).values(guild_id=guild_id, plugin_name=plugin_name)
                await session.execute(stmt.on_conflict_do_nothing(index_elements=["guild_id", "plugin_name"]))
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to enable {plugin_name} for guild {guild_id}: {e}") from e

    async def remove(self, guild_id: int, plugin_name: str) -> None:
        try:
            async with self.db.session() as session:
                await session.execute(
                    delete(EnabledPlugin).where(
                        EnabledPlugin.guild_id == guild_id,
                        EnabledPlugin.plugin_name == plugin_name,
                    )
                )
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to disable {plugin_name} for guild {guild_id}: {e}") from e

    async def guilds(self) -> list[int]:
        try:
            async with self.db.session() as session:
                result = await session.execute(select(EnabledPlugin.guild_id).distinct())
                return list(result.scalars())
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list guild plugin state: {e}") from e
