from sqlalchemy import BigInteger, Index, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class CommandCooldown(Base):
    """Last time a user ran a throttled command, in UNIX seconds."""

    __tablename__ = "command_cooldowns"

    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    command_name: Mapped[str] = mapped_column(String(32), primary_key=True)
    last_used: Mapped[int] = mapped_column(BigInteger)


class EnabledPlugin(Base):
    """An optional plugin a guild has switched on. Default plugins are never stored."""

    __tablename__ = "enabled_plugins"

    guild_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    plugin_name: Mapped[str] = mapped_column(String(50), primary_key=True)

    __table_args__ = (Index("idx_enabled_plugins_guild", "guild_id"),)
