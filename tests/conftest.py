"""Pytest configuration and shared fixtures."""

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from bastion.commands import Invocation, InvocationOptions
from bastion.core.cooldown import CooldownTracker
from bastion.core.dispatch import CommandContext
from bastion.core.session import SessionState
from bastion.database import CooldownStore, DatabaseManager, PluginStore
from bastion.plugins import PluginRegistry
from plugins import COMMAND_TABLE

# Disable logging during tests
logging.disable(logging.CRITICAL)

GUILD_ID = 123456789
OWNER_ID = 987654321
ACTOR_ID = 111111111
TARGET_ID = 222222222
BOT_ID = 12345


@pytest.fixture
def ids():
    """Well-known snowflakes used across the suite."""
    return SimpleNamespace(guild=GUILD_ID, owner=OWNER_ID, actor=ACTOR_ID, target=TARGET_ID, bot=BOT_ID)


@pytest_asyncio.fixture
async def database(tmp_path):
    """A fresh SQLite database file with all tables created."""
    db = DatabaseManager(f"sqlite:///{tmp_path / 'bastion.db'}")
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def cooldown_store(database):
    return CooldownStore(database)


@pytest.fixture
def plugin_store(database):
    return PluginStore(database)


@pytest.fixture
def command_table():
    return COMMAND_TABLE


@pytest.fixture
def registry(command_table, plugin_store):
    return PluginRegistry(command_table, plugin_store)


class FakeClock:
    """Settable clock for cooldown arithmetic."""

    def __init__(self, now: float = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cooldowns(cooldown_store, clock):
    return CooldownTracker(cooldown_store, clock=clock)


@pytest.fixture
def mock_gateway():
    """Guild gateway where the actor outranks the target and nobody is a bot."""
    positions = {OWNER_ID: 100, ACTOR_ID: 10, TARGET_ID: 5}

    gateway = AsyncMock()
    gateway.guild_owner = AsyncMock(return_value=OWNER_ID)
    gateway.is_bot_account = AsyncMock(return_value=False)
    gateway.hierarchy_position = AsyncMock(side_effect=lambda guild_id, user_id: positions.get(user_id, 0))
    gateway.guild_name = AsyncMock(return_value="Test Guild")
    gateway.positions = positions
    return gateway


@pytest.fixture
def mock_responder():
    responder = AsyncMock()
    responder.respond = AsyncMock()
    responder.edit = AsyncMock()
    responder.followup = AsyncMock()
    return responder


@pytest.fixture
def ready_session():
    return SessionState(discord_ready=True, ready_to_go=True, bot_user_id=BOT_ID, application_id=BOT_ID)


@pytest.fixture
def mock_registry():
    registry = MagicMock(spec=PluginRegistry)
    registry.enabled_commands = AsyncMock(return_value=frozenset())
    registry.enabled_plugins = AsyncMock(return_value=frozenset())
    registry.is_enabled = AsyncMock(return_value=True)
    registry.enable = AsyncMock()
    registry.disable = AsyncMock()
    return registry


@pytest.fixture
def make_context(mock_responder, mock_gateway, mock_registry, ready_session, command_table):
    """Factory for a handler context as the dispatcher would build it."""

    def factory(command_name: str, actor_id: int = ACTOR_ID, registry=None, sync=None, **options):
        descriptor = command_table.resolve(command_name)
        invocation = Invocation(
            command_name=command_name,
            options=InvocationOptions.of(**options),
            actor_id=actor_id,
            guild_id=GUILD_ID,
            channel_id=444444444,
            interaction_id=555555555,
        )
        return CommandContext(
            invocation=invocation,
            descriptor=descriptor,
            responder=mock_responder,
            gateway=mock_gateway,
            registry=registry or mock_registry,
            table=command_table,
            session=ready_session,
            sync=sync,
        )

    return factory
