from .manager import DatabaseManager, db_manager
from .models import Base, CommandCooldown, EnabledPlugin
from .stores import CooldownStore, PluginStore

__all__ = [
    "DatabaseManager",
    "db_manager",
    "Base",
    "CommandCooldown",
    "EnabledPlugin",
    "CooldownStore",
    "PluginStore",
]
