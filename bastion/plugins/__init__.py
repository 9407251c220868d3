from .plugin import DEFAULT_PLUGINS, Plugin
from .registry import PluginRegistry

__all__ = ["DEFAULT_PLUGINS", "Plugin", "PluginRegistry"]
