from bastion.commands import collect_descriptors

from .toggles import disable, enable, list_plugins

COMMANDS = collect_descriptors(enable, disable, list_plugins)

__all__ = ["COMMANDS"]
