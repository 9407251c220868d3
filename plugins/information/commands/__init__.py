from bastion.commands import collect_descriptors

from .help import help_command
from .ping import ping

COMMANDS = collect_descriptors(ping, help_command)

__all__ = ["COMMANDS"]
