from bastion.commands import collect_descriptors

from .actions import ban, kick, timeout

COMMANDS = collect_descriptors(ban, kick, timeout)

__all__ = ["COMMANDS"]
