from bastion.commands import collect_descriptors

from .countdown import countdown
from .info import userinfo

COMMANDS = collect_descriptors(countdown, userinfo)

__all__ = ["COMMANDS"]
