from .gateway import GuildGateway, HikariGuildGateway, MemberSummary
from .interactions import invocation_from_interaction
from .responder import InteractionResponder, Responder

__all__ = [
    "GuildGateway",
    "HikariGuildGateway",
    "MemberSummary",
    "invocation_from_interaction",
    "InteractionResponder",
    "Responder",
]
