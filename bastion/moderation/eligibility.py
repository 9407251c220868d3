"""Whether an actor may moderate a target.

All facts are gathered from the platform first; the rules then run in
order over those facts and the first match decides.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..platform.gateway import GuildGateway
from .models import ModerationEligibility

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EligibilityFacts:
    actor_id: int
    target_id: int
    owner_id: int
    target_is_bot: bool
    actor_position: int
    target_position: int

    @property
    def actor_is_owner(self) -> bool:
        return self.actor_id == self.owner_id

    @property
    def target_is_owner(self) -> bool:
        return self.target_id == self.owner_id


Rule = tuple[Callable[[EligibilityFacts], bool], ModerationEligibility]

RULES: tuple[Rule, ...] = (
    (lambda f: f.actor_id == f.target_id, ModerationEligibility.TARGET_IS_MODERATOR_SELF),
    (lambda f: f.target_is_bot, ModerationEligibility.TARGET_IS_BOT),
    (lambda f: f.target_is_owner, ModerationEligibility.TARGET_IS_GUILD_OWNER),
    (
        lambda f: not f.actor_is_owner and f.target_position >= f.actor_position,
        ModerationEligibility.TARGET_OUTRANKS_ACTOR,
    ),
)


async def gather_facts(actor_id: int, target_id: int, gateway: GuildGateway, guild_id: int) -> EligibilityFacts:
    """Look up everything the rules need. Raises ``AssessmentError`` on failure."""
    owner_id = await gateway.guild_owner(guild_id)
    target_is_bot = await gateway.is_bot_account(target_id)
    actor_position = await gateway.hierarchy_position(guild_id, actor_id)
    target_position = await gateway.hierarchy_position(guild_id, target_id)
    return EligibilityFacts(
        actor_id=actor_id,
        target_id=target_id,
        owner_id=owner_id,
        target_is_bot=target_is_bot,
        actor_position=actor_position,
        target_position=target_position,
    )


def evaluate(facts: EligibilityFacts) -> ModerationEligibility:
    for predicate, verdict in RULES:
        if predicate(facts):
            return verdict
    return ModerationEligibility.ELIGIBLE


async def assess(actor_id: int, target_id: int, gateway: GuildGateway, guild_id: int) -> ModerationEligibility:
    facts = await gather_facts(actor_id, target_id, gateway, guild_id)
    verdict = evaluate(facts)
    logger.debug(f"Eligibility of {target_id} for moderation by {actor_id} in {guild_id}: {verdict.name}")
    return verdict
