"""Tests for moderation eligibility assessment."""

import pytest

from bastion.core.errors import AssessmentError
from bastion.moderation.eligibility import EligibilityFacts, assess, evaluate
from bastion.moderation.models import ModerationAction, ModerationEligibility

OWNER = 1
ACTOR = 2
TARGET = 3


def facts(**overrides):
    values = dict(
        actor_id=ACTOR,
        target_id=TARGET,
        owner_id=OWNER,
        target_is_bot=False,
        actor_position=10,
        target_position=5,
    )
    values.update(overrides)
    return EligibilityFacts(**values)


class TestEvaluate:
    """Rule precedence over gathered facts."""

    def test_eligible(self):
        assert evaluate(facts()) is ModerationEligibility.ELIGIBLE

    def test_self(self):
        assert evaluate(facts(target_id=ACTOR)) is ModerationEligibility.TARGET_IS_MODERATOR_SELF

    def test_self_wins_over_bot(self):
        assert evaluate(facts(target_id=ACTOR, target_is_bot=True)) is ModerationEligibility.TARGET_IS_MODERATOR_SELF

    def test_bot(self):
        assert evaluate(facts(target_is_bot=True)) is ModerationEligibility.TARGET_IS_BOT

    def test_owner_target(self):
        assert evaluate(facts(target_id=OWNER)) is ModerationEligibility.TARGET_IS_GUILD_OWNER

    def test_owner_target_wins_over_outranking(self):
        outcome = evaluate(facts(target_id=OWNER, target_position=50, actor_position=10))

        assert outcome is ModerationEligibility.TARGET_IS_GUILD_OWNER

    def test_outranked(self):
        outcome = evaluate(facts(actor_position=5, target_position=10))

        assert outcome is ModerationEligibility.TARGET_OUTRANKS_ACTOR

    def test_equal_position_counts_as_outranked(self):
        outcome = evaluate(facts(actor_position=7, target_position=7))

        assert outcome is ModerationEligibility.TARGET_OUTRANKS_ACTOR

    def test_owner_actor_ignores_hierarchy(self):
        outcome = evaluate(facts(actor_id=OWNER, actor_position=0, target_position=99))

        assert outcome is ModerationEligibility.ELIGIBLE


class TestAssess:
    @pytest.mark.asyncio
    async def test_assess_uses_gateway_facts(self, mock_gateway, ids):
        outcome = await assess(ids.actor, ids.target, mock_gateway, ids.guild)

        assert outcome is ModerationEligibility.ELIGIBLE
        mock_gateway.guild_owner.assert_awaited_once_with(ids.guild)
        mock_gateway.is_bot_account.assert_awaited_once_with(ids.target)

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates(self, mock_gateway, ids):
        mock_gateway.guild_owner.side_effect = AssessmentError("guild not cached")

        with pytest.raises(AssessmentError):
            await assess(ids.actor, ids.target, mock_gateway, ids.guild)


class TestIneligibilityText:
    def test_outranked_message_uses_verb_pair(self):
        message, cause = ModerationEligibility.TARGET_OUTRANKS_ACTOR.describe("<@1>", "<@2>", ModerationAction.TIMEOUT)

        assert message == "<@2> is higher in the hierarchy than <@1>, and cannot be timed out."
        assert cause == "You don't have higher permissions than the member you are trying to timeout."

    def test_self_message(self):
        message, _ = ModerationEligibility.TARGET_IS_MODERATOR_SELF.describe("<@1>", "<@1>", ModerationAction.KICK)

        assert message == "You cannot kick yourself, <@1>."

    def test_eligible_has_no_description(self):
        with pytest.raises(ValueError):
            ModerationEligibility.ELIGIBLE.describe("<@1>", "<@2>", ModerationAction.BAN)
