"""Tests for Utility plugin."""

from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from bastion.commands import UserRef
from bastion.core.errors import PlatformError
from bastion.platform.gateway import MemberSummary
from plugins.utility.commands.countdown import countdown, countdown_text
from plugins.utility.commands.info import summary_report, userinfo


def make_summary(**overrides):
    values = dict(
        user_id=222222222,
        username="target",
        display_name="Target",
        is_bot=False,
        created_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
        joined_at=datetime(2021, 1, 1, tzinfo=timezone.utc),
        role_count=2,
        top_role="Member",
    )
    values.update(overrides)
    return MemberSummary(**values)


class TestCountdown:
    @pytest.mark.parametrize(
        "target,expected",
        [
            (date(2024, 1, 1), "2024-01-01 is today!"),
            (date(2024, 1, 2), "1 day until 2024-01-02."),
            (date(2024, 1, 11), "10 days until 2024-01-11."),
            (date(2023, 12, 30), "2023-12-30 was 2 days ago."),
        ],
    )
    def test_countdown_text(self, target, expected):
        assert countdown_text(target, date(2024, 1, 1)) == expected

    @pytest.mark.asyncio
    async def test_countdown_command(self, make_context, mock_responder):
        with patch("plugins.utility.commands.countdown.date") as mock_date:
            mock_date.today.return_value = date(2024, 1, 1)
            await countdown(make_context("countdown", date="2024-01-03"))

        report = mock_responder.respond.await_args.args[0]
        assert report.body == "2 days until 2024-01-03."


class TestUserInfo:
    def test_summary_report(self):
        report = summary_report(make_summary())

        assert report.title == "👤 target"
        assert report.field_value("Roles") == "2"
        assert report.field_value("Top Role") == "Member"
        assert report.field_value("Joined Server") == "<t:1609459200:R>"

    def test_summary_without_roles(self):
        report = summary_report(make_summary(joined_at=None, role_count=0, top_role=None))

        assert report.field_value("Joined Server") is None
        assert report.field_value("Top Role") is None

    @pytest.mark.asyncio
    async def test_userinfo(self, make_context, mock_gateway, mock_responder, ids):
        mock_gateway.member_summary.return_value = make_summary()

        await userinfo(make_context("userinfo", member=UserRef(ids.target)))

        mock_gateway.member_summary.assert_awaited_once_with(ids.guild, ids.target)
        assert mock_responder.respond.await_args.args[0].field_value("User ID") == "222222222"

    @pytest.mark.asyncio
    async def test_userinfo_lookup_failure(self, make_context, mock_gateway, mock_responder, ids):
        mock_gateway.member_summary.side_effect = PlatformError("not found")

        await userinfo(make_context("userinfo", member=UserRef(ids.target)))

        args = mock_responder.respond.await_args
        assert args.args[0].title == "Failed to get user information!"
        assert args.kwargs["ephemeral"] is True
