"""Tests for option validation."""

from datetime import date, timedelta

import pytest

from bastion.commands import ChannelRef, InvocationOptions, UserRef, ValidationSpec
from bastion.commands.validation import format_duration, parse_date, parse_duration, validate
from bastion.core.errors import DurationTooLong, InvalidOptionError, NotDate, NotDuration, NotGuildMember


class TestParseDuration:
    """Test human duration parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1d", timedelta(days=1)),
            ("2h30m", timedelta(hours=2, minutes=30)),
            ("45 minutes", timedelta(minutes=45)),
            ("90", timedelta(seconds=90)),
            ("1w 2d", timedelta(days=9)),
            ("1 hour, 5 secs", timedelta(hours=1, seconds=5)),
            ("  10M ", timedelta(minutes=10)),
        ],
    )
    def test_valid_durations(self, raw, expected):
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "10 parsecs", "5h and 3m", "h5", "-5m"])
    def test_invalid_durations(self, raw):
        with pytest.raises(ValueError):
            parse_duration(raw)


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("raw", ["2023-02-29", "2024/01/01", "01-01-2024", "2024-1-1", "tomorrow"])
    def test_rejects_non_iso_or_impossible_dates(self, raw):
        with pytest.raises(ValueError):
            parse_date(raw)


class TestFormatDuration:
    def test_mixed_units(self):
        assert format_duration(timedelta(hours=2, minutes=30)) == "2 hours, 30 minutes"

    def test_singular_units(self):
        assert format_duration(timedelta(days=1, seconds=1)) == "1 day, 1 second"

    def test_zero(self):
        assert format_duration(timedelta(0)) == "0 seconds"


class TestValidationSpec:
    def test_option_in_two_categories_is_rejected(self):
        with pytest.raises(ValueError):
            ValidationSpec(dates=["when"], durations=["when"])

    def test_lists_become_tuples(self):
        spec = ValidationSpec(guild_members=["member"])

        assert spec.guild_members == ("member",)
        assert not spec.is_empty


class TestValidate:
    """Test validate() against tagged options."""

    def test_all_valid(self):
        spec = ValidationSpec(dates=["day"], durations=["length"], guild_members=["member"])
        options = InvocationOptions.of(day="2024-05-01", length="1h", member=UserRef(42))

        assert validate(spec, options) is None

    def test_absent_options_are_skipped(self):
        spec = ValidationSpec(dates=["day"], durations=["length"], guild_members=["member"])

        validate(spec, InvocationOptions())

    def test_untagged_options_are_ignored(self):
        spec = ValidationSpec(durations=["length"])

        validate(spec, InvocationOptions.of(reason="not a duration", channel=ChannelRef(1)))

    def test_bad_date(self):
        with pytest.raises(NotDate) as exc_info:
            validate(ValidationSpec(dates=["day"]), InvocationOptions.of(day="next friday"))

        assert exc_info.value.value == "next friday"

    def test_bad_duration(self):
        with pytest.raises(NotDuration):
            validate(ValidationSpec(durations=["length"]), InvocationOptions.of(length="forever"))

    def test_duration_at_limit_is_accepted(self):
        validate(ValidationSpec(durations=["length"]), InvocationOptions.of(length="28d"))

    def test_duration_over_limit(self):
        with pytest.raises(DurationTooLong) as exc_info:
            validate(ValidationSpec(durations=["length"]), InvocationOptions.of(length="29d"))

        assert exc_info.value.value == "29d"

    def test_non_member(self):
        options = InvocationOptions.of(member=UserRef(42, is_member=False))

        with pytest.raises(NotGuildMember) as exc_info:
            validate(ValidationSpec(guild_members=["member"]), options)

        assert exc_info.value.user_id == 42

    def test_wrong_value_shape_fails_with_tag_error(self):
        with pytest.raises(NotDuration) as exc_info:
            validate(ValidationSpec(durations=["length"]), InvocationOptions.of(length=5))

        assert exc_info.value.value == "5"

    def test_dates_are_checked_before_durations_and_members(self):
        spec = ValidationSpec(dates=["day"], durations=["length"], guild_members=["member"])
        options = InvocationOptions.of(member=UserRef(1, is_member=False), length="99d", day="soon")

        with pytest.raises(NotDate):
            validate(spec, options)

    def test_durations_are_checked_before_members(self):
        spec = ValidationSpec(durations=["length"], guild_members=["member"])
        options = InvocationOptions.of(member=UserRef(1, is_member=False), length="99d")

        with pytest.raises(DurationTooLong):
            validate(spec, options)

    def test_all_errors_share_a_base(self):
        with pytest.raises(InvalidOptionError):
            validate(ValidationSpec(dates=["day"]), InvocationOptions.of(day="x"))
