"""Tests for date range and age rules."""

from datetime import date, datetime, timezone

import pytest

from formguard.core.exceptions import RuleDefinitionError
from formguard.core.result import VALID, FailureCode
from formguard.utils.dates import epoch_offset_years, parse_date
from formguard.validation.dates import date_range, maximum_age, minimum_age


class TestDateRange:

    def test_valid_range(self, stub_tree):
        tree = stub_tree(startDate="2022-01-01", endDate="2022-01-10")

        assert date_range()(tree.get("endDate")) == VALID

    def test_start_after_end(self, stub_tree):
        tree = stub_tree(startDate="2022-01-10", endDate="2022-01-01")

        result = date_range()(tree.get("endDate"))
        assert result.code == FailureCode.DATE_RANGE_INVALID
        assert result.to_errors() == {"dateRangeInvalid": True}

    def test_equal_dates_are_valid(self, stub_tree):
        tree = stub_tree(startDate="2022-01-10", endDate="2022-01-10")

        assert date_range()(tree.get("endDate")) == VALID

    @pytest.mark.parametrize("start, end", [
        ("2022-01-01", ""),
        ("", "2022-01-10"),
        (None, "2022-01-10"),
        ("", ""),
    ])
    def test_missing_endpoint_is_valid(self, stub_tree, start, end):
        tree = stub_tree(startDate=start, endDate=end)

        assert date_range()(tree.get("endDate")) == VALID

    def test_absent_sibling_is_valid(self, stub_tree):
        tree = stub_tree(endDate="2022-01-10")

        assert date_range()(tree.get("endDate")) == VALID

    def test_applies_to_the_group_itself(self, stub_tree):
        tree = stub_tree(startDate="2022-01-10", endDate="2022-01-01")

        assert date_range()(tree).code == FailureCode.DATE_RANGE_INVALID

    def test_custom_field_names(self, stub_tree):
        tree = stub_tree(checkIn=date(2024, 5, 3), checkOut=date(2024, 5, 1))

        assert date_range("checkIn", "checkOut")(tree).code == FailureCode.DATE_RANGE_INVALID

    def test_unparseable_dates_are_valid(self, stub_tree):
        tree = stub_tree(startDate="soon", endDate="2022-01-01")

        assert date_range()(tree) == VALID

    def test_compares_time_of_day(self, stub_tree):
        tree = stub_tree(startDate="2022-01-01T10:00:00", endDate="2022-01-01T09:00:00")

    @pytest.mark.parametrize("start, end", [
        ("02/01/2024", "01/15/2024"),
        ("02/01/2024", "01/02/2024"),
    ])
    def test_slash_dates_read_month_first(self, stub_tree, start, end):
        tree = stub_tree(startDate=start, endDate=end)

        assert date_range()(tree).code == FailureCode.DATE_RANGE_INVALID

    def test_slash_dates_in_order(self, stub_tree):
        tree = stub_tree(startDate="01/02/2024", endDate="02/01/2024")

        assert date_range()(tree) == VALID

        assert date_range()(tree).code == FailureCode.DATE_RANGE_INVALID


class TestMinimumAge:

    def test_old_enough(self, clock):
        assert minimum_age(18, clock=clock)("2000-01-01") == VALID

    def test_too_young(self, clock):
        result = minimum_age(18, clock=clock)("2010-01-01")

        assert result.code == FailureCode.MINIMUM_AGE
        assert result.params == {"requiredAge": 18, "actualAge": 16}

    def test_exact_boundary_is_valid(self, clock):
        # Exactly 18 calendar years before 2026-10-17
        assert minimum_age(18, clock=clock)("2008-10-17") == VALID

    def test_one_day_short(self, clock):
        result = minimum_age(18, clock=clock)("2008-10-18")

        assert result.params == {"requiredAge": 18, "actualAge": 17}

    def test_accepts_date_objects(self, clock):
        assert minimum_age(18, clock=clock)(date(2000, 1, 1)) == VALID
        assert minimum_age(18, clock=clock)(datetime(2010, 1, 1)).params["actualAge"] == 16

    def test_future_birth_date_uses_absolute_year_difference(self, clock):
        result = minimum_age(18, clock=clock)("2027-10-17")

        assert result.params == {"requiredAge": 18, "actualAge": 1}

    @pytest.mark.parametrize("value", ["", None, "not a date"])
    def test_unparseable_value_is_valid(self, clock, value):
        assert minimum_age(18, clock=clock)(value) == VALID

    def test_negative_limit_is_rejected(self):
        with pytest.raises(RuleDefinitionError):
            minimum_age(-1)


class TestMaximumAge:

    def test_within_limit(self, clock):
        assert maximum_age(30, clock=clock)("2000-01-01") == VALID

    def test_too_old(self, clock):
        result = maximum_age(30, clock=clock)("1990-01-01")

        assert result.code == FailureCode.MAXIMUM_AGE
        assert result.params == {"requiredAge": 30, "actualAge": 36}

    def test_exact_boundary_is_valid(self, clock):
        assert maximum_age(18, clock=clock)("2008-10-17") == VALID

    def test_default_clock_is_real_time(self):
        assert maximum_age(150)("2000-01-01") == VALID


class TestEpochOffsetYears:

    def test_whole_years(self):
        birth = datetime(2000, 1, 1, tzinfo=timezone.utc)
        now = datetime(2026, 10, 17, tzinfo=timezone.utc)

        assert epoch_offset_years(birth, now) == 26

    def test_same_instant_is_zero(self):
        moment = datetime(2026, 10, 17, tzinfo=timezone.utc)

        assert epoch_offset_years(moment, moment) == 0


class TestParseDate:

    def test_iso_date_is_utc_midnight(self):
        assert parse_date("2022-01-10") == datetime(2022, 1, 10, tzinfo=timezone.utc)

    def test_zulu_suffix(self):
        assert parse_date("2022-01-10T05:00:00Z") == datetime(2022, 1, 10, 5, tzinfo=timezone.utc)

    def test_slash_dates_are_month_first(self):
        assert parse_date("10/01/2022") == datetime(2022, 10, 1, tzinfo=timezone.utc)
        assert parse_date("02/01/2024") == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_day_first_when_month_first_cannot_parse(self):
        assert parse_date("15/01/2024") == datetime(2024, 1, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "nope", 42, ["2022-01-01"]])
    def test_unparseable(self, value):
        assert parse_date(value) is None
