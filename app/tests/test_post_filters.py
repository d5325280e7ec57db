"""Post-query filter tests"""

import re
from datetime import date, datetime

import pytest

from app.schemas.search import FilterCriteria
from app.services.post_filters import (
    PostQueryFilter,
    compile_creator_pattern,
    creator_matches,
    parse_publication_date,
    within_date_range,
)


class TestParsePublicationDate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Jan 15, 2020 10:30:00 AM", datetime(2020, 1, 15, 10, 30)),
            ("Jan 15, 2020, 10:30:00 PM", datetime(2020, 1, 15, 22, 30)),
            ("Jan 15, 2020 10:30:00\u202fAM", datetime(2020, 1, 15, 10, 30)),
            ("Wed Jan 15 10:30:00 UTC 2020", datetime(2020, 1, 15, 10, 30)),
            ("01/15/2020", datetime(2020, 1, 15)),
            ("01/15/2020 13:05:00", datetime(2020, 1, 15, 13, 5)),
            ("2020-01-15", datetime(2020, 1, 15)),
            ("2020-01-15T10:30:00Z", datetime(2020, 1, 15, 10, 30)),
            ("2020-01-15T12:30:00+02:00", datetime(2020, 1, 15, 10, 30)),
        ],
    )
    def test_known_formats(self, value, expected):
        assert parse_publication_date(value) == expected

    @pytest.mark.parametrize("value", ["Not Found", "", "   ", None, 20200115, "15th of January"])
    def test_unparsable(self, value):
        assert parse_publication_date(value) is None


class TestDateRange:
    """Date-range predicate"""

    def test_before_start_is_excluded(self):
        assert within_date_range("01/15/2020", date(2020, 2, 1), None) is False

    def test_no_bounds_included(self):
        assert within_date_range("01/15/2020", None, None) is True

    def test_inside_range(self):
        assert within_date_range("Jan 15, 2020 10:30:00 AM", date(2020, 1, 1), date(2020, 2, 1)) is True

    def test_after_end_is_excluded(self):
        assert within_date_range("03/01/2020", None, date(2020, 2, 1)) is False

    def test_start_same_day_is_included(self):
        assert within_date_range("Jan 15, 2020 10:30:00 AM", date(2020, 1, 15), None) is True

    def test_end_same_day_later_time_is_excluded(self):
        # The end bound is midnight of the given day
        assert within_date_range("Jan 15, 2020 10:30:00 AM", None, date(2020, 1, 15)) is False

    def test_unparsable_passes(self):
        assert within_date_range("Not Found", date(2020, 2, 1), date(2020, 3, 1)) is True


class TestCreatorPredicate:
    """Creator pattern predicate"""

    def test_no_pattern_passes(self):
        assert creator_matches("anyone", None) is True
        assert compile_creator_pattern("") is None
        assert compile_creator_pattern(None) is None

    def test_absent_creator_passes(self):
        assert creator_matches(None, compile_creator_pattern("smith")) is True

    def test_any_element_matches_case_insensitively(self):
        pattern = compile_creator_pattern("smith")
        assert creator_matches(["Jane Smith", "Bob Lee"], pattern) is True

    def test_no_element_matches(self):
        pattern = compile_creator_pattern("smith")
        assert creator_matches(["Jane Doe", "Bob Lee"], pattern) is False

    def test_single_string(self):
        pattern = compile_creator_pattern("LEE")
        assert creator_matches("Bob Lee", pattern) is True
        assert creator_matches("Jane Doe", pattern) is False

    def test_pattern_is_a_regex(self):
        pattern = compile_creator_pattern("^bob")
        assert creator_matches("Bob Lee", pattern) is True
        assert creator_matches("Jane Bob", pattern) is False

    def test_malformed_pattern_raises(self):
        with pytest.raises(re.error):
            compile_creator_pattern("smith(")


class TestPostQueryFilter:
    def test_both_predicates_must_pass(self):
        criteria = FilterCriteria(start_date=date(2020, 1, 1), creator_pattern="smith")
        record_filter = PostQueryFilter.from_criteria(criteria)

        assert record_filter.admits({"Publication Date": "01/15/2020", "Creator": "Jane Smith"}) is True
        assert record_filter.admits({"Publication Date": "01/15/2019", "Creator": "Jane Smith"}) is False
        assert record_filter.admits({"Publication Date": "01/15/2020", "Creator": "Bob Lee"}) is False

    def test_matches_identifier_not_resolved_name(self):
        record_filter = PostQueryFilter.from_criteria(FilterCriteria(creator_pattern="jane"))
        record = {"Creator": "jdoe : http://vivo.example/jdoe", "CreatorName": "Jane Doe"}
        assert record_filter.admits(record) is False

    def test_empty_criteria_admit_everything(self):
        record_filter = PostQueryFilter.from_criteria(FilterCriteria())
        assert record_filter.admits({}) is True
