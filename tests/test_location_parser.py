"""
Tests for the coordinate model and the location parser.
"""

import pytest

from genoquery.core.coordinates import (
    location_from_position,
    location_from_range,
    make_location,
)
from genoquery.core.errors import ParseError, ValidationError
from genoquery.core.location_parser import (
    BOTH_PARAMS_MESSAGE,
    INVALID_LOCATIONS_MESSAGE,
    NO_PARAMS_MESSAGE,
    parse_int,
    parse_query,
)
from genoquery.models.data_classes import Location, LocationList, RangeQuery
from genoquery.models.enums import ErrorKind, QueryKind


class TestCoordinateModel:
    """1-based user coordinates to zero-based half-open intervals."""

    @pytest.mark.parametrize("position", [1, 2, 100, 248_956_422])
    def test_position_becomes_one_base_interval(self, position):
        loc = location_from_position("chr1", position)
        assert (loc.chrom, loc.start, loc.end) == ("chr1", position - 1, position)
        assert loc.length == 1

    @pytest.mark.parametrize("start,end", [(1, 1), (1, 100), (500, 1000)])
    def test_inclusive_range_keeps_literal_end(self, start, end):
        loc = location_from_range("X", start, end)
        assert (loc.chrom, loc.start, loc.end) == ("X", start - 1, end)

    def test_empty_chromosome_rejected(self):
        with pytest.raises(ValidationError):
            make_location("", 0, 1)

    def test_zero_position_rejected(self):
        with pytest.raises(ValidationError):
            location_from_position("1", 0)

    def test_reversed_range_rejected(self):
        with pytest.raises(ValidationError):
            location_from_range("1", 100, 1)

    def test_overlaps_and_contains(self):
        loc = Location(chrom="1", start=10, end=20)
        assert loc.contains(10)
        assert not loc.contains(20)
        assert loc.overlaps("1", 19, 25)
        assert not loc.overlaps("1", 20, 25)
        assert not loc.overlaps("2", 10, 20)


class TestParseInt:
    """Integer parsing accepts only an optionally signed run of ASCII digits."""

    @pytest.mark.parametrize("value,expected", [("1", 1), ("+7", 7), ("-3", -3), ("0042", 42)])
    def test_accepts_signed_digits(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", ["", " 1", "1 ", "1_000", "1.5", "abc", "1\n", "١"])
    def test_rejects_everything_else(self, value):
        with pytest.raises(ParseError) as exc:
            parse_int(value)
        assert exc.value.kind == ErrorKind.PARSE

    @pytest.mark.parametrize("value,expected", [
        ("9223372036854775807", 2 ** 63 - 1),
        ("-9223372036854775808", -(2 ** 63)),
    ])
    def test_accepts_64_bit_bounds(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize("value", [
        "9223372036854775808",
        "-9223372036854775809",
        "99999999999999999999",
        "9" * 5000,
    ])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(ParseError) as exc:
            parse_int(value)
        assert "value out of range" in exc.value.message

    def test_out_of_range_position_in_query(self):
        with pytest.raises(ParseError):
            parse_query("1:99999999999999999999", None)


class TestParamExclusivity:
    """Exactly one of locations and range must be given."""

    @pytest.mark.parametrize("locations,range_", [
        ("1:1", "1:1-100"),
        ("not even valid", "also::bad"),
        ("1:1,1:2", "2:5-6"),
    ])
    def test_both_params_rejected(self, locations, range_):
        with pytest.raises(ValidationError) as exc:
            parse_query(locations, range_)
        assert exc.value.message == BOTH_PARAMS_MESSAGE

    @pytest.mark.parametrize("locations,range_", [(None, None), ("", ""), (None, ""), ("", None)])
    def test_no_params_rejected(self, locations, range_):
        with pytest.raises(ValidationError) as exc:
            parse_query(locations, range_)
        assert exc.value.message == NO_PARAMS_MESSAGE


class TestLocationsParam:
    """``locations=CHR:POS[,CHR:POS...]``"""

    def test_three_positions_in_order(self):
        query = parse_query("1:1,1:2,1:3", None)
        assert isinstance(query, LocationList)
        assert query.kind == QueryKind.LOCATIONS
        assert [(l.chrom, l.start, l.end) for l in query.locations] == [
            ("1", 0, 1), ("1", 1, 2), ("1", 2, 3),
        ]

    def test_input_order_preserved(self):
        query = parse_query("2:50,1:7,X:3,1:7", None)
        assert [str(l) for l in query.locations] == ["2:49-50", "1:6-7", "X:2-3", "1:6-7"]

    @pytest.mark.parametrize("param", ["1", "1:2:3", "1:1,", ",1:1", "1:1,2"])
    def test_wrong_field_count_is_invalid(self, param):
        with pytest.raises(ValidationError) as exc:
            parse_query(param, None)
        assert exc.value.message == INVALID_LOCATIONS_MESSAGE

    @pytest.mark.parametrize("param", ["1:x", "1:1,1:two", "1: 5"])
    def test_non_numeric_position_is_parse_error(self, param):
        with pytest.raises(ParseError):
            parse_query(param, None)


class TestRangeParam:
    """``range=CHR:START-END``"""

    def test_range_is_single_location(self):
        query = parse_query(None, "1:1-100")
        assert isinstance(query, RangeQuery)
        assert query.kind == QueryKind.RANGE
        assert query.locations == (Location(chrom="1", start=0, end=100),)

    def test_single_base_range(self):
        query = parse_query("", "chr7:5-5")
        assert query.location == Location(chrom="chr7", start=4, end=5)

    @pytest.mark.parametrize("param", ["1", "1:1:1-2", "1:100", "1:1-2-3", "1:-5-10"])
    def test_malformed_range_is_invalid(self, param):
        with pytest.raises(ValidationError) as exc:
            parse_query(None, param)
        assert exc.value.message == INVALID_LOCATIONS_MESSAGE

    @pytest.mark.parametrize("param", ["1:a-100", "1:1-b", "1:1.5-2"])
    def test_non_numeric_bounds_are_parse_errors(self, param):
        with pytest.raises(ParseError):
            parse_query(None, param)

    def test_reversed_range_is_validation_error(self):
        with pytest.raises(ValidationError):
            parse_query(None, "1:100-1")
