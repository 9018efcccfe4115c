"""Unit tests for earthquake parsing.

These tests demonstrate the benefit of the Functional Core pattern:
- No mocks needed
- Fast, deterministic execution
- Simple assertions on pure functions
"""

import json
from datetime import datetime, timezone

import pytest

from quakereport.core.earthquake import (
    STATUS_ERROR,
    STATUS_LOADED,
    STATUS_NO_DATA,
    EarthquakeRecord,
    FeatureError,
    parse_earthquakes,
    parse_feature,
)


def make_feature(
    mag=6.7,
    place="5km N of Cairo, Egypt",
    time=1703001600000,
    url="https://earthquake.usgs.gov/earthquakes/eventpage/us1",
):
    """Build a USGS GeoJSON feature."""
    return {
        "type": "Feature",
        "properties": {"mag": mag, "place": place, "time": time, "url": url},
        "geometry": {"type": "Point", "coordinates": [31.2, 30.0, 10.0]},
    }


def make_response(*features):
    """Build a USGS GeoJSON response body."""
    return json.dumps({
        "type": "FeatureCollection",
        "metadata": {"count": len(features)},
        "features": list(features),
    })


class TestEarthquakeRecord:
    """Tests for the EarthquakeRecord model."""

    def test_time_converts_milliseconds(self):
        """time should be the UTC datetime of timestamp_millis."""
        record = EarthquakeRecord(
            magnitude=4.2,
            location="Somewhere",
            timestamp_millis=1703001600000,
            detail_url="https://example.com",
        )
        assert record.time == datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc)

    def test_is_immutable(self):
        """Records should not be mutable."""
        record = EarthquakeRecord(4.2, "Somewhere", 0, "https://example.com")
        with pytest.raises(AttributeError):
            record.magnitude = 5.0


class TestParseFeature:
    """Tests for parse_feature() pure function."""

    def test_parses_valid_feature(self):
        """Should extract mag, place, time and url."""
        record = parse_feature(make_feature())

        assert record.magnitude == 6.7
        assert record.location == "5km N of Cairo, Egypt"
        assert record.timestamp_millis == 1703001600000
        assert record.detail_url == "https://earthquake.usgs.gov/earthquakes/eventpage/us1"

    def test_integer_magnitude_becomes_float(self):
        """An integral magnitude should be stored as float."""
        record = parse_feature(make_feature(mag=5))
        assert record.magnitude == 5.0
        assert isinstance(record.magnitude, float)

    @pytest.mark.parametrize("field", ["mag", "place", "time", "url"])
    def test_missing_field_raises(self, field):
        """Every one of the four fields is required."""
        feature = make_feature()
        del feature["properties"][field]

        with pytest.raises(FeatureError, match=field):
            parse_feature(feature)

    def test_null_magnitude_raises(self):
        """A null magnitude is a type error."""
        with pytest.raises(FeatureError, match="mag"):
            parse_feature(make_feature(mag=None))

    def test_boolean_time_raises(self):
        """Booleans are not accepted as timestamps."""
        with pytest.raises(FeatureError, match="time"):
            parse_feature(make_feature(time=True))

    def test_missing_properties_raises(self):
        """A feature without properties cannot be parsed."""
        with pytest.raises(FeatureError, match="properties"):
            parse_feature({"type": "Feature"})

    def test_non_object_feature_raises(self):
        """Features must be objects."""
        with pytest.raises(FeatureError):
            parse_feature(["not", "a", "feature"])

    def test_huge_integer_magnitude_raises(self):
        """An integer magnitude too large for a float is rejected."""
        with pytest.raises(FeatureError, match="mag"):
            parse_feature(make_feature(mag=10 ** 400))

    @pytest.mark.parametrize("mag", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_magnitude_raises(self, mag):
        with pytest.raises(FeatureError, match="mag"):
            parse_feature(make_feature(mag=mag))

    def test_out_of_range_time_raises(self):
        """A timestamp past the datetime range is rejected."""
        with pytest.raises(FeatureError, match="time"):
            parse_feature(make_feature(time=10 ** 17))


class TestParseEarthquakes:
    """Tests for parse_earthquakes() pure function."""

    def test_record_count_and_order_match_features(self):
        """One record per feature, in array order."""
        body = make_response(
            make_feature(mag=5.1, place="First"),
            make_feature(mag=6.2, place="Second"),
            make_feature(mag=7.3, place="Third"),
        )

        result = parse_earthquakes(body)

        assert result.status == STATUS_LOADED
        assert result.error is None
        assert [r.location for r in result.records] == ["First", "Second", "Third"]
        assert [r.magnitude for r in result.records] == [5.1, 6.2, 7.3]

    @pytest.mark.parametrize("body", ["", None, "   \n"])
    def test_empty_body_is_no_data(self, body):
        """Empty text yields the no-data status without raising."""
        result = parse_earthquakes(body)

        assert result.status == STATUS_NO_DATA
        assert result.records == ()

    def test_zero_features_is_loaded_and_empty(self):
        """A valid response without features is loaded, not no-data."""
        result = parse_earthquakes(make_response())

        assert result.status == STATUS_LOADED
        assert result.records == ()

    def test_missing_magnitude_truncates_at_that_feature(self):
        """A bad feature stops parsing; earlier records are kept."""
        bad = make_feature(place="Bad")
        del bad["properties"]["mag"]
        body = make_response(
            make_feature(place="First"),
            make_feature(place="Second"),
            bad,
            make_feature(place="Never reached"),
        )

        result = parse_earthquakes(body)

        assert result.status == STATUS_ERROR
        assert [r.location for r in result.records] == ["First", "Second"]
        assert "feature 2" in result.error
        assert "mag" in result.error

    def test_bad_first_feature_returns_no_records(self):
        """A bad first feature leaves no records."""
        bad = make_feature()
        del bad["properties"]["mag"]

        result = parse_earthquakes(make_response(bad, make_feature()))

        assert result.status == STATUS_ERROR
        assert result.records == ()

    def test_malformed_json_is_error(self):
        """Invalid JSON is reported, not raised."""
        result = parse_earthquakes('{"features": [')

        assert result.status == STATUS_ERROR
        assert result.records == ()
        assert "invalid JSON" in result.error

    def test_deeply_nested_json_is_error(self):
        """Nesting deeper than the decoder allows is reported, not raised."""
        result = parse_earthquakes("[" * 100000 + "]" * 100000)

        assert result.status == STATUS_ERROR
        assert result.records == ()

    def test_overflowing_magnitude_is_error(self):
        """A 400-digit magnitude stops parsing at that feature."""
        body = (
            '{"features": [{"properties": {"mag": 1' + "0" * 400
            + ', "place": "x", "time": 1, "url": "u"}}]}'
        )

        result = parse_earthquakes(body)

        assert result.status == STATUS_ERROR
        assert "mag" in result.error

    def test_infinite_magnitude_is_error(self):
        body = '{"features": [{"properties": {"mag": 1e999, "place": "x", "time": 1, "url": "u"}}]}'

        result = parse_earthquakes(body)

        assert result.status == STATUS_ERROR
        assert "mag" in result.error

    def test_out_of_range_time_keeps_earlier_records(self):
        """A timestamp that cannot be displayed is a feature error."""
        body = make_response(
            make_feature(place="First"),
            make_feature(place="Far future", time=10 ** 17),
        )

        result = parse_earthquakes(body)

        assert result.status == STATUS_ERROR
        assert [r.location for r in result.records] == ["First"]
        assert "feature 1" in result.error
        assert "time" in result.error

    def test_missing_features_array_is_error(self):
        """A document without a features array is an error."""
        result = parse_earthquakes(json.dumps({"type": "FeatureCollection"}))

        assert result.status == STATUS_ERROR
        assert result.records == ()

    def test_non_object_root_is_error(self):
        """A JSON array at the root is an error."""
        result = parse_earthquakes("[1, 2, 3]")

        assert result.status == STATUS_ERROR

    def test_logs_parse_errors(self, caplog):
        """Parse failures are logged for diagnostics."""
        parse_earthquakes("not json")

        assert "Problem parsing the earthquake JSON results" in caplog.text
