"""
Unit tests for LocationIndex.

Tests index construction from GeoJSON features, de-duplication and
street-name search.
"""

import json
import logging

import pytest

from neighborgood.locations.index import LocationIndex
from neighborgood.locations.models import CrimeLocation, extract_street_name


class TestExtractStreetName:
    """Test cases for extract_street_name."""

    @pytest.mark.parametrize(
        "address,expected",
        [
            ("100 MAIN ST", "MAIN ST"),
            ("15   N TRYON ST", "N TRYON ST"),
            ("MAIN ST / ELM ST", "MAIN ST / ELM ST"),
            ("123MAIN ST", "123MAIN ST"),
            ("123 ", None),
            ("", None),
        ],
    )
    def test_extract_street_name(self, address, expected):
        """Test house-number stripping."""
        assert extract_street_name(address) == expected


class TestCrimeLocation:
    """Test cases for CrimeLocation."""

    def test_formatted_address(self):
        """Test the formatted address joins location, city and state."""
        location = CrimeLocation("100 MAIN ST", "CHARLOTTE", "NC")

        assert location.formatted_address == "100 MAIN ST, CHARLOTTE, NC"
        assert location.street_name == "MAIN ST"


class TestLocationIndex:
    """Test cases for LocationIndex class."""

    @pytest.fixture
    def index(self, sample_features, test_config):
        """Index built from the sample features."""
        return LocationIndex.load(sample_features, test_config)

    def test_load_skips_malformed_features(self, index):
        """Test features missing required properties are skipped."""
        assert [loc.location for loc in index] == [
            "100 MAIN ST",
            "200 MAIN ST",
            "15 N TRYON ST",
            "MAIN ST / ELM ST",
        ]

    def test_deduplicates_by_location(self, test_config):
        """Test identical location strings produce one entry."""
        features = [
            {"properties": {"LOCATION": "100 MAIN ST", "CITY": "CHARLOTTE", "STATE": "NC"}},
            {"properties": {"LOCATION": "100 MAIN ST", "CITY": "MATTHEWS", "STATE": "NC"}},
        ]

        index = LocationIndex.load(features, test_config)

        assert len(index) == 1
        assert next(iter(index)).city == "CHARLOTTE"

    def test_search_case_insensitive(self, index):
        """Test a lower-case query matches upper-case street names."""
        results = index.search("tryon")

        assert [loc.location for loc in results] == ["15 N TRYON ST"]

    def test_search_one_result_per_street(self, index):
        """Test only the first location on each street is returned."""
        results = index.search("Main")

        assert [loc.location for loc in results] == ["100 MAIN ST", "MAIN ST / ELM ST"]

    def test_search_empty_query(self, index):
        """Test an empty query returns nothing rather than everything."""
        assert index.search("") == []

    def test_search_no_match(self, index):
        """Test an unknown street gives no results."""
        assert index.search("providence") == []

    def test_search_ignores_house_number(self, index):
        """Test the query is matched against the street name only."""
        assert index.search("200") == []

    def test_location_without_street_name(self):
        """Test entries without a street name are kept but never matched."""
        index = LocationIndex([CrimeLocation("42 ", "CHARLOTTE", "NC")])

        assert len(index) == 1
        assert index.search("42") == []
        assert index.street_name_for_display(next(iter(index))) == "42 "

    def test_street_name_for_display(self, index):
        """Test the display name drops the house number."""
        location = index.search("tryon")[0]

        assert index.street_name_for_display(location) == "N TRYON ST"

    def test_lookup(self, index):
        """Test exact street-name lookup returns the first location kept."""
        assert index.lookup("MAIN ST").location == "100 MAIN ST"
        assert index.lookup("main st") is None

    def test_custom_property_names(self, test_config):
        """Test property names come from config."""
        fields = test_config.locations.model_copy(update={"location_field": "ADDRESS"})
        config = test_config.model_copy(update={"locations": fields})
        features = [{"properties": {"ADDRESS": "7 OAK AVE", "CITY": "CHARLOTTE", "STATE": "NC"}}]

        index = LocationIndex.load(features, config)

        assert [loc.location for loc in index] == ["7 OAK AVE"]


class TestLocationIndexFromGeojson:
    """Test cases for loading the reference dataset from disk."""

    def test_from_geojson(self, tmp_path, sample_features, test_config):
        """Test loading a FeatureCollection file."""
        path = tmp_path / "locations.geojson"
        path.write_text(json.dumps({"type": "FeatureCollection", "features": sample_features}))

        index = LocationIndex.from_geojson(path, test_config)

        assert len(index) == 4

    def test_missing_file(self, tmp_path, test_config, caplog):
        """Test a missing file gives an empty index and an error log."""
        with caplog.at_level(logging.ERROR):
            index = LocationIndex.from_geojson(tmp_path / "missing.geojson", test_config)

        assert len(index) == 0
        assert "not found" in caplog.text

    def test_invalid_json(self, tmp_path, test_config):
        """Test an unparsable file gives an empty index."""
        path = tmp_path / "broken.geojson"
        path.write_text("{")

        assert len(LocationIndex.from_geojson(path, test_config)) == 0

    def test_invalid_encoding(self, tmp_path, test_config, caplog):
        """Test a file that isn't valid UTF-8 gives an empty index and an error log."""
        path = tmp_path / "latin1.geojson"
        path.write_bytes(b'{"features": [\xff\xfe]}')

        with caplog.at_level(logging.ERROR):
            index = LocationIndex.from_geojson(path, test_config)

        assert len(index) == 0
        assert "Error loading or parsing" in caplog.text

    def test_missing_feature_list(self, tmp_path, test_config):
        """Test a document without features gives an empty index."""
        path = tmp_path / "empty.geojson"
        path.write_text(json.dumps({"type": "FeatureCollection"}))

        assert len(LocationIndex.from_geojson(path, test_config)) == 0
