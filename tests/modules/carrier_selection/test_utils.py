"""Tests for location and tag matching helpers."""

import pytest

from bagster.modules.carrier_selection.utils import (
    normalize_text,
    primary_locality,
    is_wildcard_area,
    area_matches_location,
    serves_location,
    contains_ignore_case,
    missing_tags,
    parse_strategy,
)
from bagster.modules.carrier_selection.constants import SelectionStrategy
from bagster.modules.carrier_selection.errors import UnknownStrategy


def test_normalize_text():
    assert normalize_text("  Port   Harcourt ") == "port harcourt"
    assert normalize_text(None) == ""


def test_primary_locality():
    assert primary_locality("Accra, Ghana") == "accra"
    assert primary_locality("Lagos") == "lagos"


def test_wildcard_area():
    assert is_wildcard_area("All Nigeria")
    assert not is_wildcard_area("All")
    assert not is_wildcard_area("Lagos")


@pytest.mark.parametrize(
    "area,location,expected",
    [
        ("Lagos", "Lagos, Nigeria", True),
        ("lagos", "LAGOS", True),
        ("Ghana", "Accra, Ghana", True),
        ("Port Harcourt", "Port Harcourt", True),
        ("All Nigeria", "Nairobi, Kenya", True),
        ("Kano", "Accra, Ghana", False),
        ("", "Lagos", False),
    ],
)
def test_area_matches_location(area, location, expected):
    assert area_matches_location(area, location) is expected


def test_serves_location():
    assert serves_location(["Kano", "Abuja"], "Abuja")
    assert not serves_location(["Kano", "Abuja"], "Lagos")
    assert not serves_location([], "Lagos")


def test_contains_ignore_case():
    assert contains_ignore_case(["Air", "Road"], "air")
    assert not contains_ignore_case(["road"], "sea")


def test_missing_tags():
    assert missing_tags(["pickup", "Insurance"], ["insurance", "packaging"]) == ["packaging"]
    assert missing_tags(["pickup"], []) == []


def test_parse_strategy():
    assert parse_strategy(None) == SelectionStrategy.BALANCED
    assert parse_strategy("BEST_RATED") == SelectionStrategy.BEST_RATED
    assert parse_strategy(SelectionStrategy.CHEAPEST) == SelectionStrategy.CHEAPEST

    with pytest.raises(UnknownStrategy):
        parse_strategy("fastest")
