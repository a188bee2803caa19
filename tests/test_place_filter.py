from __future__ import annotations

import pytest

from accessmap.models import FilterSpec, Place
from accessmap.services.place_filter import (
    filter_places,
    matches_feature_filters,
    matches_search,
)


def _places():
    return [
        Place(
            id="lib",
            name="City Library",
            address="12 Market Street",
            has_ramp="yes",
            has_lift="yes",
            has_accessible_toilet="yes",
            has_accessible_parking="no",
            verified=True,
        ),
        Place(
            id="cafe",
            name="Station Cafe",
            address="New Station Street",
            has_ramp="no",
            has_lift="unknown",
            has_accessible_toilet="yes",
        ),
        Place(
            id="museum",
            name="Science Museum",
            address="1 Library Road",
            has_ramp="yes",
            has_lift="no",
            has_accessible_parking="yes",
            verified=True,
        ),
        Place(id="park", name="Park Pavilion", address="Roundhay Park"),
    ]


def _ids(places):
    return [p.id for p in places]


def test_empty_spec_returns_everything_in_order():
    places = _places()
    assert _ids(filter_places(places, FilterSpec())) == ["lib", "cafe", "museum", "park"]
    assert _ids(filter_places(places)) == ["lib", "cafe", "museum", "park"]


def test_empty_collection():
    assert filter_places([], FilterSpec(ramp=True, search_query="x")) == []


def test_search_is_case_insensitive():
    places = _places()
    assert "lib" in _ids(filter_places(places, FilterSpec(search_query="library")))
    assert _ids(filter_places(places, FilterSpec(search_query="STATION"))) == ["cafe"]


def test_search_matches_address():
    # "1 Library Road" matches through the address
    assert _ids(filter_places(_places(), FilterSpec(search_query="library"))) == ["lib", "museum"]


def test_feature_toggles_require_yes():
    places = _places()
    assert _ids(filter_places(places, FilterSpec(ramp=True))) == ["lib", "museum"]
    assert _ids(filter_places(places, FilterSpec(lift=True))) == ["lib"]
    assert _ids(filter_places(places, FilterSpec(toilet=True))) == ["lib", "cafe"]
    assert _ids(filter_places(places, FilterSpec(parking=True))) == ["museum"]


def test_toggles_and_search_combine_with_and():
    spec = FilterSpec(ramp=True, user_verified=True, search_query="museum")
    assert _ids(filter_places(_places(), spec)) == ["museum"]
    spec = FilterSpec(ramp=True, parking=True, lift=True)
    assert filter_places(_places(), spec) == []


def test_user_verified():
    assert _ids(filter_places(_places(), FilterSpec(userVerified=True))) == ["lib", "museum"]


def test_aliases_build_the_same_spec():
    assert FilterSpec(userVerified=True, searchQuery="x") == FilterSpec(user_verified=True, search_query="x")


SPECS = [
    FilterSpec(),
    FilterSpec(ramp=True),
    FilterSpec(toilet=True, search_query="station"),
    FilterSpec(user_verified=True, ramp=True),
    FilterSpec(search_query="LIBRARY"),
]


@pytest.mark.parametrize("spec", SPECS)
def test_filter_is_idempotent(spec):
    once = filter_places(_places(), spec)
    assert filter_places(once, spec) == once


@pytest.mark.parametrize("spec", SPECS)
def test_output_is_an_ordered_subsequence(spec):
    places = _places()
    order = {p.id: i for i, p in enumerate(places)}
    result = _ids(filter_places(places, spec))
    assert len(result) == len(set(result))
    assert [order[i] for i in result] == sorted(order[i] for i in result)


@pytest.mark.parametrize("toggle", ["ramp", "lift", "toilet", "parking", "user_verified"])
def test_enabling_a_toggle_never_grows_the_result(toggle):
    places = _places()
    for base in SPECS:
        narrower = base.model_copy(update={toggle: True})
        assert len(filter_places(places, narrower)) <= len(filter_places(places, base))


def test_inputs_are_not_mutated():
    places = _places()
    snapshot = [p.model_dump() for p in places]
    spec = FilterSpec(ramp=True, search_query="city")
    filter_places(places, spec)
    assert [p.model_dump() for p in places] == snapshot
    assert spec == FilterSpec(ramp=True, search_query="city")


def test_missing_feature_field_reads_as_unknown():
    raw = {"id": "x", "name": "Bare Place", "address": None}
    assert not matches_feature_filters(raw, FilterSpec(ramp=True))
    assert matches_feature_filters(raw, FilterSpec())
    assert matches_search(raw, "bare")
    assert not matches_search(raw, "street")


def test_dict_places_are_filtered_like_models():
    raw = [
        {"id": "a", "name": "A", "address": "", "has_ramp": "yes", "verified": True},
        {"id": "b", "name": "B", "address": "", "has_ramp": "no"},
    ]
    assert [p["id"] for p in filter_places(raw, FilterSpec(ramp=True, user_verified=True))] == ["a"]
