"""
Search and feature filtering over a place collection.
"""
from typing import Any, Iterable, List, Optional

from accessmap.models import FEATURE_FIELDS, FeatureValue, FilterSpec, as_feature_value

# FilterSpec toggle -> place feature it requires to be "yes"
FEATURE_TOGGLES = ("ramp", "lift", "toilet", "parking")


def _get(place: Any, key: str, default: Any = None) -> Any:
    if isinstance(place, dict):
        return place.get(key, default)
    return getattr(place, key, default)


def matches_search(place: Any, query: Optional[str]) -> bool:
    if not query:
        return True
    needle = query.lower()
    name = _get(place, "name") or ""
    address = _get(place, "address") or ""
    return needle in name.lower() or needle in address.lower()


def matches_feature_filters(place: Any, spec: FilterSpec) -> bool:
    for toggle in FEATURE_TOGGLES:
        if not getattr(spec, toggle):
            continue
        value = as_feature_value(_get(place, FEATURE_FIELDS[toggle]))
        if value is not FeatureValue.yes:
            return False

    if spec.user_verified and not _get(place, "verified", False):
        return False
    return True


def filter_places(places: Iterable[Any], spec: Optional[FilterSpec] = None) -> List[Any]:
    """
    Return the places matching both the search query and every active toggle.

    The result keeps the input order and never adds or repeats a place.
    Places are read, not modified.
    """
    if spec is None:
        spec = FilterSpec()
    return [
        place
        for place in places
        if matches_search(place, spec.search_query) and matches_feature_filters(place, spec)
    ]
