"""
Rating rules that turn five feature observations into an overall rating.
"""
import logging
from collections import Counter
from typing import Any, Dict, Mapping, NamedTuple, Union

from accessmap.models import (
    FEATURE_FIELDS,
    FeatureFields,
    FeatureValue,
    OverallRating,
    as_feature_value,
)

logger = logging.getLogger(__name__)

# Every report counts for this much confidence on its own. Aggregating several
# reports (agreement, recency) is left to the store.
REPORT_CONFIDENCE_BASELINE = 50

Features = Union[FeatureFields, Mapping[str, Any]]


class RatingResult(NamedTuple):
    rating: OverallRating
    confidence_delta: int


def _read_features(features: Features) -> Dict[str, FeatureValue]:
    """
    Normalize the input to {field name: FeatureValue}.

    Mappings may use either the short names (ramp, lift, ...) or the model
    field names (has_ramp, has_lift, ...). Missing keys read as unknown.
    """
    if isinstance(features, FeatureFields):
        return features.feature_values()

    values = {}
    for short, field in FEATURE_FIELDS.items():
        raw = features.get(field, features.get(short))
        values[field] = as_feature_value(raw)
    return values


def count_feature_values(features: Features) -> Counter:
    return Counter(_read_features(features).values())


def compute_rating(features: Features) -> OverallRating:
    counts = count_feature_values(features)

    # Order matters: first match wins
    if counts[FeatureValue.yes] >= 4:
        return OverallRating.accessible
    if counts[FeatureValue.no] >= 3:
        return OverallRating.not_accessible
    if counts[FeatureValue.unknown] >= 4:
        return OverallRating.unknown
    return OverallRating.partially_accessible


def compute(features: Features) -> RatingResult:
    """
    Rate one set of feature observations.

    Always returns one of the four ratings and never raises. The confidence
    part is the fixed per-report baseline; it does not look at report history.
    """
    rating = compute_rating(features)
    logger.debug(f"Computed rating {rating.value}")
    return RatingResult(rating=rating, confidence_delta=REPORT_CONFIDENCE_BASELINE)
