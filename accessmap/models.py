from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class FeatureValue(str, Enum):
    yes = "yes"
    no = "no"
    unknown = "unknown"


class OverallRating(str, Enum):
    accessible = "accessible"
    partially_accessible = "partially_accessible"
    not_accessible = "not_accessible"
    unknown = "unknown"

    @property
    def label(self) -> str:
        return RATING_LABELS[self]


RATING_LABELS = {
    OverallRating.accessible: "Accessible",
    OverallRating.partially_accessible: "Partially Accessible",
    OverallRating.not_accessible: "Not Accessible",
    OverallRating.unknown: "Unknown",
}

# short name -> model field
FEATURE_FIELDS = {
    "ramp": "has_ramp",
    "lift": "has_lift",
    "toilet": "has_accessible_toilet",
    "parking": "has_accessible_parking",
    "entrance": "has_accessible_entrance",
}


def as_feature_value(value: Any) -> FeatureValue:
    """Read anything stored in a feature slot as a FeatureValue; unrecognised means unknown."""
    if isinstance(value, FeatureValue):
        return value
    if isinstance(value, str):
        try:
            return FeatureValue(value.strip().lower())
        except ValueError:
            return FeatureValue.unknown
    return FeatureValue.unknown


class FeatureFields(BaseModel):
    has_ramp: FeatureValue = FeatureValue.unknown
    has_lift: FeatureValue = FeatureValue.unknown
    has_accessible_toilet: FeatureValue = FeatureValue.unknown
    has_accessible_parking: FeatureValue = FeatureValue.unknown
    has_accessible_entrance: FeatureValue = FeatureValue.unknown

    @field_validator(*FEATURE_FIELDS.values(), mode="before")
    @classmethod
    def _missing_is_unknown(cls, value: Any) -> Any:
        if value is None or value == "":
            return FeatureValue.unknown
        return value

    def feature_values(self) -> dict:
        return {field: getattr(self, field) for field in FEATURE_FIELDS.values()}


class AccessibilityFeatures(FeatureFields):
    """The five tracked features plus the rating derived from them."""

    @computed_field
    @property
    def overall_rating(self) -> OverallRating:
        # Imported here so the engine can depend on these models.
        from accessmap.services.rating_engine import compute_rating

        return compute_rating(self)


class Report(AccessibilityFeatures):
    model_config = ConfigDict(frozen=True)

    place_id: str
    comment: Optional[str] = None
    created_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    created_by: Optional[str] = None
    verified: bool = False
    confidence_score: int = Field(50, ge=0, le=100)


class Place(AccessibilityFeatures):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    confidence_score: int = Field(0, ge=0, le=100)
    verified: bool = False
    report_count: int = Field(0, ge=0, alias="reportCount")
    reports: List[Report] = Field(default_factory=list)

    @field_validator("address", mode="before")
    @classmethod
    def _address_none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class FilterSpec(BaseModel):
    """Filter controls for a single listing call. Unset toggles impose no constraint."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ramp: bool = False
    lift: bool = False
    toilet: bool = False
    parking: bool = False
    user_verified: bool = Field(False, alias="userVerified")
    search_query: str = Field("", alias="searchQuery")


class ReportSubmission(FeatureFields):
    """Raw payload of the report form."""

    place_id: Optional[str] = None
    place_name: str = ""
    address: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    comment: Optional[str] = None
    created_by: Optional[str] = None
