"""
Service that turns a submitted report form into an updated place and a new report.
"""
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Dict, NamedTuple, Optional

from accessmap.models import FeatureValue, Place, Report, ReportSubmission
from accessmap.services import rating_engine

logger = logging.getLogger(__name__)


class ReportValidationError(ValueError):
    """The submitted form cannot become a report."""


class SubmissionResult(NamedTuple):
    place: Place
    report: Report


def merge_features(
    existing: Dict[str, FeatureValue], submitted: Dict[str, FeatureValue]
) -> Dict[str, FeatureValue]:
    """
    Overlay submitted feature values on the known ones.

    An "unknown" in the submission means "not observed" and never erases a
    previously known yes/no.
    """
    merged = dict(existing)
    for field, value in submitted.items():
        if value is not FeatureValue.unknown:
            merged[field] = value
    return merged


def _new_place_id() -> str:
    return f"custom_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def build_submission(
    submission: ReportSubmission,
    existing_place: Optional[Place] = None,
    now: Optional[datetime] = None,
) -> SubmissionResult:
    """
    Build the (place, report) pair for one submission without touching storage.

    For an existing place only the derived fields change: features are merged,
    confidence is reset to the per-report baseline, the report count goes up by
    one and the report is appended. Name, address, coordinates and id stay.
    """
    place_name = submission.place_name or (existing_place.name if existing_place else "")
    if not place_name:
        raise ReportValidationError("place_name is required")

    if existing_place is not None:
        place_id = existing_place.id
        known = existing_place.feature_values()
    else:
        place_id = submission.place_id or _new_place_id()
        known = {}

    features = merge_features(known, submission.feature_values())
    result = rating_engine.compute(features)

    report = Report(
        place_id=place_id,
        comment=submission.comment or None,
        created_date=now or datetime.now(timezone.utc),
        created_by=submission.created_by,
        verified=False,
        confidence_score=result.confidence_delta,
        **submission.feature_values(),
    )

    if existing_place is not None:
        place = existing_place.model_copy(
            update={
                **features,
                "confidence_score": result.confidence_delta,
                "report_count": existing_place.report_count + 1,
                "reports": [*existing_place.reports, report],
            }
        )
    else:
        place = Place(
            id=place_id,
            name=place_name,
            address=submission.address,
            latitude=submission.latitude if submission.latitude is not None else 0.0,
            longitude=submission.longitude if submission.longitude is not None else 0.0,
            confidence_score=result.confidence_delta,
            verified=False,
            report_count=1,
            reports=[report],
            **features,
        )

    logger.info(
        f"Report for place {place_id}: rating={place.overall_rating.value}, "
        f"confidence={place.confidence_score}, reports={place.report_count}"
    )
    return SubmissionResult(place=place, report=report)


def submit_report(store, submission: ReportSubmission) -> SubmissionResult:
    """
    Validate, rate and hand one submission to the store.

    Exactly one write happens per call; making it atomic is the store's job.
    """
    existing = store.get(submission.place_id) if submission.place_id else None
    result = build_submission(submission, existing)
    store.save(result.place, result.report)
    return result
