import logging

from fastapi import APIRouter, Depends, HTTPException

from accessmap.deps import get_store
from accessmap.models import ReportSubmission
from accessmap.routers.places import serialize_place
from accessmap.services.report_submission import ReportValidationError, submit_report
from accessmap.store import InMemoryPlaceStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _submit(store: InMemoryPlaceStore, payload: ReportSubmission) -> dict:
    try:
        result = submit_report(store, payload)
    except ReportValidationError as e:
        print(f"[REPORT ERROR] Rejected submission: {e}", flush=True)
        logger.warning(f"Rejected report submission: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    print(
        f"[REPORT] Place {result.place.id} now {result.place.overall_rating.value} "
        f"({result.place.report_count} reports)",
        flush=True,
    )
    return {
        "status": "success",
        "place": serialize_place(result.place),
        "report": result.report.model_dump(mode="json"),
    }


@router.post("/", summary="Submit an accessibility report for a new or existing place")
async def submit_report_for_any_place(
    payload: ReportSubmission,
    store: InMemoryPlaceStore = Depends(get_store),
):
    return _submit(store, payload)


@router.post("/{place_id}", summary="Submit an accessibility report for an existing place")
async def submit_report_for_place(
    place_id: str,
    payload: ReportSubmission,
    store: InMemoryPlaceStore = Depends(get_store),
):
    if store.get(place_id) is None:
        raise HTTPException(status_code=404, detail="Place not found")
    payload = payload.model_copy(update={"place_id": place_id})
    return _submit(store, payload)
