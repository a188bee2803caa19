import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from accessmap.deps import get_store
from accessmap.models import FilterSpec, Place
from accessmap.services.place_filter import filter_places
from accessmap.store import InMemoryPlaceStore

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_place(place: Place, include_reports: bool = False) -> dict:
    """JSON shape of a place; the rating label rides along for badges."""
    doc = place.model_dump(
        mode="json", by_alias=True, exclude=None if include_reports else {"reports"}
    )
    doc["overall_rating_label"] = place.overall_rating.label
    return doc


def _get_place_or_404(store: InMemoryPlaceStore, place_id: str) -> Place:
    place = store.get(place_id)
    if place is None:
        raise HTTPException(status_code=404, detail="Place not found")
    return place


@router.get("/", summary="List places matching the accessibility filters")
async def list_places(
    ramp: bool = Query(False),
    lift: bool = Query(False),
    toilet: bool = Query(False),
    parking: bool = Query(False),
    user_verified: bool = Query(False, alias="userVerified"),
    search_query: str = Query("", alias="searchQuery"),
    store: InMemoryPlaceStore = Depends(get_store),
):
    spec = FilterSpec(
        ramp=ramp,
        lift=lift,
        toilet=toilet,
        parking=parking,
        user_verified=user_verified,
        search_query=search_query,
    )
    places = filter_places(store.list_places(), spec)
    logger.info(f"Listing {len(places)} places for filters {spec.model_dump()}")
    items: List[dict] = [serialize_place(place) for place in places]
    return {"items": items, "count": len(items)}


@router.get("/{place_id}", summary="Get place details")
async def get_place(place_id: str, store: InMemoryPlaceStore = Depends(get_store)):
    place = _get_place_or_404(store, place_id)
    return serialize_place(place, include_reports=True)


@router.get("/{place_id}/reports", summary="List reports for a place")
async def list_reports_for_place(
    place_id: str,
    limit: int = Query(50, ge=1, le=100),
    store: InMemoryPlaceStore = Depends(get_store),
):
    place = _get_place_or_404(store, place_id)
    # Later submissions win ties on created_date
    ordered = sorted(
        enumerate(place.reports), key=lambda pair: (pair[1].created_date, pair[0]), reverse=True
    )
    items = [report.model_dump(mode="json") for _, report in ordered[:limit]]
    return {"items": items, "count": len(items)}
