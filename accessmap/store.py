import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from accessmap.config import settings
from accessmap.models import Place, Report

logger = logging.getLogger(__name__)


class InMemoryPlaceStore:
    """
    In-process stand-in for the place store.

    Keeps places in insertion order. `save` replaces the place and records the
    report under one lock so readers never see a half-applied submission.
    """

    def __init__(self, places: Optional[List[Place]] = None):
        self._lock = threading.Lock()
        self._places: Dict[str, Place] = {}
        for place in places or []:
            self._places[place.id] = place

    def list_places(self) -> List[Place]:
        with self._lock:
            return list(self._places.values())

    def get(self, place_id: str) -> Optional[Place]:
        with self._lock:
            return self._places.get(place_id)

    def save(self, place: Place, report: Report) -> None:
        if report.place_id != place.id:
            raise ValueError(f"Report belongs to {report.place_id}, not {place.id}")
        with self._lock:
            self._places[place.id] = place
        logger.info(f"Saved place {place.id} with report count {place.report_count}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._places)


def load_places(path: Union[str, Path]) -> List[Place]:
    """Read the seed file: a JSON list of place objects."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Seed file {path} not found, starting with no places")
        return []
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    return [Place.model_validate(item) for item in raw]


# 전역 스토어 핸들
store: Optional[InMemoryPlaceStore] = None


async def connect(*args, **kwargs):
    """Load the seed data and publish the store handle."""
    global store
    places = load_places(settings.places_seed_path)
    store = InMemoryPlaceStore(places)
    print(f"✅ Place store ready with {len(store)} places", flush=True)
    return store


async def close():
    global store
    if store is not None:
        store = None
        print("🛑 Place store closed", flush=True)
