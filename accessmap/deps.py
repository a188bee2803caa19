from fastapi import HTTPException, Request

from accessmap.store import InMemoryPlaceStore


def get_store(request: Request) -> InMemoryPlaceStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Place store not connected")
    return store
