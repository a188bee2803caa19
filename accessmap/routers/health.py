from fastapi import APIRouter, Request

router = APIRouter()


@router.get("", summary="Liveness check")
async def health(request: Request):
    store = getattr(request.app.state, "store", None)
    return {"status": "ok", "store_connected": store is not None}
