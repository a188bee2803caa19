import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import accessmap.store
from accessmap.config import settings
from accessmap.routers import health, places, reports

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_title, version="0.1.0")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them."""
    print(f"[GLOBAL ERROR] Unhandled exception: {type(exc).__name__}: {exc}", flush=True)
    print(f"[GLOBAL ERROR] Path: {request.url.path}", flush=True)
    logger.error(f"Unhandled exception on {request.url.path}:\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": f"Internal server error: {str(exc)}",
            "type": type(exc).__name__,
        },
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.on_event("startup")
async def on_startup():
    app.state.store = await accessmap.store.connect()


@app.on_event("shutdown")
async def on_shutdown():
    await accessmap.store.close()
    app.state.store = None


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(places.router, prefix="/places", tags=["places"])
app.include_router(reports.router, prefix="/reports", tags=["reports"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("accessmap.main:app", host="0.0.0.0", port=8000, reload=False)
