"""FastAPI application for the swap planner.

The planner is wired at startup from the environment (see
``load_planner_from_env``). Hosts embedding the app can instead call
``configure_planner`` before serving. Rate limiting belongs to the reverse
proxy, not this process.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from planner import __version__
from planner.api.endpoints import configure_planner, load_planner_from_env, router

logger = structlog.get_logger()

HOST = os.environ.get("PLANNER_HOST", "0.0.0.0")
PORT = int(os.environ.get("PLANNER_PORT", "8000"))
DEBUG = os.environ.get("PLANNER_DEBUG", "false").lower() in ("true", "1", "yes")

# Swap requests are a handful of fields
MAX_REQUEST_SIZE = 64 * 1024


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    planner = load_planner_from_env()
    if planner is not None:
        configure_planner(planner)
    else:
        logger.warning(
            "planner_not_configured",
            hint="set PLANNER_CODEC and PLANNER_QUOTER to module:Name paths",
        )
    yield


app = FastAPI(
    title="Fusion Swap Planner",
    description="Plans swaps against Fusion concentrated-liquidity pools",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Serve the API with uvicorn.

    PLANNER_HOST, PLANNER_PORT and PLANNER_DEBUG (auto-reload) pick the bind
    address and mode. Planner wiring is read from the environment at startup.
    """
    uvicorn.run("planner.api.main:app", host=HOST, port=PORT, reload=DEBUG)


if __name__ == "__main__":
    run()
