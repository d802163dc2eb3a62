"""FastAPI application factory.

Lifespan
--------
On startup the app installs a single rendering-surface slot (shared across
all requests via ``request.app.state.surface_slot``) and a job lock that
keeps PDF jobs strictly one at a time.  On shutdown any surface still alive
is closed.

Routers
-------
    /links  — fetch a page and classify its links
    /pdf    — capture pages and return the assembled PDF
"""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.routers import links as links_router
from backend.api.routers import pdf as pdf_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Install the surface slot on startup and shut it down on exit."""
    if getattr(app.state, "surface_slot", None) is None:
        from backend.capture.playwright_driver import make_surface_slot  # noqa: PLC0415

        app.state.surface_slot = make_surface_slot()
    app.state.job_lock = threading.Lock()
    try:
        yield
    finally:
        app.state.surface_slot.shutdown()


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Page Binder API",
        description=(
            "Discover and group the links on a web page, then capture any "
            "selection of pages as full-height screenshots bound into a "
            "single PDF."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Capture-Failures"],
    )

    @app.get("/health", tags=["meta"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(links_router.router, prefix="/links", tags=["links"])
    app.include_router(pdf_router.router, prefix="/pdf", tags=["pdf"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn backend.api.app:app --reload
app = create_app()
