"""
NoteShelf Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn noteshelf.main:app) or the `noteshelf`
       console script, which binds settings.host:settings.port.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /api/notes   │ │ GET /health  │ │ GET /* page │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ NotFoundError→404 │ everything else→500      │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from noteshelf import __version__
from noteshelf.config import settings
from noteshelf.exceptions import NoteShelfError, NotFoundError
from noteshelf.middleware.logging import RequestLoggingMiddleware
from noteshelf.middleware.request_id import RequestIDMiddleware, request_id_var
from noteshelf.routes import health, notes, pages

logger = logging.getLogger(__name__)

NOTE_NOT_FOUND_MESSAGE = "Note not found."
GENERIC_FAILURE_MESSAGE = "Failed to process request."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # RequestLoggingMiddleware already writes one line per request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Create the notes directory (a failure here aborts startup)
        3. Log where notes and pages are served from
    Shutdown:
        Nothing to release; every request opens and closes its own files.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("NoteShelf Backend %s starting up...", __version__)

    notes_dir = Path(settings.notes_dir)
    notes_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Notes directory: %s", notes_dir.resolve())
    logger.info("Pages directory: %s", Path(settings.pages_dir).resolve())

    logger.info("Server running on http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("NoteShelf Backend shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        NotFoundError         → 404 {"message": "Note not found."}
        NoteShelfError (base) → 500 {"message": "Failed to process request."}
        Exception (fallback)  → 500 {"message": "Failed to process request."}

    The cause is logged server-side with the request ID; it never appears
    in the response body.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": NOTE_NOT_FOUND_MESSAGE})

    @app.exception_handler(NoteShelfError)
    async def handle_app_error(request: Request, exc: NoteShelfError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s",
            rid,
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content={"message": GENERIC_FAILURE_MESSAGE})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"message": GENERIC_FAILURE_MESSAGE})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="NoteShelf API",
        description="Create, list, fetch and update text notes stored as JSON files.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # pages last: its catch-all path would shadow everything after it
    app.include_router(notes.router)
    app.include_router(health.router)
    app.include_router(pages.router)

    return app


app = create_app()


def run() -> None:
    """Console-script entry point: serve the app on the configured port."""
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
