"""Main FastAPI application module.

This module initializes the FastAPI application, maps platform errors to
JSON responses and registers all route handlers.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wrench import __version__
from wrench.api.routes import admin, auth, learning
from wrench.config import API_HOST, API_PORT, CORS_ALLOWED_ORIGINS, ENVIRONMENT, LOG_LEVEL, PLATFORM_NAME
from wrench.core.exceptions import WrenchError
from wrench.core.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Setup logging
setup_logging(LOG_LEVEL, ENVIRONMENT)

# Initialize FastAPI application
app = FastAPI(
    title=f"{PLATFORM_NAME} API",
    description="Backend API for the multi-community training platform.",
    version=__version__,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route handlers
app.include_router(auth.router)
app.include_router(learning.router)
app.include_router(admin.router)


@app.exception_handler(WrenchError)
async def wrench_error_handler(request: Request, exc: WrenchError) -> JSONResponse:
    """Turn a platform error into ``{"error": kind, "detail": message}``."""
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.kind)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    logger.info("%s running at http://%s:%s", PLATFORM_NAME, API_HOST, API_PORT)
    uvicorn.run("wrench.app:app", host=API_HOST, port=API_PORT)


# --- Startup code for direct execution ---
if __name__ == "__main__":
    main()
