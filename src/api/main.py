"""FastAPI application entry point."""

import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.models.responses import ErrorCodes, ErrorResponse
from api.routes import calendar_router, health_router
from core import config
from core.database import get_connection, init_schema


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: make sure the settings and request log tables exist
    config.DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection()
    try:
        init_schema(conn)
    finally:
        conn.close()

    if not config.ARTISAN_API_KEY:
        warnings.warn("ARTISAN_API_KEY is not set; calendar endpoints will refuse requests")

    yield


app = FastAPI(
    title="Artisan Calendar API",
    description="REST API rendering the intervention calendar (month/week grids, rescheduling, exports)",
    version=config.API_VERSION,
    debug=config.API_DEBUG,
    lifespan=lifespan,
)

# CORS middleware (for development)
if config.API_DEBUG:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with standard error format."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            code=ErrorCodes.INTERNAL_ERROR,
            details=[],
        ).model_dump(),
    )


# Include routers
app.include_router(health_router)
app.include_router(calendar_router)


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.API_DEBUG,
    )
