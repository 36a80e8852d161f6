"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import get_settings
from app.routers import (
    health_router,
    scores_router,
    sessions_router,
    reports_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {'DEBUG' if settings.debug else 'PRODUCTION'}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## Visibility Assessment API

        Scores a business's online marketing visibility from a short quiz
        and an optional automated website audit.

        ### Features:
        - Weighted form score from categorical quiz answers
        - Confidence-weighted blend with the website audit score
        - Tier classification (critical / medium / good / excellent)
        - Channel-based recommendations
        - Per-user score sessions
        - Rate-limited email report delivery
        """,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(scores_router)
    app.include_router(sessions_router)
    app.include_router(reports_router)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        content = {"detail": "Internal server error"}
        if settings.debug:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
