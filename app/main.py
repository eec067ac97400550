"""
app/main.py

Purpose: Application entry point

- Builds the FastAPI app from explicit settings
- Loads configuration and logging
- Registers API routes (accounts, addresses, contact)
- Manages application lifecycle (startup/shutdown)
- Serves the single-page frontend for every other GET path
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, FileResponse

from app.api import auth, addresses, contacts
from app.core.config import Settings, get_settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.exceptions import ResourceNotFoundError
from app.core.logging import setup_logging, get_logger
from app.core.tokens import TokenService
from app.db.indexes import create_indexes
from app.db.mongo import MongoDatabase
from app.db.repositories import Repositories

logger = get_logger(__name__)

SLOW_REQUEST_SECONDS = 5.0


def create_app(settings: Optional[Settings] = None, repositories: Optional[Repositories] = None) -> FastAPI:
    """
    Creates the application.

    Args:
        settings: Configuration, read from the environment when omitted
        repositories: Pre-built repositories; when given, no MongoDB
            connection is opened

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.
        Handles startup and shutdown events.
        """
        logger.info("🚀 Starting application...")
        database = None

        try:
            # A missing signing secret stops startup here
            validate_settings(settings)
            logger.info("✅ Configuration validated")

            app.state.token_service = TokenService.from_settings(settings)

            if repositories is None:
                database = MongoDatabase(settings)
                await database.connect()
                await create_indexes(database)
                app.state.repositories = Repositories.from_database(database)
            else:
                app.state.repositories = repositories
            app.state.database = database

            logger.info("🎉 Application started successfully!")
            logger.info(f"Environment: {settings.ENVIRONMENT}")

        except Exception as e:
            logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
            raise

        yield

        logger.info("🛑 Shutting down application...")
        if database is not None:
            await database.close()
        logger.info("👋 Application shut down successfully")

    setup_logging(settings)

    app = FastAPI(
        title="Address Book API",
        description="Accounts, postal addresses and contact messages",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.DEBUG,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > SLOW_REQUEST_SECONDS:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    add_exception_handlers(app, is_production=settings.is_production)

    prefix = settings.API_PREFIX
    app.include_router(auth.router, prefix=prefix, tags=["Accounts"])
    app.include_router(auth.account_router, prefix=prefix, tags=["Accounts"])
    app.include_router(addresses.router, prefix=f"{prefix}/addresses", tags=["Addresses"])
    app.include_router(contacts.router, prefix=f"{prefix}/contact", tags=["Contact"])

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """
        Health check endpoint.
        Reports database connectivity.
        """
        health_status = {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": settings.ENVIRONMENT,
            "checks": {}
        }

        database: Optional[MongoDatabase] = getattr(request.app.state, "database", None)
        if database is None:
            health_status["checks"]["database"] = "not_configured"
        elif await database.check_health():
            health_status["checks"]["database"] = "healthy"
        else:
            health_status["checks"]["database"] = "unhealthy"
            health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    @app.get("/live", tags=["Health"])
    async def liveness_check():
        """
        Liveness check: the process is up and serving.
        """
        return {"status": "alive"}

    static_root = Path(settings.STATIC_DIR).resolve()

    # Registered last so it only sees paths no route above claimed
    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        """Serves the frontend build, falling back to index.html."""
        candidate = (static_root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(static_root):
            return FileResponse(candidate)

        index = static_root / "index.html"
        if index.is_file():
            return FileResponse(index)

        raise ResourceNotFoundError("Not Found")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.HOST,
        port=_settings.PORT,
        reload=_settings.is_development,
        log_level=_settings.LOG_LEVEL.lower()
    )
