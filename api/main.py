"""Main FastAPI application."""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import scrape_router, documents_router
from api.schemas.responses import HealthResponse
from api.services.artifacts import ArtifactStorage
from api.services.documents import DocumentService
from converter.fetcher import PageFetcher
from converter.pipeline import JobPipeline
from database.connection import MongoConnection
from database.repositories import InMemoryJobStore, JobStore, MongoJobStore
from shared.config import Settings, settings
from shared.errors import JobValidationError, NotFoundError
from shared.utils import truncate

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

LOG_LINE_LIMIT = 80


def create_app(
    app_settings: Optional[Settings] = None,
    job_store: Optional[JobStore] = None,
    fetcher: Optional[PageFetcher] = None
) -> FastAPI:
    """Build the application with its own store, pipeline and artifact storage."""
    app_settings = app_settings or settings
    mongo: Optional[MongoConnection] = None

    if job_store is None:
        if app_settings.storage_backend == "mongo":
            mongo = MongoConnection(app_settings.mongo_url, app_settings.mongo_db_name)
            job_store = MongoJobStore(mongo.db)
        else:
            job_store = InMemoryJobStore()

    artifacts = ArtifactStorage(app_settings.downloads_dir, app_settings.download_cleanup_delay)
    pipeline = JobPipeline(
        job_store,
        fetcher or PageFetcher(
            timeout=app_settings.scrape_timeout,
            user_agent=app_settings.user_agent,
            launch_args=app_settings.browser_args
        ),
        artifacts.directory
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup
        artifacts.ensure_directory()
        if mongo:
            await mongo.setup_indexes()
        logger.info(f"Using {job_store.__class__.__name__}, artifacts in {artifacts.directory}")

        yield

        # Shutdown
        if pipeline.active_jobs:
            logger.info(f"Waiting for {pipeline.active_jobs} running job(s)")
        await pipeline.drain()
        await artifacts.close()
        if mongo:
            mongo.close()

    app = FastAPI(
        title="Web to Document Converter",
        description="Converts web pages into downloadable PDF and DOCX documents",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = app_settings
    app.state.job_store = job_store
    app.state.pipeline = pipeline
    app.state.artifacts = artifacts
    app.state.documents = DocumentService(job_store, artifacts)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        """Log one line per API request."""
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            duration = int((time.perf_counter() - start) * 1000)
            line = f"{request.method} {request.url.path} {response.status_code} in {duration}ms"
            logger.info(truncate(line, LOG_LINE_LIMIT))
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed submissions are client errors."""
        messages = "; ".join(error["msg"] for error in exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": messages}
        )

    @app.exception_handler(JobValidationError)
    async def job_validation_exception_handler(request: Request, exc: JobValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)}
        )

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)}
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)}
        )

    # Include routers
    app.include_router(scrape_router)
    app.include_router(documents_router)

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Web to Document Converter",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug
    )
