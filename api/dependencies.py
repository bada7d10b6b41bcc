"""FastAPI dependencies resolving the per-application instances."""
from fastapi import Request

from api.services.artifacts import ArtifactStorage
from api.services.documents import DocumentService
from converter.pipeline import JobPipeline
from database.repositories.base import JobStore
from shared.config import Settings


def get_job_store(request: Request) -> JobStore:
    """Dependency for getting the job store."""
    return request.app.state.job_store


def get_pipeline(request: Request) -> JobPipeline:
    """Dependency for getting the job pipeline."""
    return request.app.state.pipeline


def get_artifacts(request: Request) -> ArtifactStorage:
    """Dependency for getting artifact storage."""
    return request.app.state.artifacts


def get_documents(request: Request) -> DocumentService:
    """Dependency for getting the document service."""
    return request.app.state.documents


def get_settings(request: Request) -> Settings:
    """Dependency for getting application settings."""
    return request.app.state.settings
