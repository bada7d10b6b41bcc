"""Document service for listing and deleting converted documents."""
import logging
from typing import List

from api.models.job import Job
from api.services.artifacts import ArtifactStorage
from database.repositories.base import JobStore
from shared.errors import NotFoundError

logger = logging.getLogger(__name__)


class DocumentService:
    """Completed jobs as seen by the documents listing."""

    def __init__(self, store: JobStore, artifacts: ArtifactStorage):
        self.store = store
        self.artifacts = artifacts

    async def list_recent(self, limit: int = 10) -> List[Job]:
        """Most recently created completed jobs."""
        return await self.store.list_recent_completed(limit)

    async def delete(self, job_id: str):
        """
        Delete a job and its artifact file.

        Raises NotFoundError, without touching anything, if the job is unknown.
        """
        job = await self.store.get(job_id)
        if job is None:
            raise NotFoundError(f"Document {job_id} not found")

        if job.filename:
            self.artifacts.delete(job.filename)

        if not await self.store.delete(job_id):
            raise NotFoundError(f"Document {job_id} not found")
        logger.info(f"Deleted document {job_id}")
