"""In-memory job store, the default backend."""
import asyncio
from typing import Any, Dict, List, Optional

from api.models.job import Job, JobStatus, OutputFormat
from database.repositories.base import check_update_fields
from shared.utils import generate_job_id, get_utc_now


class InMemoryJobStore:
    """Job store backed by a dict. Lives as long as the process."""

    def __init__(self):
        self._jobs: Dict[str, Job] = {}
        self._lock = asyncio.Lock()

    async def create(self, url: str, output_format: OutputFormat) -> Job:
        """Create a new pending job record."""
        job = Job(
            id=generate_job_id(),
            url=url,
            format=output_format,
            status=JobStatus.PENDING,
            progress=0,
            created_at=get_utc_now()
        )
        async with self._lock:
            while job.id in self._jobs:
                job = job.model_copy(update={"id": generate_job_id()})
            self._jobs[job.id] = job
        return job.model_copy()

    async def get(self, job_id: str) -> Optional[Job]:
        """Get a job by ID."""
        job = self._jobs.get(job_id)
        return job.model_copy() if job else None

    async def update(self, job_id: str, fields: Dict[str, Any]) -> Optional[Job]:
        """Merge ``fields`` into the job and return the updated record."""
        check_update_fields(fields)
        async with self._lock:
            existing = self._jobs.get(job_id)
            if existing is None:
                return None
            updated = Job.model_validate({**existing.model_dump(), **fields})
            self._jobs[job_id] = updated
        return updated.model_copy()

    async def list_recent_completed(self, limit: int = 10) -> List[Job]:
        """Completed jobs, newest first."""
        completed = [job for job in self._jobs.values() if job.status == JobStatus.COMPLETED]
        # Stable ascending sort then reverse: equal timestamps come out newest-inserted first
        completed.sort(key=lambda job: job.created_at)
        completed.reverse()
        return [job.model_copy() for job in completed[:max(limit, 0)]]

    async def delete(self, job_id: str) -> bool:
        """Delete a job. Returns False if it did not exist."""
        async with self._lock:
            return self._jobs.pop(job_id, None) is not None
