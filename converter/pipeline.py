"""Job pipeline: drives a scrape-and-convert job from pending to a terminal state."""
import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Set

from pydantic import ValidationError

from api.models.job import Job, JobStatus
from api.schemas.requests import ScrapeRequest
from converter.fetcher import PageFetcher
from converter.renderer import get_renderer
from database.repositories.base import JobStore
from shared.errors import JobValidationError, NotFoundError
from shared.utils import get_utc_now

logger = logging.getLogger(__name__)


class JobPipeline:
    """
    Accepts submissions and runs each job as its own background task.

    Progress is reported only through the job store:

        pending(0) -> processing(10) -> fetch(30) -> fetched(60)
                   -> render(80) -> completed(100)

    Any stage failure moves the job to ``failed`` with the error message and
    leaves its progress where it was. There is no retry.
    """

    def __init__(self, store: JobStore, fetcher: PageFetcher, output_dir: Path):
        self.store = store
        self.fetcher = fetcher
        self.output_dir = Path(output_dir)
        self._tasks: Set[asyncio.Task] = set()

    async def submit(self, url: str, output_format: str) -> Job:
        """
        Validate and create a job, then start processing it in the background.

        Returns the pending job immediately. Raises JobValidationError before
        anything is stored if the URL or format is invalid.
        """
        try:
            request = ScrapeRequest(url=url, format=output_format)
        except ValidationError as e:
            messages = "; ".join(error["msg"] for error in e.errors())
            raise JobValidationError(messages) from e

        job = await self.store.create(request.url, request.format)
        logger.info(f"Job {job.id} created for {job.url} ({job.format.value})")

        task = asyncio.create_task(self.run(job.id), name=f"job-{job.id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return job

    @property
    def active_jobs(self) -> int:
        return len(self._tasks)

    async def drain(self):
        """Wait for every in-flight job to reach a terminal state."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def run(self, job_id: str):
        """Execute the pipeline once for a pending job."""
        job = await self.store.get(job_id)
        if job is None:
            logger.warning(f"Job {job_id} not found, nothing to run")
            return
        if job.status != JobStatus.PENDING:
            logger.warning(f"Job {job_id} is {job.status.value}, not starting it again")
            return

        try:
            await self._advance(job_id, status=JobStatus.PROCESSING, progress=10)

            await self._advance(job_id, progress=30)
            content = await self.fetcher.fetch_and_extract(job.url)
            await self._advance(job_id, title=content.title, progress=60)

            await self._advance(job_id, progress=80)
            renderer = get_renderer(job.format, self.output_dir)
            artifact = await asyncio.to_thread(renderer.render, content.title, content.text, job.url)

            await self._advance(
                job_id,
                status=JobStatus.COMPLETED,
                progress=100,
                filename=artifact.filename,
                pages=artifact.pages,
                file_size=artifact.file_size,
                completed_at=get_utc_now()
            )
            logger.info(f"Job {job_id} completed: {artifact.filename}")
        except Exception as e:
            await self._fail(job_id, e)

    async def _advance(self, job_id: str, **fields: Any) -> Job:
        job = await self.store.update(job_id, fields)
        if job is None:
            raise NotFoundError(f"Job {job_id} no longer exists")
        logger.info(f"Job {job_id}: {job.status.value} {job.progress}%")
        return job

    async def _fail(self, job_id: str, error: Exception):
        message = str(error) or error.__class__.__name__
        logger.error(f"Job {job_id} failed: {message}")
        fields: Dict[str, Any] = {"status": JobStatus.FAILED, "error": message}
        try:
            if await self.store.update(job_id, fields) is None:
                logger.warning(f"Job {job_id} was deleted before its failure could be recorded")
        except Exception:
            logger.exception(f"Could not record failure for job {job_id}")
