"""Scrape job routes for the REST API."""
from fastapi import APIRouter, HTTPException, Depends, status

from api.dependencies import get_job_store, get_pipeline
from api.models.job import Job
from api.schemas.requests import ScrapeRequest
from converter.pipeline import JobPipeline
from database.repositories.base import JobStore
from shared.errors import JobValidationError


router = APIRouter(prefix="/api/scrape", tags=["scrape"])


@router.post("", response_model=Job)
async def submit_scrape(
    request: ScrapeRequest,
    pipeline: JobPipeline = Depends(get_pipeline)
):
    """
    Submit a URL for conversion.

    - Validates URL and format
    - Creates a pending job record
    - Starts processing in the background
    - Returns the pending job for polling
    """
    try:
        return await pipeline.submit(request.url, request.format)
    except JobValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/{job_id}", response_model=Job)
async def get_scrape_job(
    job_id: str,
    store: JobStore = Depends(get_job_store)
):
    """Get the current state of a job."""
    job = await store.get(job_id)

    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found"
        )

    return job
