"""Document routes: listing, download and deletion."""
from typing import List
from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from api.dependencies import get_artifacts, get_documents, get_settings
from api.models.job import Job
from api.schemas.responses import DeleteResponse
from api.services.artifacts import ArtifactStorage
from api.services.documents import DocumentService
from shared.config import Settings
from shared.errors import NotFoundError


router = APIRouter(prefix="/api", tags=["documents"])


@router.get("/download/{filename}")
async def download_document(
    filename: str,
    artifacts: ArtifactStorage = Depends(get_artifacts)
):
    """Download a generated document. The file is removed shortly afterwards."""
    try:
        path = artifacts.resolve(filename)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found"
        )

    return FileResponse(
        path,
        filename=filename,
        background=BackgroundTask(artifacts.schedule_deletion, filename)
    )


@router.get("/documents", response_model=List[Job])
async def list_documents(
    documents: DocumentService = Depends(get_documents),
    app_settings: Settings = Depends(get_settings)
):
    """List recently completed documents."""
    return await documents.list_recent(app_settings.recent_documents_limit)


@router.delete("/documents/{job_id}", response_model=DeleteResponse)
async def delete_document(
    job_id: str,
    documents: DocumentService = Depends(get_documents)
):
    """Delete a document and its generated file."""
    try:
        await documents.delete(job_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )

    return DeleteResponse(success=True)
