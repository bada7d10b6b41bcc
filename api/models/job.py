"""Job model definitions."""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    """Job status enumeration."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class OutputFormat(str, Enum):
    """Supported document formats."""
    PDF = "pdf"
    DOCX = "docx"


class Job(BaseModel):
    """A single scrape-and-convert request and its lifecycle state."""
    id: str
    url: str
    format: OutputFormat
    status: JobStatus = JobStatus.PENDING
    progress: int = Field(default=0, ge=0, le=100)
    title: Optional[str] = None
    filename: Optional[str] = None
    file_size: Optional[int] = None
    pages: Optional[int] = None
    error: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None


# Fields the store never lets a partial update touch
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})
