"""Response schemas for API endpoints."""
from pydantic import BaseModel, Field


class DeleteResponse(BaseModel):
    """Response schema for document deletion."""
    success: bool = Field(..., description="Whether the document was deleted")


class HealthResponse(BaseModel):
    """Schema for the health check."""
    status: str = Field(default="healthy")
