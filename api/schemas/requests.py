"""Request schemas for API endpoints."""
from pydantic import BaseModel, Field, field_validator

from api.models.job import OutputFormat
from shared.utils import validate_url


class ScrapeRequest(BaseModel):
    """Input schema for a scrape-and-convert submission."""
    url: str = Field(..., description="Absolute http(s) URL of the page to convert")
    format: OutputFormat = Field(..., description="Output document format (pdf or docx)")

    @field_validator('url')
    @classmethod
    def check_url(cls, v: str) -> str:
        """Validate URL format."""
        v = v.strip()
        if not validate_url(v):
            raise ValueError('Please enter a valid URL')
        return v
