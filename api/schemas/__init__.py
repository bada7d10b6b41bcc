# Schemas module
from .requests import ScrapeRequest
from .responses import DeleteResponse, HealthResponse

__all__ = [
    "ScrapeRequest",
    "DeleteResponse",
    "HealthResponse"
]
