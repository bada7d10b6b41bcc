# Routes module
from .scrape import router as scrape_router
from .documents import router as documents_router

__all__ = ["scrape_router", "documents_router"]
