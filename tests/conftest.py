"""Pytest configuration and fixtures."""
import asyncio
import pytest
from datetime import datetime, timezone
from typing import List, Optional
from unittest.mock import MagicMock, AsyncMock

from converter.extractor import ExtractedContent
from converter.pipeline import JobPipeline
from database.repositories.memory_repo import InMemoryJobStore


class FakeFetcher:
    """Stands in for the headless browser fetcher."""

    def __init__(self):
        self.content = ExtractedContent(
            title="Example Page",
            text="Introduction\n\nThis is the body of the example page. It has sentences."
        )
        self.error: Optional[Exception] = None
        self.delay = 0.0
        self.calls: List[str] = []

    async def fetch_and_extract(self, url: str) -> ExtractedContent:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.content


@pytest.fixture
def fake_fetcher():
    """Fetcher returning canned content."""
    return FakeFetcher()


@pytest.fixture
def job_store():
    """Empty in-memory job store."""
    return InMemoryJobStore()


@pytest.fixture
def output_dir(tmp_path):
    """Directory receiving rendered documents."""
    return tmp_path / "downloads"


@pytest.fixture
def pipeline(job_store, fake_fetcher, output_dir):
    """Pipeline wired to the in-memory store and fake fetcher."""
    return JobPipeline(job_store, fake_fetcher, output_dir)


@pytest.fixture
def mock_mongo_db():
    """Create mock MongoDB database."""
    db = MagicMock()

    db.jobs = MagicMock()
    db.jobs.find_one = AsyncMock()
    db.jobs.insert_one = AsyncMock()
    db.jobs.find_one_and_update = AsyncMock()
    db.jobs.delete_one = AsyncMock()
    db.jobs.find = MagicMock()

    return db


@pytest.fixture
def sample_job_document():
    """Job as stored in MongoDB."""
    return {
        "_id": "job_test123",
        "url": "https://example.com/article",
        "format": "pdf",
        "status": "completed",
        "progress": 100,
        "title": "Test Article Title",
        "filename": "Test_Article_Title.pdf",
        "file_size": 2048,
        "pages": 1,
        "error": None,
        "created_at": datetime(2024, 2, 4, 10, 30, tzinfo=timezone.utc),
        "completed_at": datetime(2024, 2, 4, 10, 31, tzinfo=timezone.utc)
    }


@pytest.fixture
def sample_html():
    """Rendered page with noise around the main content."""
    return """
    <!DOCTYPE html>
    <html>
        <head>
            <title>Sample Page</title>
            <style>body { color: red; }</style>
        </head>
        <body>
            <header><h1>Site Banner</h1></header>
            <nav><a href="/">Home</a><a href="/about">About</a></nav>
            <div class="cookie-banner">We use cookies</div>
            <main>
                <h1>Main Heading</h1>
                <p>First paragraph of the article.</p>
                <script>var secret = "password123";</script>
                <ul>
                    <li>Point one</li>
                    <li>Point two</li>
                </ul>
                <div class="advertisement">Buy now</div>
                <h2>Details</h2>
                <p>Second   paragraph
                   spread over lines.</p>
            </main>
            <footer>Copyright notice</footer>
        </body>
    </html>
    """
