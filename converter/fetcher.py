"""Headless browser fetch of rendered page content."""
import asyncio
import logging
from typing import List, Optional
from playwright.async_api import (
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from converter.extractor import ExtractedContent, extract_content
from shared.config import settings
from shared.errors import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Loads a page in headless Chromium and extracts its readable content."""

    def __init__(
        self,
        timeout: Optional[int] = None,
        user_agent: Optional[str] = None,
        launch_args: Optional[List[str]] = None
    ):
        self.timeout = timeout or settings.scrape_timeout
        self.user_agent = user_agent or settings.user_agent
        self.launch_args = launch_args if launch_args is not None else list(settings.browser_args)

    async def fetch_and_extract(self, url: str) -> ExtractedContent:
        """
        Fetch the rendered DOM of ``url`` and extract title and text.

        Raises FetchError on navigation failure, timeout or extraction error.
        """
        html = await self.fetch_html(url)
        try:
            content = await asyncio.to_thread(extract_content, html)
        except Exception as e:
            raise FetchError(f"Content extraction failed: {e}") from e

        logger.info(f"Extracted {len(content.text)} characters from {url}")
        return content

    async def fetch_html(self, url: str) -> str:
        """Return the page HTML once network activity has settled."""
        logger.info(f"Navigating to {url}")
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=True,
                    args=self.launch_args
                )
                try:
                    context = await browser.new_context(user_agent=self.user_agent)
                    page = await context.new_page()
                    page.set_default_timeout(self.timeout * 1000)
                    await page.goto(url, wait_until="networkidle")
                    html = await page.content()
                finally:
                    await browser.close()
        except PlaywrightTimeoutError as e:
            raise FetchError(f"Timeout after {self.timeout} seconds loading {url}") from e
        except PlaywrightError as e:
            raise FetchError(f"Failed to load {url}: {e.message}") from e

        logger.info(f"Page loaded: {url}")
        return html
