"""Headless Chromium session setup and teardown."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from m3u8_extractor.config import settings
from m3u8_extractor.scraper.errors import ExtractionError

logger = logging.getLogger(__name__)

# The target page is untrusted content rendered only for passive inspection,
# so same-origin checks, the sandbox and the GPU are switched off.
BROWSER_ARGS = [
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]

_VIEWPORT = {"width": 1280, "height": 720}


def launch_options() -> dict[str, Any]:
    """Return the keyword arguments passed to ``chromium.launch``."""
    options: dict[str, Any] = {
        "headless": settings.headless,
        "args": [*BROWSER_ARGS, *settings.extra_browser_args],
    }
    if settings.chromium_executable_path:
        options["executable_path"] = settings.chromium_executable_path
    return options


@asynccontextmanager
async def open_session() -> AsyncIterator[Page]:
    """Launch an isolated browser and yield a fresh page.

    The browser is closed on every exit path, including when the caller's
    block raises.

    Raises:
        ExtractionError: If Chromium cannot be launched.
    """
    async with async_playwright() as pw:
        logger.info("Launching browser")
        try:
            browser = await pw.chromium.launch(**launch_options())
        except PlaywrightError as exc:
            raise ExtractionError("launch", f"Browser launch failed: {exc}") from exc

        try:
            context = await browser.new_context(
                user_agent=settings.user_agent,
                ignore_https_errors=True,
                viewport=_VIEWPORT,
            )
            page = await context.new_page()
            yield page
        finally:
            logger.info("Closing browser")
            await browser.close()
