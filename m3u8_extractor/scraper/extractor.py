"""Extraction pipeline: render a page and collect its HLS manifest URLs.

Stages run strictly in order against one browser session:

    launch -> attach observer -> navigate -> settle -> scan -> merge/filter

The session is closed on every exit path by :func:`open_session`.
"""

from __future__ import annotations

import asyncio
import logging

from playwright.async_api import Error as PlaywrightError

from m3u8_extractor.config import settings
from m3u8_extractor.scraper.errors import ExtractionError
from m3u8_extractor.scraper.links import filter_manifest_links
from m3u8_extractor.scraper.models import (
    ExtractionRequest,
    ExtractionResult,
    ManifestLinkSet,
)
from m3u8_extractor.scraper.observer import TrafficObserver
from m3u8_extractor.scraper.scanner import scan_page
from m3u8_extractor.scraper.session import open_session

logger = logging.getLogger(__name__)


async def extract_m3u8(url: str) -> ExtractionResult:
    """Render *url* and return every manifest URL discovered on it.

    An empty result is not an error; ``result.found`` is ``False``.

    Raises:
        ExtractionError: If the browser cannot be launched, the page fails to
            load within ``settings.navigation_timeout`` or the in-page scan
            throws.
    """
    request = ExtractionRequest(url=url)
    links = ManifestLinkSet()
    observer = TrafficObserver(links)

    async with open_session() as page:
        await observer.attach(page)

        logger.info("Navigating to %s", request.url)
        try:
            await page.goto(
                request.url,
                wait_until=settings.wait_until,
                timeout=settings.navigation_timeout_ms,
            )
        except PlaywrightError as exc:
            raise ExtractionError("navigation", f"Navigation failed: {exc}") from exc

        logger.info("Waiting %.1fs for dynamic content", settings.settle_delay)
        await asyncio.sleep(settings.settle_delay)

        logger.info("Searching for M3U8 in page content")
        try:
            candidates = await scan_page(page)
        except PlaywrightError as exc:
            raise ExtractionError("evaluation", f"Page evaluation failed: {exc}") from exc

    links.update(candidates)
    logger.info("Total M3U8 candidates found: %d", len(links))

    return ExtractionResult(url=request.url, links=tuple(filter_manifest_links(links)))


def extract_m3u8_sync(url: str) -> ExtractionResult:
    """Blocking wrapper around :func:`extract_m3u8` for the CLI."""
    return asyncio.run(extract_m3u8(url))
