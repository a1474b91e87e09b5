"""Network traffic observer: captures manifest URLs seen on the wire."""

from __future__ import annotations

import logging

from playwright.async_api import Page, Request, Response, Route

from m3u8_extractor.config import settings
from m3u8_extractor.scraper.links import has_manifest_marker, is_manifest_content_type
from m3u8_extractor.scraper.models import ManifestLinkSet

logger = logging.getLogger(__name__)


class TrafficObserver:
    """Record manifest requests/responses and block heavy static resources.

    Matches are added to *links*, which the caller owns for the lifetime of
    a single extraction.
    """

    def __init__(self, links: ManifestLinkSet) -> None:
        self.links = links

    async def attach(self, page: Page) -> None:
        """Install the interception route and response hook on *page*."""
        await page.route("**/*", self.handle_route)
        page.on("response", self.handle_response)

    def observe_request(self, request: Request) -> None:
        url = request.url
        if has_manifest_marker(url) and self.links.add(url):
            logger.debug("Found M3U8 in request: %s", url)

    def should_block(self, request: Request) -> bool:
        return request.resource_type in settings.blocked_resource_types

    async def handle_route(self, route: Route) -> None:
        request = route.request
        self.observe_request(request)
        if self.should_block(request):
            await route.abort()
        else:
            await route.continue_()

    def handle_response(self, response: Response) -> None:
        url = response.url
        content_type = response.headers.get("content-type", "")
        if has_manifest_marker(url) or is_manifest_content_type(content_type):
            if self.links.add(url):
                logger.debug("Found M3U8 in response: %s", url)
