"""Scraper package — headless-browser HLS manifest extraction."""

from m3u8_extractor.scraper.errors import ExtractionError
from m3u8_extractor.scraper.extractor import extract_m3u8, extract_m3u8_sync
from m3u8_extractor.scraper.links import filter_manifest_links, is_manifest_url
from m3u8_extractor.scraper.models import ExtractionResult, ManifestLinkSet

__all__ = [
    "extract_m3u8",
    "extract_m3u8_sync",
    "filter_manifest_links",
    "is_manifest_url",
    "ExtractionError",
    "ExtractionResult",
    "ManifestLinkSet",
]
