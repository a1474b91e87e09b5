"""Extraction endpoint.

Routes
------
GET     /extract?url=<page url>
POST    /extract            Body: {"url": "https://..."}

OPTIONS requests never reach this router; the app answers them.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, HttpUrl, TypeAdapter, ValidationError

from m3u8_extractor.scraper import extract_m3u8

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_URL_ERROR = "Missing url parameter. Usage: /extract?url=https://example.com"
INVALID_URL_ERROR = "Invalid URL provided"
NOT_FOUND_ERROR = "No M3U8 links found on the webpage"


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ExtractBody(BaseModel):
    url: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_HTTP_URL = TypeAdapter(HttpUrl)


def _is_valid_target(url: str) -> bool:
    """Return ``True`` if *url* parses as an absolute http(s) URL."""
    try:
        _HTTP_URL.validate_python(url)
    except ValidationError:
        return False
    return True


async def _extract(target_url: str | None) -> dict[str, Any]:
    if not target_url:
        raise HTTPException(status_code=400, detail=MISSING_URL_ERROR)
    if not _is_valid_target(target_url):
        raise HTTPException(status_code=400, detail=INVALID_URL_ERROR)

    logger.info("Extracting M3U8 from: %s", target_url)
    try:
        result = await extract_m3u8(target_url)
    except Exception as exc:
        logger.exception("Extraction failed for %s", target_url)
        raise HTTPException(
            status_code=500, detail=f"Internal server error: {exc}"
        ) from exc

    if not result.found:
        raise HTTPException(status_code=404, detail=NOT_FOUND_ERROR)
    return result.to_payload()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("")
async def extract_get(url: Optional[str] = None) -> dict[str, Any]:
    """Extract manifest URLs from the page given as the ``url`` query parameter."""
    return await _extract(url)


@router.post("")
async def extract_post(body: Optional[ExtractBody] = None) -> dict[str, Any]:
    """Extract manifest URLs from the page given in the JSON body's ``url`` field."""
    return await _extract(body.url if body is not None else None)

