"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from m3u8_extractor.api import app

    uvicorn m3u8_extractor.api:app --reload
"""

from m3u8_extractor.api.app import app

__all__ = ["app"]
