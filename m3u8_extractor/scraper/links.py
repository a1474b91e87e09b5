"""Manifest URL harvesting and validation.

Two separate stages live here:

* :func:`find_manifest_urls` is permissive: a textual pattern match over any
  blob of text, used to harvest candidates.
* :func:`is_manifest_url` / :func:`filter_manifest_links` are strict: each
  candidate must parse as an absolute URL whose *path* carries the manifest
  marker.

A URL captured because of its content type alone can therefore still be
dropped by the strict stage.
"""

from __future__ import annotations

import re
from typing import Iterable, List
from urllib.parse import urlsplit

MANIFEST_MARKER = ".m3u8"

# Content types that identify an HLS playlist response.
MANIFEST_CONTENT_TYPES = (
    "application/vnd.apple.mpegurl",
    "application/x-mpegurl",
)

# Absolute http(s) URL ending in .m3u8 with an optional query string.  Quotes,
# angle brackets, braces, brackets, parentheses and whitespace end a URL.
MANIFEST_URL_PATTERN = re.compile(
    r"https?://[^\s\"'<>(){}\[\]]+\.m3u8(?:\?[^\s\"'<>(){}\[\]]*)?",
    re.IGNORECASE,
)


def has_manifest_marker(value: str) -> bool:
    return MANIFEST_MARKER in value


def is_manifest_content_type(content_type: str) -> bool:
    """Return ``True`` if *content_type* declares an HLS playlist."""
    lowered = content_type.lower()
    return any(token in lowered for token in MANIFEST_CONTENT_TYPES)


def find_manifest_urls(text: str) -> List[str]:
    """Return every manifest-looking URL in *text*, in order of appearance."""
    if not text:
        return []
    return MANIFEST_URL_PATTERN.findall(text)


def is_manifest_url(link: str) -> bool:
    """Return ``True`` if *link* is an absolute URL with ``.m3u8`` in its path.

    The query string and fragment are not consulted.
    """
    try:
        parts = urlsplit(link)
    except ValueError:
        return False
    if not parts.scheme or not parts.netloc:
        return False
    return MANIFEST_MARKER in parts.path


def filter_manifest_links(links: Iterable[str]) -> List[str]:
    """Keep the entries of *links* accepted by :func:`is_manifest_url`.

    Order is preserved and the function is idempotent.
    """
    return [link for link in links if is_manifest_url(link)]
