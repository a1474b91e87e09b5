"""Content scanner: finds manifest URLs embedded in the rendered page.

Collection runs once inside the page (so live globals and the current DOM
are visible) and returns a :class:`PageSnapshot`; the four matching passes
then run in Python over that snapshot:

1. script text   : regex over every ``<script>`` element's text
2. player config : regex over known player globals, serialised in-page
3. attributes    : substring check on stream-carrying attributes
4. raw HTML      : regex over ``document.documentElement.innerHTML``
"""

from __future__ import annotations

import logging
from typing import List

from playwright.async_api import Page

from m3u8_extractor.scraper.links import (
    MANIFEST_MARKER,
    find_manifest_urls,
    has_manifest_marker,
)
from m3u8_extractor.scraper.models import ManifestLinkSet, PageSnapshot

logger = logging.getLogger(__name__)

# Globals commonly set by video players or page-level player configs.
PLAYER_GLOBALS = [
    "jwplayer",
    "videojs",
    "Hls",
    "hlsPlayer",
    "player",
    "videoPlayer",
    "streamPlayer",
    "mediaPlayer",
    "jwConfig",
]

STREAM_ATTRIBUTES = ["data-src", "data-url", "data-stream", "data-file", "src"]

# Each global is read and serialised under its own try/catch: a missing
# name, a function value, a cyclic object or a throwing getter only skips
# that one name.
COLLECT_SNAPSHOT_JS = """
({ playerGlobals, attributes, marker }) => {
  const snapshot = { scripts: [], globals: {}, attributes: [], html: '' };

  document.querySelectorAll('script').forEach((script) => {
    snapshot.scripts.push(script.textContent || script.innerText || '');
  });

  for (const name of playerGlobals) {
    try {
      const value = window[name];
      if (value) {
        const serialized = JSON.stringify(value);
        if (typeof serialized === 'string') {
          snapshot.globals[name] = serialized;
        }
      }
    } catch (e) {
      continue;
    }
  }

  document.querySelectorAll('*').forEach((el) => {
    for (const attr of attributes) {
      const value = el.getAttribute(attr);
      if (value && value.includes(marker)) {
        snapshot.attributes.push(value);
      }
    }
  });

  snapshot.html = document.documentElement ? document.documentElement.innerHTML : '';
  return snapshot;
}
"""


def _add_all(candidates: ManifestLinkSet, links: List[str], source: str) -> None:
    for link in links:
        if candidates.add(link):
            logger.debug("Found M3U8 in %s: %s", source, link)


def scan_scripts(snapshot: PageSnapshot) -> List[str]:
    found: List[str] = []
    for text in snapshot.scripts:
        found.extend(find_manifest_urls(text))
    return found


def scan_player_globals(snapshot: PageSnapshot) -> List[str]:
    found: List[str] = []
    for name in PLAYER_GLOBALS:
        serialized = snapshot.globals.get(name)
        if serialized:
            found.extend(find_manifest_urls(serialized))
    return found


def scan_attributes(snapshot: PageSnapshot) -> List[str]:
    """Attribute values are taken verbatim; only the marker is required."""
    return [value for value in snapshot.attributes if has_manifest_marker(value)]


def scan_html(snapshot: PageSnapshot) -> List[str]:
    return find_manifest_urls(snapshot.html)


def scan_snapshot(snapshot: PageSnapshot) -> List[str]:
    """Run all four passes over *snapshot* and return unique candidates."""
    candidates = ManifestLinkSet()
    _add_all(candidates, scan_scripts(snapshot), "script")
    _add_all(candidates, scan_player_globals(snapshot), "config")
    _add_all(candidates, scan_attributes(snapshot), "attribute")
    _add_all(candidates, scan_html(snapshot), "HTML")
    return list(candidates)


async def collect_snapshot(page: Page) -> PageSnapshot:
    """Evaluate the collection script in *page* and wrap its result."""
    payload = await page.evaluate(
        COLLECT_SNAPSHOT_JS,
        {
            "playerGlobals": PLAYER_GLOBALS,
            "attributes": STREAM_ATTRIBUTES,
            "marker": MANIFEST_MARKER,
        },
    )
    return PageSnapshot.from_payload(payload)


async def scan_page(page: Page) -> List[str]:
    """Return manifest candidates embedded in the current state of *page*."""
    snapshot = await collect_snapshot(page)
    return scan_snapshot(snapshot)
