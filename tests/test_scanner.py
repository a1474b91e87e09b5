"""Tests for the content scanner.

The four matching passes are exercised against hand-built
:class:`PageSnapshot` objects; ``scan_page`` is tested with a mocked page
whose ``evaluate`` returns a snapshot payload, so no browser is needed.
``TestCollectSnapshotInBrowser`` runs the collection script in real
Chromium and is skipped when no browser is installed.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from m3u8_extractor.scraper.models import PageSnapshot
from m3u8_extractor.scraper.scanner import (
    COLLECT_SNAPSHOT_JS,
    PLAYER_GLOBALS,
    STREAM_ATTRIBUTES,
    collect_snapshot,
    scan_attributes,
    scan_html,
    scan_page,
    scan_player_globals,
    scan_scripts,
    scan_snapshot,
)

_MASTER = "https://example.com/video/master.m3u8"


class TestScanScripts:
    def test_inline_script_alone_recovers_link(self) -> None:
        snapshot = PageSnapshot(scripts=[f'player.setup({{file: "{_MASTER}"}});'])
        assert scan_scripts(snapshot) == [_MASTER]
        assert scan_snapshot(snapshot) == [_MASTER]

    def test_empty_scripts(self) -> None:
        assert scan_scripts(PageSnapshot(scripts=["", "console.log(1)"])) == []


class TestScanPlayerGlobals:
    def test_scans_serialised_config(self) -> None:
        snapshot = PageSnapshot(globals={
            "jwConfig": '{"sources":[{"file":"https://cdn.example.com/a.m3u8?t=1"}]}',
        })
        assert scan_player_globals(snapshot) == ["https://cdn.example.com/a.m3u8?t=1"]

    def test_ignores_unknown_globals(self) -> None:
        snapshot = PageSnapshot(globals={"somethingElse": f'"{_MASTER}"'})
        assert scan_player_globals(snapshot) == []

    def test_missing_globals_are_skipped(self) -> None:
        # Only one of the known names made it out of the page.
        snapshot = PageSnapshot(globals={"player": f'{{"src":"{_MASTER}"}}'})
        assert scan_player_globals(snapshot) == [_MASTER]


class TestScanAttributes:
    def test_values_added_verbatim(self) -> None:
        snapshot = PageSnapshot(attributes=["/relative/stream.m3u8", "poster.jpg"])
        assert scan_attributes(snapshot) == ["/relative/stream.m3u8"]


class TestScanHtml:
    def test_catches_links_in_handlers_and_comments(self) -> None:
        html = (
            "<!-- backup: https://backup.example/live.m3u8 -->"
            "<button onclick=\"load('https://example.com/alt.m3u8')\">Play</button>"
        )
        assert scan_html(PageSnapshot(html=html)) == [
            "https://backup.example/live.m3u8",
            "https://example.com/alt.m3u8",
        ]


class TestScanSnapshot:
    def test_duplicates_across_passes_collapse(self) -> None:
        snapshot = PageSnapshot(
            scripts=[f'var s = "{_MASTER}";'],
            globals={"player": f'{{"file":"{_MASTER}"}}'},
            attributes=[_MASTER],
            html=f'<script>var s = "{_MASTER}";</script>',
        )
        assert scan_snapshot(snapshot) == [_MASTER]

    def test_pass_order(self) -> None:
        snapshot = PageSnapshot(
            scripts=['"https://s.example/1.m3u8"'],
            globals={"videojs": '"https://g.example/2.m3u8"'},
            attributes=["https://a.example/3.m3u8"],
            html='"https://h.example/4.m3u8"',
        )
        assert scan_snapshot(snapshot) == [
            "https://s.example/1.m3u8",
            "https://g.example/2.m3u8",
            "https://a.example/3.m3u8",
            "https://h.example/4.m3u8",
        ]

    def test_page_without_content(self) -> None:
        assert scan_snapshot(PageSnapshot(html="<head></head><body>Hi</body>")) == []


class TestScanPage:
    async def test_evaluates_collection_script(self) -> None:
        page = MagicMock()
        page.evaluate = AsyncMock(return_value={
            "scripts": [f'"{_MASTER}"'],
            "globals": {},
            "attributes": [],
            "html": "",
        })

        links = await scan_page(page)

        assert links == [_MASTER]
        script, arg = page.evaluate.await_args.args
        assert script == COLLECT_SNAPSHOT_JS
        assert arg["playerGlobals"] == PLAYER_GLOBALS
        assert arg["attributes"] == STREAM_ATTRIBUTES
        assert arg["marker"] == ".m3u8"


# ---------------------------------------------------------------------------
# In-browser collection
# ---------------------------------------------------------------------------

_PLAYER_PAGE = """\
<!DOCTYPE html>
<html>
<head>
<script>
Object.defineProperty(window, 'player', {
  get() { throw new Error('access denied'); },
});
var loop = { name: 'loop' };
loop.self = loop;
window.videoPlayer = loop;
window.jwplayer = function () {};
window.jwConfig = { file: 'https://cdn.example.com/jw/master.m3u8' };
window.hlsPlayer = { src: 'https://cdn.example.com/hls/index.m3u8' };
</script>
</head>
<body>
  <div id="stream" data-file="/streams/live.m3u8"></div>
  <div data-url="https://example.com/not-a-stream.mp4"></div>
  <!-- backup: https://backup.example/alt.m3u8 -->
</body>
</html>
"""


@pytest.fixture()
async def browser_page():
    async with async_playwright() as pw:
        try:
            browser = await pw.chromium.launch(headless=True)
        except PlaywrightError as exc:
            pytest.skip(f"Chromium is not installed: {exc}")
        try:
            page = await browser.new_page()
            await page.set_content(_PLAYER_PAGE)
            yield page
        finally:
            await browser.close()


class TestCollectSnapshotInBrowser:
    async def test_unreadable_globals_are_skipped(self, browser_page) -> None:
        snapshot = await collect_snapshot(browser_page)

        # Throwing getter, cyclic object and function value are all dropped
        # without affecting the readable globals.
        assert set(snapshot.globals) == {"jwConfig", "hlsPlayer"}
        assert snapshot.globals["jwConfig"] == (
            '{"file":"https://cdn.example.com/jw/master.m3u8"}'
        )

    async def test_attributes_need_marker(self, browser_page) -> None:
        snapshot = await collect_snapshot(browser_page)
        assert snapshot.attributes == ["/streams/live.m3u8"]

    async def test_scripts_and_html_captured(self, browser_page) -> None:
        snapshot = await collect_snapshot(browser_page)

        assert len(snapshot.scripts) == 1
        assert "jwConfig" in snapshot.scripts[0]
        assert "https://backup.example/alt.m3u8" in snapshot.html
        assert 'data-file="/streams/live.m3u8"' in snapshot.html

    async def test_scan_page_end_to_end(self, browser_page) -> None:
        assert await scan_page(browser_page) == [
            "https://cdn.example.com/jw/master.m3u8",
            "https://cdn.example.com/hls/index.m3u8",
            "/streams/live.m3u8",
            "https://backup.example/alt.m3u8",
        ]
