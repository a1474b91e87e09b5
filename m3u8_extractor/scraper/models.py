"""Data models for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, List


def _utc_timestamp() -> str:
    """Return the current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ExtractionRequest:
    """A single page to extract manifests from."""

    url: str


class ManifestLinkSet:
    """Candidate manifest URLs, deduplicated by exact string equality.

    Iteration follows insertion order, so the first link ever added stays
    first in the final result.
    """

    def __init__(self, links: Iterable[str] = ()) -> None:
        self._links: dict[str, None] = {}
        self.update(links)

    def add(self, link: str) -> bool:
        """Add *link*; return ``True`` if it was not already present."""
        if link in self._links:
            return False
        self._links[link] = None
        return True

    def update(self, links: Iterable[str]) -> None:
        for link in links:
            self.add(link)

    def __contains__(self, link: object) -> bool:
        return link in self._links

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._links))

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        return f"ManifestLinkSet({list(self._links)!r})"


@dataclass
class PageSnapshot:
    """Raw page state collected in-page by the content scanner."""

    scripts: List[str] = field(default_factory=list)
    globals: dict[str, str] = field(default_factory=dict)
    attributes: List[str] = field(default_factory=list)
    html: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "PageSnapshot":
        """Build a snapshot from the object returned by ``page.evaluate``.

        Entries of the wrong type are dropped so a hostile page cannot make
        the Python passes fail.
        """
        if not isinstance(payload, dict):
            return cls()
        scripts = [s for s in payload.get("scripts") or [] if isinstance(s, str)]
        raw_globals = payload.get("globals") or {}
        globals_ = {
            str(name): value
            for name, value in (raw_globals.items() if isinstance(raw_globals, dict) else [])
            if isinstance(value, str)
        }
        attributes = [a for a in payload.get("attributes") or [] if isinstance(a, str)]
        html = payload.get("html")
        return cls(
            scripts=scripts,
            globals=globals_,
            attributes=attributes,
            html=html if isinstance(html, str) else "",
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Filtered manifest links for one page, in discovery order."""

    url: str
    links: tuple[str, ...] = ()
    timestamp: str = field(default_factory=_utc_timestamp)

    @property
    def primary_link(self) -> str | None:
        return self.links[0] if self.links else None

    @property
    def found(self) -> bool:
        return bool(self.links)

    def to_payload(self) -> dict[str, Any]:
        """Serialise to the JSON success envelope returned to callers."""
        return {
            "success": True,
            "url": self.url,
            "m3u8Links": list(self.links),
            "primaryLink": self.primary_link,
            "timestamp": self.timestamp,
        }
