"""Centralised settings for the M3U8 extractor.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Browser session
    # ------------------------------------------------------------------
    headless: bool = field(default_factory=lambda: _env_bool("HEADLESS", "true"))
    chromium_executable_path: str | None = field(
        default_factory=lambda: os.environ.get("CHROMIUM_EXECUTABLE_PATH") or None
    )
    extra_browser_args: list[str] = field(
        default_factory=lambda: _env_list("EXTRA_BROWSER_ARGS", "")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("USER_AGENT", _DESKTOP_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Page load budget (seconds)
    # ------------------------------------------------------------------
    navigation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("NAVIGATION_TIMEOUT", "25.0"))
    )
    settle_delay: float = field(
        default_factory=lambda: float(os.environ.get("SETTLE_DELAY", "5.0"))
    )
    wait_until: str = field(
        default_factory=lambda: os.environ.get("WAIT_UNTIL", "networkidle")
    )

    # ------------------------------------------------------------------
    # Traffic observer
    # ------------------------------------------------------------------
    blocked_resource_types: list[str] = field(
        default_factory=lambda: _env_list("BLOCKED_RESOURCE_TYPES", "image,font,stylesheet")
    )

    # ------------------------------------------------------------------
    # HTTP API / logging
    # ------------------------------------------------------------------
    api_host: str = field(default_factory=lambda: os.environ.get("API_HOST", "127.0.0.1"))
    api_port: int = field(default_factory=lambda: int(os.environ.get("API_PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))

    @property
    def navigation_timeout_ms(self) -> float:
        """Navigation timeout in milliseconds, as Playwright expects it."""
        return self.navigation_timeout * 1000


def configure_logging() -> None:
    """Install a root handler at ``settings.log_level`` (no-op if one exists)."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Module-level singleton — import this everywhere:
#   from m3u8_extractor.config import settings
settings = Settings()
