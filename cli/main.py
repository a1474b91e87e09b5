"""M3U8 extractor CLI — entry-point for local runs.

Usage:
    python cli/main.py --help

Commands:
    extract   → render one page and print its manifest URLs
    serve     → run the HTTP API under uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from m3u8_extractor.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from m3u8_extractor.config import configure_logging, settings
from m3u8_extractor.scraper import extract_m3u8_sync

app = typer.Typer(
    name="m3u8-extractor",
    help="Find HLS manifest (.m3u8) URLs on a web page.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL (e.g. DEBUG)."),
) -> None:
    if log_level:
        settings.log_level = log_level
    configure_logging()


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------
@app.command("extract")
def extract(
    url: str = typer.Option(..., help="Page URL to inspect."),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
) -> None:
    """Render a page and print every manifest URL found on it."""
    typer.echo(f"[extract] Rendering {url!r} …", err=True)
    try:
        result = extract_m3u8_sync(url)
    except Exception as exc:
        typer.echo(f"[extract] Failed: {exc}", err=True)
        raise typer.Exit(1)

    if not result.found:
        typer.echo("[extract] No M3U8 links found on the webpage.", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_payload(), indent=2))
        return

    typer.echo(f"[extract] {len(result.links)} link(s); primary: {result.primary_link}", err=True)
    for link in result.links:
        typer.echo(link)


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)."),
    port: Optional[int] = typer.Option(None, help="Bind port (default: API_PORT)."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the extraction API."""
    import uvicorn  # noqa: PLC0415

    uvicorn.run(
        "m3u8_extractor.api.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
