"""FastAPI application factory.

Error envelope
--------------
Every error, whether raised as ``HTTPException`` by a router or produced by
request validation, is rendered as::

    {"success": false, "error": "<message>"}

Routers
-------
    /extract   — render a page and return its HLS manifest URLs
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from m3u8_extractor.config import configure_logging

from m3u8_extractor.api.routers import extract as extract_router

INVALID_BODY_ERROR = "Invalid request body"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(400, INVALID_BODY_ERROR)


async def _answer_options(request: Request, call_next) -> Response:
    """Answer every OPTIONS request, preflight or not, with an empty 200.

    Runs outside ``CORSMiddleware`` so preflights asking for extra headers
    are not rejected with a plain-text 400.
    """
    if request.method != "OPTIONS":
        return await call_next(request)
    headers = dict(CORS_HEADERS)
    requested = request.headers.get("access-control-request-headers")
    if requested:
        headers["Access-Control-Allow-Headers"] = requested
    return Response(status_code=200, headers=headers)


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="M3U8 Extractor API",
        description=(
            "Renders a web page in headless Chromium, watches its network "
            "traffic and scans its DOM and scripts, and returns every HLS "
            "manifest (.m3u8) URL it finds."
        ),
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    # Added last so it wraps CORSMiddleware.
    app.middleware("http")(_answer_options)

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    app.include_router(extract_router.router, prefix="/extract", tags=["extract"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn m3u8_extractor.api.app:app --reload
app = create_app()
