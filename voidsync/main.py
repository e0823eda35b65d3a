"""
VoidSync runtime
================
The Void: a single-slot, unauthenticated, in-memory sync endpoint.
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .utils.api_errors import error_detail, method_not_allowed
from .utils.logging_utils import clear_request_context, configure_logging, set_request_context, structured_log

configure_logging(settings.log_level)
logger = logging.getLogger("voidsync")

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s v%s starting up (env=%s)", settings.app_name, settings.app_version, settings.app_env)
    logger.info("Void body limit: %d bytes", settings.void_max_body_bytes)
    yield
    logger.info("%s shutdown complete; void contents discarded.", settings.app_name)


app = FastAPI(
    title="VoidSync",
    version=settings.app_version,
    description="Shared in-memory sync endpoint for Mind agents. One document, no auth, no persistence.",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    start = time.monotonic()
    request.state.request_id = request_id
    tokens = set_request_context(request_id=request_id)
    try:
        response = await call_next(request)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        response.headers["x-request-id"] = request_id
        response.headers["x-elapsed-ms"] = str(elapsed_ms)
        structured_log(
            logger, logging.INFO, "http_request",
            method=request.method, path=request.url.path, status_code=response.status_code, elapsed_ms=elapsed_ms
        )
        return response
    finally:
        clear_request_context(tokens)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = exc.detail
    elif exc.status_code == 405:
        content = method_not_allowed().detail
    else:
        content = {"error": str(exc.detail)}
    if exc.status_code >= 500:
        logger.error("void request failed: path=%s status=%d", request.url.path, exc.status_code)
    else:
        logger.warning("void request rejected: path=%s status=%d error=%s",
                       request.url.path, exc.status_code, content.get("error"))
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Void sync error: path=%s request_id=%s", request.url.path, getattr(request.state, "request_id", "-"))
    message = error_detail(exc) or "Unhandled server error"
    # Raised past the middleware stack, so CORS headers are attached here.
    return JSONResponse(
        status_code=500,
        content={"error": "Void disturbance", "message": message},
        headers=CORS_HEADERS,
    )


from .api.routes import router as api_router
app.include_router(api_router, prefix="/api")


@app.get("/healthz", include_in_schema=False)
async def healthz():
    return {"status": "ok", "system": settings.app_name, "version": settings.app_version}
