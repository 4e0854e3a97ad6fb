"""
FastAPI application for AI image and video generation through fal.ai.

Features:
- Text-to-image, image-to-image, text-to-video and image-to-video generation
- Style and motion prompt enhancement
- Request/response logging with secret masking
"""
import re
import time
import json
from typing import Any

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError as SchemaValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Config
from generation.routes import router as generation_router
from utils.logger import get_logger
from common.error_messages import ErrorCode, get_error_response

logger = get_logger("main")

# Fields masked in logs
SENSITIVE_FIELDS = {
    'fal_key', 'api_key', 'token', 'secret', 'authorization', 'credentials'
}

# Inline uploads are elided from logs
DATA_URL_PATTERN = re.compile(r"data:[\w/+.-]+;base64,[A-Za-z0-9+/=]+")

MAX_LOGGED_BODY = 2000


def mask_sensitive_data(data: Any, mask_value: str = "***MASKED***") -> Any:
    """
    Recursively mask sensitive fields and inline data URLs.

    Args:
        data: Data to mask (dict, list, or string)
        mask_value: Value to replace sensitive data with

    Returns:
        Data with sensitive fields masked
    """
    if isinstance(data, dict):
        return {
            key: mask_value if key.lower() in SENSITIVE_FIELDS else mask_sensitive_data(value, mask_value)
            for key, value in data.items()
        }
    elif isinstance(data, list):
        return [mask_sensitive_data(item, mask_value) for item in data]
    elif isinstance(data, str):
        try:
            parsed = json.loads(data)
            if isinstance(parsed, (dict, list)):
                return json.dumps(mask_sensitive_data(parsed, mask_value))
        except (json.JSONDecodeError, ValueError):
            pass
        return DATA_URL_PATTERN.sub(lambda m: f"<data url, {len(m.group(0))} chars>", data)
    else:
        return data


def _format_body(body: bytes) -> str:
    text = mask_sensitive_data(body.decode("utf-8", errors="replace"))
    if len(text) > MAX_LOGGED_BODY:
        text = text[:MAX_LOGGED_BODY] + "... [truncated]"
    return text


# Validate configuration on startup
try:
    Config.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    logger.error("Generation requests will fail until FAL_KEY is set (environment or .env file)")

app = FastAPI(
    title="Media Studio API",
    description="Generate images and short videos from prompts and source images using fal.ai models.",
    version="1.0.0"
)

# CORS middleware - added first so it runs on all responses (including errors and OPTIONS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SchemaValidationError)
async def schema_exception_handler(request: Request, exc: SchemaValidationError):
    """Report bodies that fail schema parsing as client errors."""
    errors = exc.errors()
    logger.warning(f"Invalid request body for {request.url.path}: {errors}")
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid value for {field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message, _ = get_error_response(ErrorCode.INVALID_PARAMETER)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions globally."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    message, status_code = get_error_response(ErrorCode.UNKNOWN_ERROR)
    return JSONResponse(status_code=status_code, content={"error": message})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests with timing and request/response details."""
    start_time = time.time()
    full_url = str(request.url)

    body_bytes = b""
    if request.method in ["POST", "PUT", "PATCH"]:
        body_bytes = await request.body()

    log_msg = f"→ {request.method} {full_url} - Client: {request.client.host if request.client else 'unknown'}"
    if body_bytes:
        log_msg += f"\n  Request Body: {_format_body(body_bytes)}"
    logger.info(log_msg)

    # Starlette caches the body read above and replays it to the route
    try:
        response = await call_next(request)
    except Exception as e:
        process_time = (time.time() - start_time) * 1000
        logger.error(f"← {request.method} {full_url} - Error: {e} - Time: {process_time:.2f}ms")
        raise

    response_body = b""
    async for chunk in response.body_iterator:
        response_body += chunk

    process_time = (time.time() - start_time) * 1000
    log_msg = f"← {request.method} {full_url} - Status: {response.status_code} - Time: {process_time:.2f}ms"
    if response_body:
        log_msg += f"\n  Response Body: {_format_body(response_body)}"
    logger.info(log_msg)

    return Response(
        content=response_body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type
    )


app.include_router(generation_router)
logger.info("Generation router included")


@app.on_event("startup")
async def startup_event():
    logger.info("=" * 80)
    logger.info("Media Studio API starting up")
    logger.info(f"Host: {Config.HOST}:{Config.PORT}")
    logger.info(f"Provider credential configured: {'yes' if Config.FAL_KEY else 'no'}")
    logger.info("=" * 80)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Media Studio API shutting down")


@app.get("/healthz")
def health():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return {"status": "ok"}


def main():
    """Run the server with uvicorn."""
    logger.info(f"Starting server on {Config.HOST}:{Config.PORT}")
    uvicorn.run(
        "app:app",
        host=Config.HOST,
        port=Config.PORT,
        log_level=Config.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
