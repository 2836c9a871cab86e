# PHM/backend/phm/middleware.py : request/response logging

import json
import time
import logging
from fastapi import Request
from phm.constants import SENSITIVE_HEADERS, SENSITIVE_FIELDS, MAX_LOGGED_CHARS, MAX_LOGGED_ITEMS

logger = logging.getLogger("phm.api")


def sanitize_headers(headers) -> dict:
    """Copy of the headers with credentials replaced by [REDACTED]"""
    if not headers:
        return {}
    sanitized = dict(headers)
    for key in list(sanitized):
        if key.lower() in SENSITIVE_HEADERS:
            sanitized[key] = "[REDACTED]"
    return sanitized


def sanitize_body(body):
    """Copy of a JSON body with password/token fields replaced by [REDACTED]"""
    if not isinstance(body, dict):
        return body
    sanitized = dict(body)
    for field in SENSITIVE_FIELDS:
        if sanitized.get(field):
            sanitized[field] = "[REDACTED]"
    return sanitized


def truncate(data):
    if isinstance(data, str) and len(data) > MAX_LOGGED_CHARS:
        return data[:MAX_LOGGED_CHARS] + "... [truncated]"
    if isinstance(data, list) and len(data) > MAX_LOGGED_ITEMS:
        return data[:MAX_LOGGED_ITEMS] + [f"... and {len(data) - MAX_LOGGED_ITEMS} more items"]
    return data


async def _read_json(request: Request):
    # Starlette caches the body, the route can still read it
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return truncate(raw.decode("utf-8", errors="replace"))


async def log_requests(request: Request, call_next):
    """HTTP middleware: one line per request, one per response with its duration"""
    start = time.perf_counter()
    logger.info(f"API Request: {request.method} {request.url.path}")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Headers: {sanitize_headers(request.headers)}")
        body = await _read_json(request)
        if body is not None:
            logger.debug(f"Body: {truncate(str(sanitize_body(body)))}")

    response = await call_next(request)

    duration = (time.perf_counter() - start) * 1000
    logger.info(
        f"API Response: {request.method} {request.url.path} - Status: {response.status_code} ({duration:.1f}ms)"
    )
    return response
