"""Timing metadata for JSON responses.

This module implements middleware that records when a request enters the
application and, when the response body is a JSON object, merges two
fields into it before it is sent:

- ``unixTimestamp``: current Unix time in whole seconds
- ``duration``: seconds spent handling the request, rounded to 2 decimals

Status code and headers are left untouched apart from ``content-length``,
which is recomputed for the new body. Non-JSON responses, and JSON bodies
that are not objects, pass through unchanged.
"""

import time
from typing import Any

import orjson
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.constants import (
    DURATION_FIELD,
    JSON_CONTENT_TYPES,
    UNIX_TIMESTAMP_FIELD,
)
from src.core.constants import DURATION_DECIMALS
from src.core.types import JsonObject


def compute_duration(start: float, end: float) -> float:
    """Elapsed seconds between two perf_counter readings.

    Args:
        start: perf_counter value at request entry.
        end: perf_counter value at response time.

    Returns:
        float: Non-negative seconds rounded to two decimals.
    """
    return max(round(end - start, DURATION_DECIMALS), 0.0)


def add_timing_fields(body: JsonObject, start: float) -> JsonObject:
    """Return a copy of a JSON body with the timing fields merged in.

    Args:
        body: The handler's JSON object.
        start: perf_counter value captured at request entry.

    Returns:
        JsonObject: The body plus ``unixTimestamp`` and ``duration``.
    """
    return {
        **body,
        UNIX_TIMESTAMP_FIELD: int(time.time()),
        DURATION_FIELD: compute_duration(start, time.perf_counter()),
    }


def _is_json(response: Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() in JSON_CONTENT_TYPES


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware adding ``unixTimestamp`` and ``duration`` to JSON bodies.

    Install it outside every middleware that can produce a JSON response,
    error translation included, so every JSON object gets the fields.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Time the request and augment its JSON response.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: The response, with timing fields for JSON objects.
        """
        start = time.perf_counter()
        response = await call_next(request)

        if not _is_json(response):
            return response

        body = b"".join(
            [chunk async for chunk in response.body_iterator]  # type: ignore[attr-defined]
        )
        try:
            payload: Any = orjson.loads(body) if body else None
        except orjson.JSONDecodeError:
            payload = None

        if isinstance(payload, dict):
            body = orjson.dumps(add_timing_fields(payload, start))

        timed = Response(
            content=body,
            status_code=response.status_code,
            background=response.background,
        )
        # Keep every original header, repeated ones included
        timed.raw_headers = [
            (key, value)
            for key, value in response.raw_headers
            if key != b"content-length"
        ] + [(b"content-length", str(len(body)).encode("latin-1"))]
        return timed
