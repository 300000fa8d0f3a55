from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


logger = logging.getLogger(__name__)

# Path parameters copied onto the response log line when a route matched.
LOGGED_PATH_PARAMS = ("game_id", "room_id")


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each HTTP request with an id, log it, and echo the id in a header.

    The response line also carries the game or room the request addressed,
    so one game's traffic can be followed across requests. Websocket
    connections bypass this middleware; the room relay logs its own events.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        logger.info(
            "request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
            },
        )

        response = await call_next(request)
        response.headers["x-request-id"] = request_id

        extra: Dict[str, Any] = {
            "request_id": request_id,
            "status_code": response.status_code,
            "duration_ms": int((time.perf_counter() - start) * 1000),
        }
        # The router fills path_params into the shared scope once it matches.
        path_params = request.scope.get("path_params") or {}
        for name in LOGGED_PATH_PARAMS:
            if name in path_params:
                extra[name] = path_params[name]
        logger.info("response", extra=extra)
        return response
