"""Fixed-window rate limiting for the authentication routes."""

from __future__ import annotations

import logging

from flask import Flask, request

from blog.core.errors import problem_response
from blog.core.proxy import client_ip
from blog.wiring import get_components

log = logging.getLogger(__name__)

TOO_MANY_REQUESTS_MESSAGE = "Too many requests. Please try again later."


def init_app(app: Flask) -> None:
    """Install a ``before_request`` hook limiting ``{API_BASE_PREFIX}/auth/*``.

    Each client IP gets ``RATE_LIMIT_MAX_ATTEMPTS`` requests per
    ``RATE_LIMIT_WINDOW_SECONDS``. Over the limit the request is answered
    with 429 before reaching any view.
    """
    if not app.config.get("RATE_LIMIT_ENABLED", True):
        return

    guarded = f"{app.config.get('API_BASE_PREFIX', '').rstrip('/')}/auth/"
    max_attempts = int(app.config.get("RATE_LIMIT_MAX_ATTEMPTS", 5))
    window = int(app.config.get("RATE_LIMIT_WINDOW_SECONDS", 60))

    @app.before_request
    def _limit_auth_routes():
        if not request.path.startswith(guarded):
            return None
        ip = client_ip(request)
        if get_components().rate_limiter.allow(ip, max_attempts, window):
            return None
        log.warning(
            "ratelimit.denied",
            extra={"event": "ratelimit.denied", "client_ip": ip, "path": request.path},
        )
        return problem_response(429, code="too_many_requests", message=TOO_MANY_REQUESTS_MESSAGE)
