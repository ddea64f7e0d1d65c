"""Reverse-proxy awareness: ProxyFix wiring and client address resolution."""

from __future__ import annotations

from flask import Flask, Request
from werkzeug.middleware.proxy_fix import ProxyFix

FORWARDED_FOR_HEADER = "X-Forwarded-For"
REAL_IP_HEADER = "X-Real-IP"


def init_app(app: Flask) -> None:
    """Apply :class:`werkzeug.middleware.proxy_fix.ProxyFix` when enabled.

    Controlled by ``USE_PROXYFIX`` (defaults to ``True``); the number of
    trusted hops comes from ``PROXY_FIX_HOPS`` (defaults to one).
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXY_FIX_HOPS", 1))
    app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
        app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops
    )


def client_ip(req: Request) -> str:
    """Resolve the originating client address of ``req``.

    Preference order: first ``X-Forwarded-For`` entry, then ``X-Real-IP``,
    then the socket address. Returns ``"unknown"`` when none is available.
    """
    forwarded = req.headers.get(FORWARDED_FOR_HEADER, "")
    if forwarded.strip():
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = req.headers.get(REAL_IP_HEADER, "").strip()
    if real_ip:
        return real_ip
    return req.remote_addr or "unknown"
