"""API blueprint package aggregating the HTTP endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask

from .articles import bp as articles_bp
from .auth import bp as auth_bp
from .health import bp as health_bp
from .users import bp as users_bp

# Each tuple: (blueprint, url_prefix_relative_to_API_BASE_PREFIX)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),
    (auth_bp, "/auth"),
    (articles_bp, "/articles"),
    (users_bp, "/users"),
]


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries; empty mounts them at the root.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.strip("/"), rel_prefix.strip("/")] if segment
        )
        app.register_blueprint(bp, url_prefix="/" + full_prefix if full_prefix else None)


def init_app(app: Flask) -> None:
    """Register every blueprint under ``API_BASE_PREFIX``."""

    register_blueprint_group(
        app, base_prefix=app.config.get("API_BASE_PREFIX", ""), entries=REGISTRY
    )


__all__ = ["REGISTRY", "init_app", "register_blueprint_group"]
