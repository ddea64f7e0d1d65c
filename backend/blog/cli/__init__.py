"""Flask CLI groups for the blog (``flask seed demo`` / ``flask seed wipe``)."""

from __future__ import annotations

from flask import Flask

from .seed import seed_cli

__all__ = ["init_app", "seed_cli"]


def init_app(app: Flask) -> None:
    """Attach the ``seed`` group to ``app.cli``."""
    app.cli.add_command(seed_cli)
