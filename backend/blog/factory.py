"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from blog.core.config import BaseConfig, get_config, validate_config
from blog.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config class or object; inferred from ``APP_ENV`` when omitted.
    :raises RuntimeError: If production runs with placeholder secrets, or a
        configured Redis server is unreachable.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)
    validate_config(app.config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from blog.core import proxy

    proxy.init_app(app)

    from blog.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from blog.core import cors

    cors.init_app(app)

    from blog import wiring

    wiring.init_app(app)

    from blog.core import ratelimit

    ratelimit.init_app(app)

    from blog.api import init_app as init_api

    init_api(app)

    from blog.core import errors

    errors.init_app(app)

    from blog import cli as blog_cli

    blog_cli.init_app(app)

    return app
