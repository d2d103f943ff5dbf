"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from authflow.core.config import CONFIG_MAP, BaseConfig, get_config
from authflow.core.logger import configure_logging, init_app as init_logging


def _resolve_config(config: str | type[BaseConfig] | object | None) -> object:
    """Map ``None`` / an environment name onto a config class."""

    if config is None:
        return get_config()
    if isinstance(config, str) and config.strip().lower() in CONFIG_MAP:
        return CONFIG_MAP[config.strip().lower()]
    return config


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    The signing secret is read from the resolved config here, once, and handed
    to the token provider by :func:`authflow.core.extensions.init_app`.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    resolved = _resolve_config(config)
    validate = getattr(resolved, "validate", None)
    if callable(validate):
        validate()

    app.config.from_object(resolved)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)
    # Envelopes keep their declared key order
    app.json.sort_keys = False

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Proxy headers if running behind a reverse proxy (optional module)
    from authflow.core import proxy

    proxy.init_app(app)

    from authflow.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from authflow.core import cors

    cors.init_app(app)

    from authflow.api import init_app as init_api

    init_api(app)

    from authflow.core import errors

    errors.init_app(app)

    return app
