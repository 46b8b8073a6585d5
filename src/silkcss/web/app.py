from __future__ import annotations

from flask import Flask

from silkcss.config import SilkConfig
from silkcss.runtime import StyleSystem


def create_app(
    system: StyleSystem | None = None,
    config: SilkConfig | None = None,
) -> Flask:
    """Create and configure the dev server app."""
    app = Flask(__name__)

    if system is None:
        system = StyleSystem(config)

    app.extensions["style_system"] = system

    # Register blueprints
    from silkcss.web.routes.api import api_bp
    from silkcss.web.routes.styles import styles_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(styles_bp)

    return app
