"""Application factory and app-wide configuration."""

from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from sipcalc import config
from sipcalc.app.api.routes import api_bp


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    config.configure_logging()

    app = Flask(__name__)
    app.config.update(
        SERVICE_NAME=config.SERVICE_NAME,
        CORS_ORIGINS=config.CORS_ORIGINS,
    )
    if overrides:
        app.config.update(overrides)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
