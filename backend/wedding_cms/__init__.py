import os

from flask import Flask, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .cli import register_commands
from . import models  # noqa: F401  (registers tables with SQLAlchemy)

SWAGGER_URL = "/swagger"
OPENAPI_URL = "/openapi/cms.yaml"
OPENAPI_DIR = os.path.join(os.path.dirname(__file__), "api", "v1")


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)
    _register_api_docs(app)

    app.logger.debug("wedding_cms app created with %s config", config_name)
    return app


def _register_api_docs(app: Flask):
    """OpenAPI document (shipped as package data) and the Swagger UI over it."""

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        return send_from_directory(OPENAPI_DIR, "cms_openapi.yaml", mimetype="application/yaml")

    app.register_blueprint(
        get_swaggerui_blueprint(
            SWAGGER_URL,
            OPENAPI_URL,
            config={
                "app_name": "Wedding CMS API",
                "deepLinking": True,
                "persistAuthorization": True,
            },
        ),
        url_prefix=SWAGGER_URL,
    )
