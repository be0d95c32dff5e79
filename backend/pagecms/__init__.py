import os

from flask import Flask, send_file, current_app
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .events import PageEvents
from . import models  # noqa: F401  registers every table with SQLAlchemy

SWAGGER_URL = "/swagger"
OPENAPI_URL = "/openapi/pages.yaml"


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # One dispatcher per app; receivers connect through app.extensions
    app.extensions["page_events"] = PageEvents()

    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    _register_api_docs(app)

    return app


def _register_api_docs(app):
    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_pages")
    def serve_openapi():
        openapi_path = os.path.join(current_app.root_path, "api", "v1", "pages_openapi.yaml")

        if not os.path.exists(openapi_path):
            raise FileNotFoundError("pages_openapi.yaml not found")

        return send_file(openapi_path, mimetype="application/yaml", as_attachment=False)

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        OPENAPI_URL,
        config={
            "app_name": "Page CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )
    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)
