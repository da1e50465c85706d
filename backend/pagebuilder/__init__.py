from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .logging_config import configure_logging
from flask_swagger_ui import get_swaggerui_blueprint
import os


def build_page_repository(app):
    store = app.config.get("PAGE_STORE", "sql")
    if store == "memory":
        from .repositories.memory import InMemoryPageRepository
        return InMemoryPageRepository()
    if store == "sql":
        from .repositories.sql import SqlAlchemyPageRepository
        return SqlAlchemyPageRepository()
    raise ValueError(f"Unknown PAGE_STORE {store!r}; expected 'sql' or 'memory'")


def create_app(config_name: str = "development", *, page_repository=None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Models must be imported so create_all / migrations see the tables
    from .models import page, page_version  # noqa: F401

    # -------------------------------------------------
    # Persistence collaborator
    # -------------------------------------------------
    app.extensions["page_repository"] = page_repository or build_page_repository(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/pages.yaml", methods=["GET"], endpoint="openapi_pages")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "pages_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("pages_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/pages.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Page Builder API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    app.logger.debug("Page store: %s", type(app.extensions["page_repository"]).__name__)
    return app
