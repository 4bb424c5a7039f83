import click
from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db
from .api.v1 import v1_bp
from .errors import register_error_handlers
from flask_swagger_ui import get_swaggerui_blueprint
import os


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    if app.config.get("SQLALCHEMY_DATABASE_URI"):
        db.init_app(app)
    else:
        # The content store reports "not configured" instead of failing here
        app.logger.error("Database URI not set - content will not be persisted")

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    # -------------------------------------------------
    # CLI
    # -------------------------------------------------
    @app.cli.command("init-db")
    def init_db():
        """Create the site_content table."""
        if not app.config.get("SQLALCHEMY_DATABASE_URI"):
            raise click.ClickException(
                "Database URI not set; configure DEV_DATABASE_URI or DATABASE_URI"
            )
        db.create_all()
        click.echo("site_content table ready")

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/content.yaml", methods=["GET"], endpoint="openapi_content")
    def serve_openapi():
        yaml_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "content_openapi.yaml",
        )

        if not os.path.exists(yaml_path):
            raise FileNotFoundError("content_openapi.yaml not found")

        return send_file(
            yaml_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/content.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Site Content API",
            "deepLinking": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
