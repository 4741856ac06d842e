# terra_server/main.py
from __future__ import annotations

import click
from flask import Flask
from flask_cors import CORS

from terra_server.api.dependencies import EXTENSION_KEY, Components, build_components, init_components
from terra_server.api.middlewares.error_handler import register_error_handlers
from terra_server.api.routes import register_routes
from terra_server.config.flask_config import configure_app
from terra_server.config.settings import settings
from terra_server.core.logging import configure_logging
from terra_server.infrastructure.database.seed import seed_database
from terra_server.infrastructure.database.session import create_all, db_session

import terra_server.infrastructure.database.models  # noqa: F401


def _register_cli(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db_command():
        """Create every table that does not exist yet."""
        create_all()
        click.echo("Database tables created.")

    @app.cli.command("seed")
    def seed_command():
        """Insert the admin account and sample programs."""
        components: Components = app.extensions[EXTENSION_KEY]
        with db_session() as session:
            created = seed_database(
                session,
                password_hasher=components.password_hasher,
                admin_email=settings.seeder_admin_email,
                admin_password=settings.seeder_admin_password,
            )
        click.echo(f"Seeded {created['users']} user(s) and {created['programs']} program(s).")


def create_app(components: Components | None = None) -> Flask:
    configure_logging()

    app = Flask(__name__)

    CORS(
        app,
        resources={rf"{settings.api_prefix}/*": {"origins": settings.cors_origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        supports_credentials=True,
    )

    configure_app(app)
    init_components(app, components or build_components())

    register_routes(app, api_prefix=settings.api_prefix)
    register_error_handlers(app)
    _register_cli(app)

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=8080, debug=settings.debug)
