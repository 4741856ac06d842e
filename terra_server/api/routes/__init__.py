# terra_server/api/routes/__init__.py

from flask import Flask

from terra_server.api.routes.article_routes import bp_articles
from terra_server.api.routes.auth_routes import bp_auth
from terra_server.api.routes.donation_routes import bp_donations
from terra_server.api.routes.event_routes import bp_events
from terra_server.api.routes.google_oauth_routes import bp_google_oauth
from terra_server.api.routes.health_routes import bp_health
from terra_server.api.routes.program_routes import bp_programs
from terra_server.api.routes.user_routes import bp_users
from terra_server.api.routes.volunteer_routes import bp_volunteers


def register_routes(app: Flask, *, api_prefix: str) -> None:
    # outside the API prefix: health checks and the browser redirect flow
    app.register_blueprint(bp_health, url_prefix="/health")
    app.register_blueprint(bp_google_oauth, url_prefix="/auth/google")

    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/auth")
    app.register_blueprint(bp_users, url_prefix=f"{api_prefix}/users")
    app.register_blueprint(bp_programs, url_prefix=f"{api_prefix}/programs")
    app.register_blueprint(bp_articles, url_prefix=f"{api_prefix}/articles")
    app.register_blueprint(bp_events, url_prefix=f"{api_prefix}/events")
    app.register_blueprint(bp_volunteers, url_prefix=f"{api_prefix}/volunteers")
    app.register_blueprint(bp_donations, url_prefix=f"{api_prefix}/donations")
