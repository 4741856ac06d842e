# terra_server/api/routes/health_routes.py
from flask import Blueprint, jsonify
from sqlalchemy import text

from terra_server.config.settings import settings
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.infrastructure.database.session import db_session

bp_health = Blueprint("health", __name__, url_prefix="/health")


@wraps_storage_errors("reach the database")
def _ping_database() -> str:
    with db_session() as session:
        session.execute(text("select 1"))
        return session.get_bind().dialect.name


@bp_health.get("")
def liveness():
    return jsonify({"status": "ok", "environment": settings.environment}), 200


@bp_health.get("/db")
def readiness():
    # failures surface as the standard 500 "internal" body
    return jsonify({"status": "ok", "database": _ping_database()}), 200
