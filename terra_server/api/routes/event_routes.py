# terra_server/api/routes/event_routes.py
from flask import Blueprint, jsonify, request

from terra_server.api.middlewares.auth_middleware import current_claims, require_auth, require_roles
from terra_server.api.schemas.event_schema import CreateEventRequest, EventResponse, UpdateEventRequest
from terra_server.entities.user import Role
from terra_server.infrastructure.database.session import db_session
from terra_server.repositories.event_repository import EventRepository
from terra_server.services.event_service import EventService

bp_events = Blueprint("events", __name__, url_prefix="/events")


def _build_service(session) -> EventService:
    return EventService(EventRepository(session))


# -------------------------
# Public
# -------------------------

@bp_events.get("")
def list_events():
    with db_session() as session:
        views = _build_service(session).list_events()

    return jsonify({"data": [EventResponse.from_view(v).model_dump(mode="json") for v in views]}), 200


@bp_events.get("/<event_id>")
def get_event(event_id: str):
    with db_session() as session:
        view = _build_service(session).get_event(event_id)

    return jsonify({"data": EventResponse.from_view(view).model_dump(mode="json")}), 200


# -------------------------
# Participants
# -------------------------

@bp_events.post("/<event_id>/join")
@require_auth
def join_event(event_id: str):
    user_id = current_claims().user_id

    with db_session() as session:
        _build_service(session).join_event(event_id=event_id, user_id=user_id)

    return jsonify({"message": "Successfully joined the event"}), 200


# -------------------------
# Admin
# -------------------------

@bp_events.post("")
@require_auth
@require_roles(Role.ADMIN.value)
def create_event():
    payload = CreateEventRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        view = _build_service(session).create_event(**payload.model_dump())

    return jsonify({"data": EventResponse.from_view(view).model_dump(mode="json")}), 201


@bp_events.put("/<event_id>")
@require_auth
@require_roles(Role.ADMIN.value)
def update_event(event_id: str):
    payload = UpdateEventRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        view = _build_service(session).update_event(event_id, **payload.model_dump(exclude_none=True))

    return jsonify({"data": EventResponse.from_view(view).model_dump(mode="json")}), 200


@bp_events.delete("/<event_id>")
@require_auth
@require_roles(Role.ADMIN.value)
def delete_event(event_id: str):
    with db_session() as session:
        _build_service(session).delete_event(event_id)

    return jsonify({"message": "Event deleted successfully"}), 200
