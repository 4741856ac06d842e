# terra_server/api/routes/volunteer_routes.py
from flask import Blueprint, jsonify, request

from terra_server.api.middlewares.auth_middleware import current_claims, require_auth, require_roles
from terra_server.api.schemas.volunteer_schema import (
    UpdateVolunteerStatusRequest,
    VolunteerApplyRequest,
    VolunteerListQuery,
    VolunteerListResponse,
    VolunteerResponse,
)
from terra_server.entities.user import Role
from terra_server.infrastructure.database.session import db_session
from terra_server.repositories.volunteer_repository import VolunteerRepository
from terra_server.services.volunteer_service import VolunteerService

bp_volunteers = Blueprint("volunteers", __name__, url_prefix="/volunteers")


def _build_service(session) -> VolunteerService:
    return VolunteerService(VolunteerRepository(session))


def _dump(volunteer) -> dict:
    return VolunteerResponse.model_validate(volunteer).model_dump(mode="json")


@bp_volunteers.post("/apply")
@require_auth
def apply():
    payload = VolunteerApplyRequest.model_validate(request.get_json(force=True))
    user_id = current_claims().user_id

    data = payload.model_dump()
    data["gender"] = payload.gender.value

    with db_session() as session:
        created = _build_service(session).submit_application(user_id=user_id, **data)
        result = _dump(created)

    return jsonify({"data": result}), 201


# -------------------------
# Admin
# -------------------------

@bp_volunteers.get("")
@require_auth
@require_roles(Role.ADMIN.value)
def list_volunteers():
    query = VolunteerListQuery.model_validate(request.args.to_dict())

    with db_session() as session:
        page = _build_service(session).list_applications(
            page=query.page,
            limit=query.limit,
            status=query.status.value if query.status else None,
        )
        response = VolunteerListResponse(
            items=[VolunteerResponse.model_validate(v) for v in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )

    return jsonify({"data": response.model_dump(mode="json")}), 200


@bp_volunteers.get("/<volunteer_id>")
@require_auth
@require_roles(Role.ADMIN.value)
def get_volunteer(volunteer_id: str):
    with db_session() as session:
        data = _dump(_build_service(session).get_application(volunteer_id))

    return jsonify({"data": data}), 200


@bp_volunteers.put("/<volunteer_id>/status")
@require_auth
@require_roles(Role.ADMIN.value)
def update_volunteer_status(volunteer_id: str):
    payload = UpdateVolunteerStatusRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        updated = _build_service(session).update_status(volunteer_id, status=payload.status.value)
        data = _dump(updated)

    return jsonify({"data": data}), 200
