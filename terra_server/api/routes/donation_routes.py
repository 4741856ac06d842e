# terra_server/api/routes/donation_routes.py
from flask import Blueprint, jsonify, request

from terra_server.api.middlewares.auth_middleware import current_claims, require_auth, require_roles
from terra_server.api.schemas.donation_schema import (
    CreateDonationRequest,
    DonationResponse,
    UpdateDonationStatusRequest,
)
from terra_server.entities.user import Role
from terra_server.infrastructure.database.session import db_session
from terra_server.repositories.donation_repository import DonationRepository
from terra_server.repositories.program_repository import ProgramRepository
from terra_server.services.donation_service import DonationService

bp_donations = Blueprint("donations", __name__, url_prefix="/donations")


def _build_service(session) -> DonationService:
    return DonationService(DonationRepository(session), ProgramRepository(session))


def _dump(donation) -> dict:
    return DonationResponse.model_validate(donation).model_dump(mode="json")


@bp_donations.post("")
@require_auth
def create_donation():
    payload = CreateDonationRequest.model_validate(request.get_json(force=True))
    user_id = current_claims().user_id

    with db_session() as session:
        created = _build_service(session).create_donation(user_id=user_id, **payload.model_dump())
        data = _dump(created)

    return jsonify({"data": data}), 201


# -------------------------
# Admin
# -------------------------

@bp_donations.get("")
@require_auth
@require_roles(Role.ADMIN.value)
def list_donations():
    with db_session() as session:
        data = [_dump(d) for d in _build_service(session).list_donations()]

    return jsonify({"data": data}), 200


@bp_donations.get("/<donation_id>")
@require_auth
@require_roles(Role.ADMIN.value)
def get_donation(donation_id: str):
    with db_session() as session:
        data = _dump(_build_service(session).get_donation(donation_id))

    return jsonify({"data": data}), 200


@bp_donations.put("/<donation_id>/status")
@require_auth
@require_roles(Role.ADMIN.value)
def update_donation_status(donation_id: str):
    payload = UpdateDonationStatusRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        updated = _build_service(session).update_status(donation_id, status=payload.status.value)
        data = _dump(updated)

    return jsonify({"data": data}), 200
