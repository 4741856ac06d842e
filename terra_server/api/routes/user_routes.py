# terra_server/api/routes/user_routes.py
from flask import Blueprint, jsonify

from terra_server.api.middlewares.auth_middleware import current_claims, require_auth
from terra_server.api.schemas.donation_schema import DonationResponse
from terra_server.api.schemas.event_schema import EventResponse
from terra_server.api.schemas.user_schema import UserResponse
from terra_server.infrastructure.database.session import db_session
from terra_server.repositories.donation_repository import DonationRepository
from terra_server.repositories.event_repository import EventRepository
from terra_server.repositories.program_repository import ProgramRepository
from terra_server.repositories.user_repository import UserRepository
from terra_server.services.donation_service import DonationService
from terra_server.services.event_service import EventService
from terra_server.services.user_service import UserService

bp_users = Blueprint("users", __name__, url_prefix="/users")


@bp_users.get("/me")
@require_auth
def me():
    user_id = current_claims().user_id

    with db_session() as session:
        user = UserService(UserRepository(session)).get_user(user_id)

    return jsonify({"data": UserResponse.model_validate(user).model_dump(mode="json")}), 200


@bp_users.get("/my-events")
@require_auth
def my_events():
    user_id = current_claims().user_id

    with db_session() as session:
        events = EventService(EventRepository(session)).my_events(user_id)
        data = [EventResponse.from_view(v).model_dump(mode="json") for v in events]

    return jsonify({"data": data}), 200


@bp_users.get("/my-donations")
@require_auth
def my_donations():
    user_id = current_claims().user_id

    with db_session() as session:
        service = DonationService(DonationRepository(session), ProgramRepository(session))
        donations = service.my_donations(user_id)
        data = [DonationResponse.model_validate(d).model_dump(mode="json") for d in donations]

    return jsonify({"data": data}), 200
