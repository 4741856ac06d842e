# terra_server/api/routes/program_routes.py
from flask import Blueprint, jsonify, request

from terra_server.api.middlewares.auth_middleware import require_auth, require_roles
from terra_server.api.schemas.program_schema import CreateProgramRequest, ProgramResponse, UpdateProgramRequest
from terra_server.entities.user import Role
from terra_server.infrastructure.database.session import db_session
from terra_server.repositories.program_repository import ProgramRepository
from terra_server.services.program_service import ProgramService

bp_programs = Blueprint("programs", __name__, url_prefix="/programs")


def _build_service(session) -> ProgramService:
    return ProgramService(ProgramRepository(session))


def _dump(program) -> dict:
    return ProgramResponse.model_validate(program).model_dump(mode="json")


# -------------------------
# Public
# -------------------------

@bp_programs.get("")
def list_programs():
    with db_session() as session:
        programs = _build_service(session).list_programs()
        data = [_dump(p) for p in programs]

    return jsonify({"data": data}), 200


@bp_programs.get("/<program_id>")
def get_program(program_id: str):
    with db_session() as session:
        data = _dump(_build_service(session).get_program(program_id))

    return jsonify({"data": data}), 200


# -------------------------
# Admin
# -------------------------

@bp_programs.post("")
@require_auth
@require_roles(Role.ADMIN.value)
def create_program():
    payload = CreateProgramRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        data = _dump(_build_service(session).create_program(**payload.model_dump()))

    return jsonify({"data": data}), 201


@bp_programs.put("/<program_id>")
@require_auth
@require_roles(Role.ADMIN.value)
def update_program(program_id: str):
    payload = UpdateProgramRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        updated = _build_service(session).update_program(program_id, **payload.model_dump(exclude_none=True))
        data = _dump(updated)

    return jsonify({"data": data}), 200


@bp_programs.delete("/<program_id>")
@require_auth
@require_roles(Role.ADMIN.value)
def delete_program(program_id: str):
    with db_session() as session:
        _build_service(session).delete_program(program_id)

    return jsonify({"message": "Program deleted successfully"}), 200
