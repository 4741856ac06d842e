# terra_server/services/program_service.py

from terra_server.core.exceptions import BadRequestError, NotFoundError
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.core.utils import ensure_uuid, new_id, require_text, utcnow
from terra_server.infrastructure.database.models.program_model import ProgramModel
from terra_server.repositories.program_repository import ProgramRepository


class ProgramService:
    def __init__(self, program_repository: ProgramRepository) -> None:
        self._program_repository = program_repository

    @wraps_storage_errors("create program")
    def create_program(
        self,
        *,
        title: str,
        description: str,
        target_amount: float,
        image_url: str | None = None,
    ) -> ProgramModel:
        title = require_text(title, "Title")
        description = require_text(description, "Description")
        if target_amount is None or target_amount <= 0:
            raise BadRequestError("Target amount must be greater than 0")

        now = utcnow()
        model = ProgramModel(
            id=new_id(),
            title=title,
            description=description,
            image_url=image_url,
            target_amount=target_amount,
            created_at=now,
            updated_at=now,
        )
        return self._program_repository.add(model)

    @wraps_storage_errors("list programs")
    def list_programs(self) -> list[ProgramModel]:
        return self._program_repository.list_all()

    @wraps_storage_errors("get program")
    def get_program(self, program_id: str) -> ProgramModel:
        program = self._program_repository.get_by_id(ensure_uuid(program_id, label="program"))
        if program is None:
            raise NotFoundError("Program not found")
        return program

    @wraps_storage_errors("update program")
    def update_program(
        self,
        program_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
        target_amount: float | None = None,
    ) -> ProgramModel:
        program = self.get_program(program_id)

        if title is not None:
            program.title = require_text(title, "Title")
        if description is not None:
            program.description = require_text(description, "Description")
        if image_url is not None:
            program.image_url = image_url
        if target_amount is not None:
            if target_amount <= 0:
                raise BadRequestError("Target amount must be greater than 0")
            program.target_amount = target_amount

        program.updated_at = utcnow()
        self._program_repository.flush()
        return program

    @wraps_storage_errors("delete program")
    def delete_program(self, program_id: str) -> None:
        ok = self._program_repository.delete(ensure_uuid(program_id, label="program"))
        if not ok:
            raise NotFoundError("Program not found")
