# terra_server/repositories/program_repository.py

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from terra_server.core.base_repository import BaseRepository
from terra_server.infrastructure.database.models.program_model import ProgramModel


class ProgramRepository(BaseRepository[ProgramModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, program_id: str) -> ProgramModel | None:
        stmt = select(ProgramModel).where(ProgramModel.id == program_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_all(self) -> list[ProgramModel]:
        stmt = select(ProgramModel).order_by(ProgramModel.created_at.desc())
        return list(self._session.execute(stmt).scalars().all())

    def delete(self, program_id: str) -> bool:
        result = self._session.execute(delete(ProgramModel).where(ProgramModel.id == program_id))
        return (result.rowcount or 0) > 0
