# terra_server/repositories/volunteer_repository.py

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from terra_server.core.base_repository import BaseRepository
from terra_server.entities.statuses import ApplicationStatus
from terra_server.infrastructure.database.models.volunteer_model import VolunteerModel


class VolunteerRepository(BaseRepository[VolunteerModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, volunteer_id: str) -> VolunteerModel | None:
        stmt = select(VolunteerModel).where(VolunteerModel.id == volunteer_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def has_pending_application(self, user_id: str) -> bool:
        stmt = select(VolunteerModel.id).where(
            VolunteerModel.user_id == user_id,
            VolunteerModel.status == ApplicationStatus.PENDING.value,
        )
        return self._session.execute(stmt).first() is not None

    def list_page(self, *, limit: int, offset: int, status: str | None = None) -> tuple[list[VolunteerModel], int]:
        stmt = select(VolunteerModel)
        count_stmt = select(func.count(VolunteerModel.id))
        if status:
            stmt = stmt.where(VolunteerModel.status == status)
            count_stmt = count_stmt.where(VolunteerModel.status == status)

        stmt = stmt.order_by(VolunteerModel.created_at.desc()).limit(limit).offset(offset)

        items = list(self._session.execute(stmt).scalars().all())
        total = int(self._session.execute(count_stmt).scalar_one())
        return items, total
