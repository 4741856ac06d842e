# terra_server/repositories/event_repository.py

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from terra_server.core.base_repository import BaseRepository
from terra_server.infrastructure.database.models.event_model import EventModel, EventParticipantModel


class EventRepository(BaseRepository[EventModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, event_id: str) -> EventModel | None:
        stmt = select(EventModel).where(EventModel.id == event_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def slug_exists(self, slug: str) -> bool:
        stmt = select(EventModel.id).where(EventModel.slug == slug)
        return self._session.execute(stmt).first() is not None

    def list_all(self) -> list[EventModel]:
        stmt = select(EventModel).order_by(EventModel.event_date.asc())
        return list(self._session.execute(stmt).scalars().all())

    def list_by_participant(self, user_id: str) -> list[EventModel]:
        stmt = (
            select(EventModel)
            .join(EventParticipantModel, EventParticipantModel.event_id == EventModel.id)
            .where(EventParticipantModel.user_id == user_id)
            .order_by(EventModel.event_date.asc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def delete(self, event_id: str) -> bool:
        self._session.execute(delete(EventParticipantModel).where(EventParticipantModel.event_id == event_id))
        result = self._session.execute(delete(EventModel).where(EventModel.id == event_id))
        return (result.rowcount or 0) > 0

    # -------------------------
    # Participants
    # -------------------------

    def add_participant(self, model: EventParticipantModel) -> EventParticipantModel:
        self._session.add(model)
        self._session.flush()
        return model

    def is_participant(self, *, user_id: str, event_id: str) -> bool:
        stmt = select(EventParticipantModel.id).where(
            EventParticipantModel.user_id == user_id,
            EventParticipantModel.event_id == event_id,
        )
        return self._session.execute(stmt).first() is not None

    def count_participants(self, event_id: str) -> int:
        stmt = select(func.count(EventParticipantModel.id)).where(EventParticipantModel.event_id == event_id)
        return int(self._session.execute(stmt).scalar_one())

    def participant_counts(self) -> dict[str, int]:
        stmt = select(EventParticipantModel.event_id, func.count(EventParticipantModel.id)).group_by(
            EventParticipantModel.event_id
        )
        return {event_id: int(count) for event_id, count in self._session.execute(stmt).all()}
