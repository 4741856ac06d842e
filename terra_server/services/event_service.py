# terra_server/services/event_service.py

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError

from terra_server.core.exceptions import BadRequestError, ConflictError, NotFoundError
from terra_server.core.logging import get_logger
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.core.utils import (
    ensure_uuid,
    generate_slug,
    new_id,
    require_text,
    to_naive_utc,
    utcnow,
    with_slug_suffix,
)
from terra_server.infrastructure.database.models.event_model import EventModel, EventParticipantModel
from terra_server.repositories.event_repository import EventRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class EventView:
    event: EventModel
    participants: int


class EventService:
    def __init__(self, event_repository: EventRepository) -> None:
        self._event_repository = event_repository

    def _slug_for(self, title: str, *, current: str | None = None) -> str:
        slug = generate_slug(title)
        if not slug:
            raise BadRequestError("Title must contain letters or digits")
        if slug != current and self._event_repository.slug_exists(slug):
            slug = with_slug_suffix(slug)
        return slug

    def _get_model(self, event_id: str) -> EventModel:
        event = self._event_repository.get_by_id(ensure_uuid(event_id, label="event"))
        if event is None:
            raise NotFoundError("Event not found")
        return event

    @wraps_storage_errors("create event")
    def create_event(
        self,
        *,
        title: str,
        description: str,
        event_date: datetime,
        location: str,
        quota: int,
        image_url: str | None = None,
    ) -> EventView:
        title = require_text(title, "Title")
        description = require_text(description, "Description")
        location = require_text(location, "Location")
        if quota is None or quota <= 0:
            raise BadRequestError("Quota must be greater than 0")

        event_date = to_naive_utc(event_date)
        now = utcnow()
        if event_date <= now:
            raise BadRequestError("Event date must be in the future")

        model = EventModel(
            id=new_id(),
            title=title,
            slug=self._slug_for(title),
            description=description,
            image_url=image_url,
            event_date=event_date,
            location=location,
            quota=quota,
            created_at=now,
            updated_at=now,
        )
        self._event_repository.add(model)
        return EventView(event=model, participants=0)

    @wraps_storage_errors("list events")
    def list_events(self) -> list[EventView]:
        events = self._event_repository.list_all()
        counts = self._event_repository.participant_counts()
        return [EventView(event=e, participants=counts.get(e.id, 0)) for e in events]

    @wraps_storage_errors("get event")
    def get_event(self, event_id: str) -> EventView:
        event = self._get_model(event_id)
        return EventView(event=event, participants=self._event_repository.count_participants(event.id))

    @wraps_storage_errors("update event")
    def update_event(
        self,
        event_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
        event_date: datetime | None = None,
        location: str | None = None,
        quota: int | None = None,
        image_url: str | None = None,
    ) -> EventView:
        event = self._get_model(event_id)
        participants = self._event_repository.count_participants(event.id)

        if title is not None:
            title = require_text(title, "Title")
            if title != event.title:
                event.slug = self._slug_for(title, current=event.slug)
            event.title = title
        if description is not None:
            event.description = require_text(description, "Description")
        if event_date is not None:
            event.event_date = to_naive_utc(event_date)
        if location is not None:
            event.location = require_text(location, "Location")
        if quota is not None:
            if quota <= 0:
                raise BadRequestError("Quota must be greater than 0")
            if quota < participants:
                raise BadRequestError(f"Quota cannot be lower than current participants ({participants})")
            event.quota = quota
        if image_url is not None:
            event.image_url = image_url

        event.updated_at = utcnow()
        self._event_repository.flush()
        return EventView(event=event, participants=participants)

    @wraps_storage_errors("delete event")
    def delete_event(self, event_id: str) -> None:
        ok = self._event_repository.delete(ensure_uuid(event_id, label="event"))
        if not ok:
            raise NotFoundError("Event not found")

    @wraps_storage_errors("join event")
    def join_event(self, *, event_id: str, user_id: str) -> None:
        event = self._get_model(event_id)

        if event.event_date < utcnow():
            raise BadRequestError("Cannot join an event that has already happened")
        if self._event_repository.is_participant(user_id=user_id, event_id=event.id):
            raise ConflictError("You have already joined this event")
        if self._event_repository.count_participants(event.id) >= event.quota:
            raise BadRequestError("Event quota is full")

        try:
            self._event_repository.add_participant(
                EventParticipantModel(
                    id=new_id(),
                    user_id=user_id,
                    event_id=event.id,
                    joined_at=utcnow(),
                )
            )
        except IntegrityError as e:
            raise ConflictError("You have already joined this event") from e

        logger.info("event_joined", event_id=event.id, user_id=user_id)

    @wraps_storage_errors("list joined events")
    def my_events(self, user_id: str) -> list[EventView]:
        events = self._event_repository.list_by_participant(user_id)
        counts = self._event_repository.participant_counts()
        return [EventView(event=e, participants=counts.get(e.id, 0)) for e in events]
