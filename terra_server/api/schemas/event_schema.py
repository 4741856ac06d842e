# terra_server/api/schemas/event_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from terra_server.services.event_service import EventView


class CreateEventRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    event_date: datetime
    location: str = Field(min_length=1, max_length=255)
    quota: int = Field(gt=0)
    image_url: Optional[str] = Field(default=None, max_length=500)


class UpdateEventRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    event_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    quota: Optional[int] = Field(default=None, gt=0)
    image_url: Optional[str] = Field(default=None, max_length=500)


class EventResponse(BaseModel):
    id: str
    title: str
    slug: str
    description: str
    image_url: Optional[str] = None
    event_date: datetime
    location: str
    quota: int
    participants: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, event, *, participants: int | None = None) -> "EventResponse":
        return cls(
            id=event.id,
            title=event.title,
            slug=event.slug,
            description=event.description,
            image_url=event.image_url,
            event_date=event.event_date,
            location=event.location,
            quota=event.quota,
            participants=participants,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

    @classmethod
    def from_view(cls, view: EventView) -> "EventResponse":
        return cls.from_model(view.event, participants=view.participants)
