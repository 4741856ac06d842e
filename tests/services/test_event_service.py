"""Tests for events and event participation."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from conftest import add_user
from terra_server.core.exceptions import BadRequestError, ConflictError, NotFoundError
from terra_server.core.utils import new_id, utcnow
from terra_server.infrastructure.database.models import EventModel
from terra_server.repositories.event_repository import EventRepository
from terra_server.services.event_service import EventService


@pytest.fixture
def service(session):
    return EventService(EventRepository(session))


def _create(service, *, title="Beach Cleanup", quota=2, days=7, description="Bring gloves", location="Kuta"):
    return service.create_event(
        title=title,
        description=description,
        event_date=utcnow() + timedelta(days=days),
        location=location,
        quota=quota,
    )


class TestCreate:
    def test_generates_slug(self, service):
        view = _create(service, title="Beach Cleanup 2030!")
        assert view.event.slug == "beach-cleanup-2030"
        assert view.participants == 0

    def test_slug_collision_gets_suffix(self, service):
        first = _create(service)
        second = _create(service)
        assert first.event.slug == "beach-cleanup"
        assert second.event.slug.startswith("beach-cleanup-")
        assert len(second.event.slug) == len("beach-cleanup-") + 8

    def test_date_in_past(self, service):
        with pytest.raises(BadRequestError):
            _create(service, days=-1)

    def test_quota_must_be_positive(self, service):
        with pytest.raises(BadRequestError):
            _create(service, quota=0)

    def test_title_without_slug_characters(self, service):
        with pytest.raises(BadRequestError):
            _create(service, title="!!!")

    @pytest.mark.parametrize("field", ["description", "location"])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_text_rejected(self, service, field, value):
        with pytest.raises(BadRequestError, match="cannot be empty"):
            _create(service, **{field: value})

    def test_text_is_trimmed(self, service):
        view = _create(service, description="  Bring gloves \n", location=" Kuta ")
        assert view.event.description == "Bring gloves"
        assert view.event.location == "Kuta"


class TestJoin:
    def test_join_and_count(self, service, session):
        event = _create(service).event
        user = add_user(session, email="u1@example.com")

        service.join_event(event_id=event.id, user_id=user.id)

        assert service.get_event(event.id).participants == 1
        mine = service.my_events(user.id)
        assert [v.event.id for v in mine] == [event.id]
        assert mine[0].participants == 1

    def test_my_events_counts_every_participant(self, service, session):
        event = _create(service, quota=5).event
        me = add_user(session, email="me@example.com")
        for i in range(2):
            service.join_event(event_id=event.id, user_id=add_user(session, email=f"o{i}@example.com").id)
        service.join_event(event_id=event.id, user_id=me.id)

        [view] = service.my_events(me.id)
        assert view.participants == 3

    def test_join_twice(self, service, session):
        event = _create(service).event
        user = add_user(session, email="u1@example.com")
        service.join_event(event_id=event.id, user_id=user.id)

        with pytest.raises(ConflictError):
            service.join_event(event_id=event.id, user_id=user.id)

    def test_quota_full(self, service, session):
        event = _create(service, quota=1).event
        first = add_user(session, email="u1@example.com")
        second = add_user(session, email="u2@example.com")
        service.join_event(event_id=event.id, user_id=first.id)

        with pytest.raises(BadRequestError, match="full"):
            service.join_event(event_id=event.id, user_id=second.id)

    def test_past_event(self, service, session):
        now = utcnow()
        past = EventModel(
            id=new_id(),
            title="Old",
            slug="old",
            description="",
            image_url=None,
            event_date=now - timedelta(days=1),
            location="x",
            quota=10,
            created_at=now,
            updated_at=now,
        )
        session.add(past)
        session.flush()
        user = add_user(session, email="u1@example.com")

        with pytest.raises(BadRequestError):
            service.join_event(event_id=past.id, user_id=user.id)

    def test_unknown_event(self, service):
        with pytest.raises(NotFoundError):
            service.join_event(event_id=new_id(), user_id=new_id())

    def test_malformed_event_id(self, service):
        with pytest.raises(BadRequestError):
            service.join_event(event_id="nope", user_id=new_id())

    def test_unique_constraint_race_is_conflict(self):
        event = MagicMock(id=new_id(), quota=10, event_date=utcnow() + timedelta(days=1))
        repo = MagicMock()
        repo.get_by_id.return_value = event
        repo.is_participant.return_value = False
        repo.count_participants.return_value = 0
        repo.add_participant.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

        with pytest.raises(ConflictError):
            EventService(repo).join_event(event_id=event.id, user_id=new_id())


class TestUpdateAndDelete:
    def test_quota_not_below_participants(self, service, session):
        event = _create(service, quota=3).event
        for i in range(2):
            service.join_event(event_id=event.id, user_id=add_user(session, email=f"u{i}@example.com").id)

        with pytest.raises(BadRequestError):
            service.update_event(event.id, quota=1)

        assert service.update_event(event.id, quota=2).event.quota == 2

    def test_retitle_reslugs(self, service):
        event = _create(service).event
        updated = service.update_event(event.id, title="River Cleanup")
        assert updated.event.slug == "river-cleanup"

    @pytest.mark.parametrize("field", ["description", "location", "title"])
    def test_update_rejects_blank_text(self, service, field):
        event = _create(service).event
        with pytest.raises(BadRequestError, match="cannot be empty"):
            service.update_event(event.id, **{field: "  "})
        assert service.get_event(event.id).event.location == "Kuta"

    def test_delete_removes_participants(self, service, session):
        event = _create(service).event
        user = add_user(session, email="u1@example.com")
        service.join_event(event_id=event.id, user_id=user.id)

        service.delete_event(event.id)

        with pytest.raises(NotFoundError):
            service.get_event(event.id)
        assert service.my_events(user.id) == []

    def test_delete_unknown(self, service):
        with pytest.raises(NotFoundError):
            service.delete_event(new_id())

    def test_list_orders_by_date_with_counts(self, service, session):
        later = _create(service, title="Later", days=10).event
        sooner = _create(service, title="Sooner", days=2).event
        service.join_event(event_id=later.id, user_id=add_user(session, email="u1@example.com").id)

        views = service.list_events()

        assert [v.event.id for v in views] == [sooner.id, later.id]
        assert [v.participants for v in views] == [0, 1]
