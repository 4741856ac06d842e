# terra_server/services/volunteer_service.py

from dataclasses import dataclass
from datetime import date

from terra_server.core.exceptions import BadRequestError, ConflictError, NotFoundError
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.core.utils import ensure_uuid, new_id, utcnow
from terra_server.entities.statuses import ApplicationStatus, Gender
from terra_server.infrastructure.database.models.volunteer_model import VolunteerModel
from terra_server.repositories.volunteer_repository import VolunteerRepository

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

_STATUSES = {s.value for s in ApplicationStatus}
_GENDERS = {g.value for g in Gender}


@dataclass(frozen=True)
class VolunteerPage:
    items: list[VolunteerModel]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit


def _require_text(value: str | None, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise BadRequestError(f"{field} cannot be empty")
    return value


class VolunteerService:
    def __init__(self, volunteer_repository: VolunteerRepository) -> None:
        self._volunteer_repository = volunteer_repository

    @wraps_storage_errors("submit volunteer application")
    def submit_application(
        self,
        *,
        user_id: str,
        full_name: str,
        email: str,
        phone: str,
        date_of_birth: date,
        gender: str,
        city: str,
        occupation: str,
        interests: str,
        experience: str | None = None,
    ) -> VolunteerModel:
        if gender not in _GENDERS:
            raise BadRequestError("Gender must be either Male or Female")

        if self._volunteer_repository.has_pending_application(user_id):
            raise ConflictError("You already have a pending volunteer application")

        now = utcnow()
        model = VolunteerModel(
            id=new_id(),
            user_id=user_id,
            full_name=_require_text(full_name, "Full name"),
            email=_require_text(email, "Email").lower(),
            phone=_require_text(phone, "Phone"),
            date_of_birth=date_of_birth,
            gender=gender,
            city=_require_text(city, "City"),
            occupation=_require_text(occupation, "Occupation"),
            interests=_require_text(interests, "Interests"),
            experience=(experience or "").strip() or None,
            status=ApplicationStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        return self._volunteer_repository.add(model)

    @wraps_storage_errors("list volunteers")
    def list_applications(
        self,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_LIMIT,
        status: str | None = None,
    ) -> VolunteerPage:
        if page < 1:
            raise BadRequestError("Page must be greater than 0")
        if limit < 1 or limit > MAX_PAGE_LIMIT:
            raise BadRequestError(f"Limit must be between 1 and {MAX_PAGE_LIMIT}")
        if status and status not in _STATUSES:
            raise BadRequestError("Invalid status")

        items, total = self._volunteer_repository.list_page(
            limit=limit,
            offset=(page - 1) * limit,
            status=status or None,
        )
        return VolunteerPage(items=items, total=total, page=page, limit=limit)

    @wraps_storage_errors("get volunteer")
    def get_application(self, volunteer_id: str) -> VolunteerModel:
        volunteer = self._volunteer_repository.get_by_id(ensure_uuid(volunteer_id, label="volunteer"))
        if volunteer is None:
            raise NotFoundError("Volunteer not found")
        return volunteer

    @wraps_storage_errors("update volunteer status")
    def update_status(self, volunteer_id: str, *, status: str) -> VolunteerModel:
        if status not in _STATUSES:
            raise BadRequestError("Status must be one of: pending, approved, rejected")

        volunteer = self.get_application(volunteer_id)
        volunteer.status = status
        volunteer.updated_at = utcnow()
        self._volunteer_repository.flush()
        return volunteer
