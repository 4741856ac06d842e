# terra_server/api/schemas/volunteer_schema.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from terra_server.entities.statuses import ApplicationStatus, Gender


class VolunteerApplyRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=150)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=30)
    date_of_birth: date
    gender: Gender
    city: str = Field(min_length=1, max_length=100)
    occupation: str = Field(min_length=1, max_length=100)
    interests: str = Field(min_length=1)
    experience: Optional[str] = None


class VolunteerListQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    status: Optional[ApplicationStatus] = None


class UpdateVolunteerStatusRequest(BaseModel):
    status: ApplicationStatus


class VolunteerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    full_name: str
    email: str
    phone: str
    date_of_birth: date
    gender: str
    city: str
    occupation: str
    interests: str
    experience: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class VolunteerListResponse(BaseModel):
    items: list[VolunteerResponse]
    total: int
    page: int
    limit: int
    total_pages: int
