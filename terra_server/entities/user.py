# terra_server/entities/user.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class AuthMethod(str, Enum):
    EMAIL = "email"
    GOOGLE = "google"


@dataclass(frozen=True)
class User:
    """Public view of a user record. Never carries the password hash."""

    id: str
    full_name: str
    email: str
    role: str
    auth_method: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, model) -> "User":
        return cls(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            role=model.role,
            auth_method=model.auth_method,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
