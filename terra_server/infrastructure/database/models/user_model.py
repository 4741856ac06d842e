# terra_server/infrastructure/database/models/user_model.py

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from terra_server.infrastructure.database.base_model import BaseModel


class UserModel(BaseModel):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)

    # NULL for google accounts
    password_hash: Mapped[str] = mapped_column(Text, nullable=True)

    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    auth_method: Mapped[str] = mapped_column(String(20), nullable=False, default="email")

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
