# terra_server/infrastructure/database/models/donation_model.py

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from terra_server.infrastructure.database.base_model import BaseModel


class DonationModel(BaseModel):
    __tablename__ = "donations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    program_id: Mapped[str] = mapped_column(String(36), ForeignKey("programs.id"), nullable=False)

    amount: Mapped[float] = mapped_column(Numeric(15, 2, asdecimal=False), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    proof_image: Mapped[str] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
