# terra_server/api/schemas/donation_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from terra_server.entities.statuses import DonationStatus


class CreateDonationRequest(BaseModel):
    program_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    payment_method: str = Field(min_length=1, max_length=50)
    proof_image: Optional[str] = Field(default=None, max_length=500)


class UpdateDonationStatusRequest(BaseModel):
    status: DonationStatus


class DonationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    program_id: str
    amount: float
    payment_method: str
    status: str
    proof_image: Optional[str] = None
    created_at: datetime
    updated_at: datetime
