# terra_server/api/schemas/program_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateProgramRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    image_url: Optional[str] = Field(default=None, max_length=500)
    target_amount: float = Field(gt=0)


class UpdateProgramRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    image_url: Optional[str] = Field(default=None, max_length=500)
    target_amount: Optional[float] = Field(default=None, gt=0)


class ProgramResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    image_url: Optional[str] = None
    target_amount: float
    created_at: datetime
    updated_at: datetime
