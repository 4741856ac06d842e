# terra_server/api/schemas/user_schema.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from terra_server.api.schemas.auth_schema import TokenPairResponse


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    role: str
    auth_method: str
    created_at: datetime
    updated_at: datetime


class GoogleCallbackResponse(TokenPairResponse):
    user: UserResponse
