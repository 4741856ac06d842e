# terra_server/infrastructure/database/models/__init__.py
# Registers every mapped class on BaseModel.metadata.

from terra_server.infrastructure.database.models.user_model import UserModel
from terra_server.infrastructure.database.models.refresh_token_model import RefreshTokenModel
from terra_server.infrastructure.database.models.program_model import ProgramModel
from terra_server.infrastructure.database.models.article_model import ArticleModel
from terra_server.infrastructure.database.models.event_model import EventModel, EventParticipantModel
from terra_server.infrastructure.database.models.volunteer_model import VolunteerModel
from terra_server.infrastructure.database.models.donation_model import DonationModel

__all__ = [
    "UserModel",
    "RefreshTokenModel",
    "ProgramModel",
    "ArticleModel",
    "EventModel",
    "EventParticipantModel",
    "VolunteerModel",
    "DonationModel",
]
