# terra_server/repositories/donation_repository.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from terra_server.core.base_repository import BaseRepository
from terra_server.infrastructure.database.models.donation_model import DonationModel


class DonationRepository(BaseRepository[DonationModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, donation_id: str) -> DonationModel | None:
        stmt = select(DonationModel).where(DonationModel.id == donation_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_by_user(self, user_id: str) -> list[DonationModel]:
        stmt = select(DonationModel).where(DonationModel.user_id == user_id).order_by(DonationModel.created_at.desc())
        return list(self._session.execute(stmt).scalars().all())

    def list_all(self) -> list[DonationModel]:
        stmt = select(DonationModel).order_by(DonationModel.created_at.desc())
        return list(self._session.execute(stmt).scalars().all())
