# terra_server/repositories/refresh_token_repository.py

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from terra_server.core.base_repository import BaseRepository
from terra_server.core.utils import utcnow
from terra_server.infrastructure.database.models.refresh_token_model import RefreshTokenModel


class RefreshTokenRepository(BaseRepository[RefreshTokenModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_active_by_hash(self, token_hash: str, *, now: datetime) -> RefreshTokenModel | None:
        stmt = select(RefreshTokenModel).where(
            RefreshTokenModel.token_hash == token_hash,
            RefreshTokenModel.revoked_at.is_(None),
            RefreshTokenModel.expires_at > now,
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def revoke_by_hash(self, token_hash: str, *, reason: str | None = None) -> bool:
        stmt = (
            update(RefreshTokenModel)
            .where(RefreshTokenModel.token_hash == token_hash, RefreshTokenModel.revoked_at.is_(None))
            .values(revoked_at=utcnow(), reason=reason)
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0
