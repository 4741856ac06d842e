# terra_server/repositories/user_repository.py

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from terra_server.core.base_repository import BaseRepository
from terra_server.core.utils import utcnow
from terra_server.entities.user import AuthMethod
from terra_server.infrastructure.database.models.user_model import UserModel


class UserRepository(BaseRepository[UserModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_email(self, email: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.email == email)
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_id(self, user_id: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def update_password_for_email_account(self, *, email: str, password_hash: str) -> bool:
        # scoped to email accounts: a reset token can never touch a google account
        stmt = (
            update(UserModel)
            .where(UserModel.email == email, UserModel.auth_method == AuthMethod.EMAIL.value)
            .values(password_hash=password_hash, updated_at=utcnow())
        )
        result = self._session.execute(stmt)
        return (result.rowcount or 0) > 0
