# terra_server/services/user_service.py

from terra_server.core.exceptions import NotFoundError
from terra_server.core.storage_errors import wraps_storage_errors
from terra_server.entities.user import User
from terra_server.repositories.user_repository import UserRepository


class UserService:
    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    @wraps_storage_errors("get user")
    def get_user(self, user_id: str) -> User:
        user = self._user_repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return User.from_model(user)
