import uuid
import bcrypt
from common.models.users import User, UserRole
from common.repository.user_repo import UserRepository
from common.utils.custom_exceptions import (
    IncorrectCredentials,
    NotFoundException,
    UserAlreadyExists,
)
from common.utils.jwt_service import create_jwt


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def get_user_by_username(self, username: str) -> User:
        user = self.user_repo.get_by_username(username=username)
        if user is None:
            raise NotFoundException(resource="user", identifier=username, status_code=404)
        return user

    def login(self, username: str, password: str) -> str:
        user = self.get_user_by_username(username)

        if not bcrypt.checkpw(
            password.encode("utf-8"),
            user.password.encode("utf-8"),
        ):
            raise IncorrectCredentials("Invalid username or password")

        return create_jwt(user.user_id, user.username, user.role.value)

    def add_operator(self, username: str, password: str, role: UserRole = UserRole.STAFF) -> User:
        if self.user_repo.get_by_username(username=username):
            raise UserAlreadyExists(f"username '{username}' is already in use")

        user = User(
            user_id=str(uuid.uuid4()),
            username=username,
            password=self._hash_password(password),
            role=role,
        )
        self.user_repo.add_user(user)
        return user

    def _hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
