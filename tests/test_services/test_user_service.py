import unittest
from unittest.mock import MagicMock, patch
import bcrypt

from common.services.user_service import UserService
from common.models.users import User, UserRole
from common.utils.custom_exceptions import (
    IncorrectCredentials,
    NotFoundException,
    UserAlreadyExists,
)


class TestUserService(unittest.TestCase):

    def setUp(self):
        self.repo = MagicMock()
        self.service = UserService(self.repo)

        self.user = User(
            user_id="u1",
            username="frontdesk",
            password=bcrypt.hashpw(b"Secret-Pass-123", bcrypt.gensalt()).decode(),
            role=UserRole.STAFF,
        )

    def test_get_user_by_username_not_found(self):
        self.repo.get_by_username.return_value = None

        with self.assertRaises(NotFoundException):
            self.service.get_user_by_username("ghost")

    @patch("common.services.user_service.create_jwt", return_value="token")
    def test_login_success(self, mock_jwt):
        self.repo.get_by_username.return_value = self.user

        token = self.service.login("frontdesk", "Secret-Pass-123")

        self.assertEqual(token, "token")
        mock_jwt.assert_called_once_with("u1", "frontdesk", "STAFF")

    def test_login_wrong_password(self):
        self.repo.get_by_username.return_value = self.user

        with self.assertRaises(IncorrectCredentials):
            self.service.login("frontdesk", "wrong")

    def test_add_operator_hashes_password(self):
        self.repo.get_by_username.return_value = None

        user = self.service.add_operator("manager1", "Secret-Pass-123", UserRole.MANAGER)

        self.repo.add_user.assert_called_once_with(user)
        self.assertNotEqual(user.password, "Secret-Pass-123")
        self.assertTrue(bcrypt.checkpw(b"Secret-Pass-123", user.password.encode()))
        self.assertEqual(user.role, UserRole.MANAGER)

    def test_add_operator_duplicate(self):
        self.repo.get_by_username.return_value = self.user

        with self.assertRaises(UserAlreadyExists):
            self.service.add_operator("frontdesk", "Secret-Pass-123")
        self.repo.add_user.assert_not_called()


if __name__ == "__main__":
    unittest.main()
