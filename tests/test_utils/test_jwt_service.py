import unittest
from unittest.mock import patch
import jwt

from common.utils import jwt_service


class TestJwtService(unittest.TestCase):
    @patch.object(jwt_service, "SECRET_KEY", "testsecret")
    def test_create_jwt_claims(self):
        token = jwt_service.create_jwt("u1", "frontdesk", "STAFF")

        claims = jwt.decode(token, "testsecret", algorithms=["HS256"])
        self.assertEqual("u1", claims["user_id"])
        self.assertEqual("frontdesk", claims["username"])
        self.assertEqual("STAFF", claims["role"])
        self.assertIn("exp", claims)

    @patch.object(jwt_service, "SECRET_KEY", None)
    def test_missing_secret(self):
        with self.assertRaises(RuntimeError):
            jwt_service.create_jwt("u1", "frontdesk", "STAFF")


if __name__ == "__main__":
    unittest.main()
