from enum import Enum
from dataclasses import dataclass


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STAFF = "STAFF"


@dataclass
class User:
    user_id: str
    username: str
    password: str
    role: UserRole = UserRole.STAFF
