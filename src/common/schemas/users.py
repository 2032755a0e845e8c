import re
from pydantic import BaseModel, Field, field_validator
from common.models.users import UserRole

PASSWORD_REGEX = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^A-Za-z0-9]).{12,}$")


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("username", "password", mode="before")
    @classmethod
    def strip(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class OperatorRequest(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    password: str
    role: UserRole = UserRole.STAFF

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("role", mode="before")
    @classmethod
    def upper_role(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str):
        if not PASSWORD_REGEX.fullmatch(v):
            raise ValueError(
                "Password must be at least 12 characters long and contain "
                "uppercase, lowercase, digit, and special character"
            )
        return v
