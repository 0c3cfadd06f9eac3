from pydantic import Field, field_serializer, field_validator
from datetime import datetime, timezone
from email_validator import EmailNotValidError, validate_email
from typing import Optional

from taskapi.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    email: str
    password: str = Field(min_length=6, max_length=100)
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        # format vérifié, mais l'adresse est stockée telle que saisie
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Invalid email format")
        if len(value) > 100:
            raise ValueError("Email cannot exceed 100 characters")
        return value


class LoginRequest(CamelModel):
    username_or_email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthResponse(CamelModel):
    user_id: int
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    token: str
    expires_at: datetime

    @field_serializer("expires_at")
    def serialize_expires_at(self, value: datetime) -> datetime:
        # stocké en UTC naïf, exposé avec le fuseau
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
