import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# An access token never outlives the 60 day refresh token
MAX_ACCESS_TOKEN_LIFETIME_SECONDS = 60 * 24 * 60 * 60


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        if not value or not value.strip():
            raise ValueError('Password cannot be empty')
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    # 0 or omitted means the default access token lifetime
    expires_in_seconds: int | None = Field(default=None, ge=0, le=MAX_ACCESS_TOKEN_LIFETIME_SECONDS)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    email: str
    is_chirpy_red: bool


class LoginResponse(UserResponse):
    token: str
    refresh_token: str


class TokenResponse(BaseModel):
    token: str
