from pydantic import BaseModel, EmailStr, field_validator, model_validator
from typing import Optional


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SignUpRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def normalize_blank(cls, value):
        return _blank_to_none(value)

    @model_validator(mode="after")
    def require_credentials(self):
        if not self.email or not self.password:
            raise ValueError("Email and password are required")
        return self


class SignInRequest(SignUpRequest):
    pass


class VerifyEmailRequest(BaseModel):
    token: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("token", "email", mode="before")
    @classmethod
    def normalize_blank(cls, value):
        return _blank_to_none(value)

    @model_validator(mode="after")
    def require_token_and_email(self):
        if not self.token or not self.email:
            raise ValueError("Token and email are required")
        return self


class AuthUser(BaseModel):
    id: str
    email: Optional[str] = None
    email_confirmed: bool


class SignUpResponse(BaseModel):
    message: str
    user: AuthUser


class VerifyEmailResponse(BaseModel):
    message: str
    user: AuthUser


class SignInUser(BaseModel):
    id: str
    email: Optional[str] = None
    tokens_used_today: int
    daily_token_limit: int
    plan_name: str
    last_usage_date: Optional[str] = None


class SignInResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: SignInUser
