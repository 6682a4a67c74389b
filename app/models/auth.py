"""Auth session model definitions."""
from typing import Optional

from pydantic import BaseModel, Field


class AuthTokens(BaseModel):
    """Bearer tokens issued by the auth backend."""

    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")
    token_type: str = Field("Bearer", alias="tokenType")

    model_config = {"populate_by_name": True}


class AuthUser(BaseModel):
    """Authenticated staff member."""

    id: str
    username: str
    email: Optional[str] = None
    role: str

    model_config = {"populate_by_name": True, "coerce_numbers_to_str": True}


class Session(BaseModel):
    """Tokens and user kept between requests."""

    tokens: AuthTokens
    user: Optional[AuthUser] = None


class LoginRequest(BaseModel):
    """Login request model."""

    login: str
    password: str
