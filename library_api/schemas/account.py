"""
Account Pydantic Schemas

Schemas:
- RegisterRequest: email + password with strength validation
- LoginRequest: email + password (no strength check; it only has to match)
- AdminChangeRequest: target account for granting/revoking admin
- AuthResponse: issued bearer token and its expiry
"""

import re
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


class LoginRequest(BaseModel):
    """Credentials used to sign in."""

    email: EmailStr = Field(
        ...,
        description="Account email address",
        examples=["reader@example.com"],
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Account password",
    )


class RegisterRequest(LoginRequest):
    """
    Schema for account registration.

    Password Requirements:
    - At least 8 characters
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 number
    """

    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (min 8 chars, must include uppercase and number)",
        examples=["SecurePass123"],
    )

    @field_validator("password")
    @classmethod
    def password_must_be_strong(cls, v: str) -> str:
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one number")
        return v


class AdminChangeRequest(BaseModel):
    """Account whose admin flag is being changed."""

    email: EmailStr = Field(
        ...,
        description="Email of the account to change",
        examples=["editor@example.com"],
    )


class AuthResponse(BaseModel):
    """
    Issued access token.

    Usage:
        Authorization: Bearer <access_token>
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="When the token expires (UTC)")
