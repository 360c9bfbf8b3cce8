"""
Notekeeper Backend - Authentication Schemas
=============================================

What:  Request and response bodies for POST /api/register and POST /api/login.

The user representation deliberately has no password field: UserResponse is
built from the ORM User with `from_attributes`, and only the listed fields
are copied.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Email/password pair submitted to register or log in."""
    email: Optional[str] = Field(default=None, description="Account email (case-sensitive)")
    password: Optional[str] = Field(default=None, description="Account password")


class UserResponse(BaseModel):
    """Public view of a user account."""
    id: uuid.UUID = Field(description="Opaque user identifier")
    email: str = Field(description="Account email")
    created_at: datetime = Field(description="When the account was registered (UTC)")

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """
    What:  Result of a successful register or login.
    How:   The client stores `token` and sends it back as
           `Authorization: Bearer <token>` on every notes call.
    """
    user: UserResponse
    token: str = Field(description="Signed session token")
