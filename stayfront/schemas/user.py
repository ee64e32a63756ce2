"""
Pydantic schemas for users and the auth endpoints of the marketplace API.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    id: int
    email: str
    name: str = ""


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    """Body of a successful /auth/login or /auth/register call."""

    user: User
    token: Optional[str] = None
