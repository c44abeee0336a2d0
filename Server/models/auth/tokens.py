"""
Folio Server - Authentication Models

Pydantic models for the login endpoint and the claims carried by JWT tokens.
"""

from typing import List
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    """Bearer token handed to the web UI after a successful login"""
    token: str
    expires_in: int  # Seconds until token expiration
    username: str
    is_admin: bool = False


class TokenData(BaseModel):
    """Claims decoded from a bearer token"""
    user_id: int
    username: str
    permissions: List[str] = Field(default_factory=list)
