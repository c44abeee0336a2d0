"""
Folio Server - Auth Models Package

This package contains Pydantic models for authentication endpoints.
"""

from models.auth.tokens import LoginRequest, LoginResponse, TokenData

__all__ = [
    'LoginRequest',
    'LoginResponse',
    'TokenData',
]
