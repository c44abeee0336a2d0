"""
Folio Server - API Models Package

This package contains Pydantic models for all API endpoints.
"""

from models.api.settings import ServerSettingDto
from models.api.email import TestEmailRequest, EmailTestResult

__all__ = [
    'ServerSettingDto',
    'TestEmailRequest',
    'EmailTestResult',
]
