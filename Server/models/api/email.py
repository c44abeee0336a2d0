"""
Folio Server - Email API Models

Pydantic models for the email relay connectivity test.
"""

from typing import Optional
from pydantic import BaseModel


class TestEmailRequest(BaseModel):
    """Request model for POST /api/settings/test-email-url"""
    url: str


class EmailTestResult(BaseModel):
    """Outcome of an email relay connectivity check"""
    successful: bool
    error_message: Optional[str] = None
    email_address: Optional[str] = None
