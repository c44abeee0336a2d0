"""
Folio Server - Authentication Endpoints

This module contains the login endpoint that issues JWT bearer tokens.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from models.auth import LoginRequest, LoginResponse
from models.infrastructure import ServerContext
from auth import AuthenticateUser, CreateAccessToken, TOKEN_EXPIRATION_HOURS
from dependencies import GetServerContext


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(login_request: LoginRequest, context: ServerContext = Depends(GetServerContext)):
    """
    Authenticate user and return JWT token

    Args:
        login_request: Username and password

    Returns:
        LoginResponse: JWT token and expiration time

    Raises:
        HTTPException: If credentials are invalid
    """
    user_data = AuthenticateUser(context.db_manager, login_request.username, login_request.password)

    if not user_data:
        logger.warning(f"Failed login attempt for '{login_request.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = CreateAccessToken(user_data, context.configuration.token_key)

    logger.info(f"User '{user_data['username']}' logged in successfully")

    return LoginResponse(
        token=access_token,
        expires_in=TOKEN_EXPIRATION_HOURS * 3600,
        username=user_data['username'],
        is_admin='admin' in user_data['permissions']
    )
