"""
Folio Server - Authentication Utilities

This module provides authentication functionality including:
- JWT token generation and validation
- Authentication dependencies for protected routes
- Permission checks based on the user's role

The signing key is the token_key stored in appsettings.json so tokens
survive a restart.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import joinedload

from models.database import User, Role
from models.auth import TokenData
from models.infrastructure import ServerContext
from dependencies import GetServerContext

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_EXPIRATION_HOURS = 24

# auto_error=False so a missing header is answered with 401 instead of 403
security = HTTPBearer(auto_error=False)


# ==================== JWT Token Functions ====================

def CreateAccessToken(data: dict, secret_key: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token

    Args:
        data: Claims (user_id, username, permissions)
        secret_key: Signing key
        expires_delta: Optional custom expiration time

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=TOKEN_EXPIRATION_HOURS))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def DecodeAccessToken(token: str, secret_key: str) -> TokenData:
    """
    Decode and validate a JWT access token

    Raises:
        HTTPException: If token is invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception

    user_id = payload.get("user_id")
    username = payload.get("username")
    if user_id is None or username is None:
        raise credentials_exception

    return TokenData(user_id=user_id, username=username, permissions=payload.get("permissions", []))


# ==================== Authentication Dependencies ====================

def GetCurrentUser(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    context: ServerContext = Depends(GetServerContext)
) -> User:
    """
    FastAPI dependency to get the current authenticated user
    Validates the JWT token and loads the user with its role and permissions

    Raises:
        HTTPException: 401 if authentication fails
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_data = DecodeAccessToken(credentials.credentials, context.configuration.token_key)

    session = context.db_manager.GetSession()
    try:
        user = (
            session.query(User)
            .options(joinedload(User.role).joinedload(Role.permissions))
            .filter(User.user_id == token_data.user_id)
            .first()
        )

        if user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User account is disabled",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return user

    finally:
        session.close()


# ==================== Authentication Helper Functions ====================

def AuthenticateUser(db_manager, username: str, password: str) -> Optional[dict]:
    """
    Authenticate a user with username and password

    Returns:
        dict: user_id, username, permissions if authentication succeeded, None otherwise
    """
    session = db_manager.GetSession()

    try:
        user = (
            session.query(User)
            .options(joinedload(User.role).joinedload(Role.permissions))
            .filter(User.username == username)
            .first()
        )

        if not user or not user.is_active:
            return None

        if not db_manager.VerifyPassword(password, user.password_hash):
            return None

        user.last_login = datetime.now(timezone.utc)
        session.commit()

        # Plain dict to avoid detached-instance issues after the session closes
        return {
            'user_id': user.user_id,
            'username': user.username,
            'permissions': user.permission_names
        }

    finally:
        session.close()


# ==================== Permission Checking ====================

def UserHasPermission(user: User, permission_name: str) -> bool:
    """
    Check if a user has a specific permission (admin implies every permission)
    """
    permissions = user.permission_names
    return 'admin' in permissions or permission_name in permissions


def RequirePermission(permission_name: str):
    """
    Dependency factory to create a permission checking dependency

    Usage:
        @router.post("/something")
        async def some_endpoint(user: User = Depends(RequirePermission("can_download"))):
            ...
    """
    def permission_checker(current_user: User = Depends(GetCurrentUser)) -> User:
        if not UserHasPermission(current_user, permission_name):
            logger.warning(f"User '{current_user.username}' denied, requires '{permission_name}'")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied. Required permission: {permission_name}"
            )
        return current_user

    return permission_checker


RequireAdmin = RequirePermission("admin")
