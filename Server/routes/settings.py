"""
Folio Server - Settings Endpoints

Read and update server settings, reset individual settings to their
defaults, test the email relay and list the static option values used by
the settings page.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from auth import RequireAdmin
from dependencies import GetServerContext
from exceptions import FolioSettingsError
from managers.unit_of_work import UnitOfWork
from models.api import ServerSettingDto, TestEmailRequest, EmailTestResult
from models.database import User
from models.enums import ServerSettingKey, LibraryType, LogLevel
from models.infrastructure import ServerContext
from settings_reconciler import SettingsReconciler
import task_frequencies

# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter(prefix="/api/settings", tags=["Settings"])


# ==================== Helper Functions ====================

def _ToHttpError(context: ServerContext, user: User, error: FolioSettingsError) -> HTTPException:
    """Translate a settings error for the calling user"""
    message = context.localization.Translate(user.user_id, error.message_key, *error.args_for_message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _GetSnapshot(context: ServerContext) -> ServerSettingDto:
    with UnitOfWork(context.db_manager) as uow:
        return uow.settings.GetSettingsDto()


# ==================== Public Endpoints ====================

@router.get("/base-url", response_model=str)
async def get_base_url(context: ServerContext = Depends(GetServerContext)):
    """
    Get the base URL the web UI is served under

    Returns:
        str: Base URL, always starting and ending with '/'
    """
    return _GetSnapshot(context).base_url


@router.get("/opds-enabled", response_model=bool)
async def get_opds_enabled(context: ServerContext = Depends(GetServerContext)):
    """Whether the OPDS feed is enabled"""
    return _GetSnapshot(context).enable_opds


# ==================== Admin Settings Management ====================

@router.get("", response_model=ServerSettingDto)
async def get_settings(
    current_user: User = Depends(RequireAdmin),
    context: ServerContext = Depends(GetServerContext)
):
    """
    Get current server settings

    Returns:
        ServerSettingDto: Snapshot of every setting
    """
    return _GetSnapshot(context)


@router.post("", response_model=ServerSettingDto)
async def update_settings(
    desired: ServerSettingDto,
    current_user: User = Depends(RequireAdmin),
    context: ServerContext = Depends(GetServerContext)
):
    """
    Update server settings

    Args:
        desired: Full desired settings state

    Returns:
        ServerSettingDto: Persisted settings, or the request unchanged when nothing differed

    Raises:
        HTTPException: 400 with a localized message on validation, permission or save failures
    """
    logger.info(f"{current_user.username} is updating Server Settings")

    try:
        result = SettingsReconciler(context).Reconcile(desired)
    except FolioSettingsError as e:
        logger.warning(f"Settings update by {current_user.username} rejected: {e.message_key}")
        raise _ToHttpError(context, current_user, e)

    if result.bookmark_migration_succeeded is False:
        logger.warning("Settings saved but bookmarks could not be moved to the new directory")

    return result.settings


@router.post("/reset", response_model=ServerSettingDto)
async def reset_settings(
    current_user: User = Depends(RequireAdmin),
    context: ServerContext = Depends(GetServerContext)
):
    """Restore every setting to its default"""
    logger.info(f"{current_user.username} is resetting Server Settings")

    try:
        return SettingsReconciler(context).ResetSettings().settings
    except FolioSettingsError as e:
        raise _ToHttpError(context, current_user, e)


@router.post("/reset-ip-addresses", response_model=ServerSettingDto)
async def reset_ip_addresses(
    current_user: User = Depends(RequireAdmin),
    context: ServerContext = Depends(GetServerContext)
):
    """Restore the IP address allowlist to its default"""
    logger.info(f"{current_user.username} is resetting IP Addresses Setting")

    try:
        return SettingsReconciler(context).ResetIpAddresses()
    except FolioSettingsError as e:
        raise _ToHttpError(context, current_user, e)


@router.post("/reset-base-url", response_model=ServerSettingDto)
async def reset_base_url(
    current_user: User = Depends(RequireAdmin),
    context: ServerContext = Depends(GetServerContext)
):
    """Restore the base URL to its default"""
    logger.info(f"{current_user.username} is resetting Base Url Setting")

    try:
        return SettingsReconciler(context).ResetBaseUrl()
    except FolioSettingsError as e:
        raise _ToHttpError(context, current_user, e)


@router.post("/reset-email-url", response_model=ServerSettingDto)
async def reset_email_url(
    current_user: User = Depends(RequireAdmin),
    context: ServerContext = Depends(GetServerContext)
):
    """Restore the email service URL to the built-in provider"""
    logger.info(f"{current_user.username} is resetting Email Service Url Setting")

    try:
        return SettingsReconciler(context).ResetEmailServiceUrl()
    except FolioSettingsError as e:
        raise _ToHttpError(context, current_user, e)


@router.post("/test-email-url", response_model=EmailTestResult)
def test_email_url(
    request: TestEmailRequest,
    current_user: User = Depends(RequireAdmin),
    context: ServerContext = Depends(GetServerContext)
):
    """
    Check connectivity to an email relay
    A test email is only requested when a custom relay is configured.
    """
    with UnitOfWork(context.db_manager) as uow:
        configured_url = uow.settings.GetValue(ServerSettingKey.EmailServiceUrl)

    send_email = configured_url != context.email_manager.DEFAULT_API_URL
    return context.email_manager.TestConnectivity(request.url, current_user.email, send_email)


# ==================== Static Options ====================

@router.get("/task-frequencies", response_model=List[str])
async def get_task_frequencies(current_user: User = Depends(RequireAdmin)):
    return task_frequencies.OPTIONS


@router.get("/library-types", response_model=List[str])
async def get_library_types(current_user: User = Depends(RequireAdmin)):
    return [library_type.description for library_type in LibraryType]


@router.get("/log-levels", response_model=List[str])
async def get_log_levels(current_user: User = Depends(RequireAdmin)):
    return [level.value for level in LogLevel]
