"""
Folio Server - Status Endpoints

Health check used by container orchestration and the web UI.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from models.infrastructure import ServerContext
from dependencies import GetServerContext
import seed


# Create router instance
router = APIRouter()


@router.get("/health", tags=["Status"])
async def health_check(context: ServerContext = Depends(GetServerContext)):
    """
    Health check endpoint to verify server is running

    Returns:
        dict: Server status information
    """
    return {
        "status": "healthy",
        "service": "Folio Server",
        "version": seed.INSTALL_VERSION,
        "is_docker": context.is_docker,
        "folder_watching": context.library_watcher.IsWatching(),
        "scheduled_jobs": sorted(job.job_id for job in context.task_scheduler.GetRecurringJobs()),
        "timestamp_utc": datetime.now(timezone.utc).isoformat()
    }
