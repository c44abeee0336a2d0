"""
Folio Server - Request Dependencies

FastAPI dependencies shared by the routers.
"""

from fastapi import Request

from models.infrastructure import ServerContext


def GetServerContext(request: Request) -> ServerContext:
    """Collaborators created at startup and stored on app.state"""
    return request.app.state.context
