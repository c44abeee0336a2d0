"""
Folio Server - Environment Information

Detection of the deployment environment the server runs in.
"""

import os
from pathlib import Path

DOCKER_ENV_VAR = "FOLIO_DOCKER"
_DOCKER_MARKER = Path("/.dockerenv")


def IsDocker() -> bool:
    """
    Check whether the server runs inside a container

    In containers the port and bind addresses are managed by the container
    environment rather than by the settings page.
    """
    flag = os.environ.get(DOCKER_ENV_VAR)
    if flag is not None:
        return flag.strip().lower() in ("1", "true", "yes")
    return _DOCKER_MARKER.exists()
