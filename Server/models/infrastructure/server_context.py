"""
Folio Server - Server Context Model

Dataclass bundling the collaborators a request handler needs.
One instance lives on app.state and is handed to routes through the
GetServerContext dependency.
"""

import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ServerContext:
    db_manager: Any
    configuration: Any
    directory_manager: Any
    email_manager: Any
    task_scheduler: Any
    library_watcher: Any
    localization: Any
    is_docker: bool = False
    # Serializes read-compare-commit cycles on the settings table
    settings_lock: threading.RLock = field(default_factory=threading.RLock)
