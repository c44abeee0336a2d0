"""
Folio Server - Library Watcher

Background service that polls library folders for added, removed or
modified media files and queues a scan of the affected library.
Runs only while the EnableFolderWatching setting is on.
"""

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from managers.library_scanner import FindMediaFiles

logger = logging.getLogger(__name__)

# path -> modification time
Snapshot = Dict[str, float]


class LibraryWatcher:
    """Polling watcher over every library folder"""

    def __init__(self, folder_provider: Callable[[], Dict[int, str]],
                 on_change: Callable[[int, str], None], poll_interval_seconds: int = 10):
        """
        Initialize the watcher

        Args:
            folder_provider: Returns library_id -> folder_path for the libraries to watch
            on_change: Called with (library_id, folder_path) when a folder changed
            poll_interval_seconds: Seconds between polls
        """
        self.folder_provider = folder_provider
        self.on_change = on_change
        self.poll_interval_seconds = poll_interval_seconds
        self._snapshots: Dict[int, Snapshot] = {}
        self._lock = threading.Lock()
        self.running = False
        self.thread: Optional[threading.Thread] = None

    def StartWatching(self) -> bool:
        """Take a baseline snapshot and start polling"""
        with self._lock:
            if self.running:
                logger.debug("Library watcher is already running")
                return False
            self.running = True

        self._snapshots = self._TakeSnapshots()
        self.thread = threading.Thread(target=self._Loop, name="folio-library-watcher", daemon=True)
        self.thread.start()
        logger.info(f"Library watcher started, watching {len(self._snapshots)} folders")
        return True

    def StopWatching(self) -> bool:
        """Stop polling"""
        with self._lock:
            if not self.running:
                return False
            self.running = False

        if self.thread and self.thread.is_alive() and self.thread is not threading.current_thread():
            self.thread.join(timeout=5)
        self._snapshots = {}
        logger.info("Library watcher stopped")
        return True

    def IsWatching(self) -> bool:
        return self.running

    def _TakeSnapshots(self) -> Dict[int, Snapshot]:
        snapshots = {}
        for library_id, folder_path in self.folder_provider().items():
            snapshot = {}
            for path in FindMediaFiles(folder_path):
                try:
                    snapshot[str(path)] = path.stat().st_mtime
                except OSError:
                    # Removed between listing and stat
                    continue
            snapshots[library_id] = snapshot
        return snapshots

    def CheckForChanges(self) -> List[Tuple[int, str]]:
        """
        Poll once and notify on_change for every library that changed

        Returns:
            (library_id, folder_path) pairs that changed since the last poll
        """
        folders = self.folder_provider()
        current = self._TakeSnapshots()
        changed = []

        for library_id, snapshot in current.items():
            previous = self._snapshots.get(library_id)
            if previous is not None and previous != snapshot:
                changed.append((library_id, folders.get(library_id, "")))

        self._snapshots = current

        for library_id, folder_path in changed:
            logger.info(f"Detected changes in library {library_id} ({folder_path})")
            try:
                self.on_change(library_id, folder_path)
            except Exception:
                logger.exception(f"Failed to queue scan for library {library_id}")

        return changed

    def _Loop(self) -> None:
        while self.running:
            slept = 0
            while slept < self.poll_interval_seconds and self.running:
                time.sleep(1)
                slept += 1
            if self.running:
                self.CheckForChanges()
