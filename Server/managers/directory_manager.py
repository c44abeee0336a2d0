"""
Folio Server - Directory Manager

Filesystem operations used by the settings reconciler and the maintenance
tasks: write-access checks, directory creation, copying and removal.
"""

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DirectoryManager:
    """
    Owns the server's well-known directories and the helpers that move
    files between them
    """

    def __init__(self, bookmark_directory: PathLike, cache_directory: PathLike,
                 backup_directory: PathLike, logs_directory: PathLike):
        self.bookmark_directory = str(bookmark_directory)
        self.cache_directory = str(cache_directory)
        self.backup_directory = str(backup_directory)
        self.logs_directory = str(logs_directory)

    @staticmethod
    def JoinPath(*parts: str) -> str:
        return os.path.join(*parts)

    @staticmethod
    def GetFullPath(path: PathLike) -> str:
        """Absolute, normalized form of a path"""
        return os.path.normpath(os.path.abspath(str(path)))

    def ExistOrCreate(self, directory: PathLike) -> bool:
        """
        Make sure a directory exists

        Returns:
            bool: True if the directory exists afterwards, False if it could not be created
        """
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.error(f"Could not create directory {directory}: {e}")
            return False

    def CheckWriteAccess(self, directory: PathLike) -> bool:
        """
        Verify the server can create and delete files in a directory
        The directory is created if it does not exist yet.

        Args:
            directory: Directory to probe

        Returns:
            bool: True if a probe file could be written and removed
        """
        if not self.ExistOrCreate(directory):
            return False

        probe = Path(directory) / f".folio-write-test-{uuid.uuid4().hex}"
        try:
            probe.write_text("folio", encoding="utf-8")
            probe.unlink()
            return True
        except OSError as e:
            logger.warning(f"No write access to {directory}: {e}")
            return False

    def CopyDirectoryToDirectory(self, source: PathLike, target: PathLike) -> int:
        """
        Copy the contents of one directory into another
        Files already present in the target are left alone so the copy can be
        repeated after a partial failure. A missing source copies nothing.

        Args:
            source: Directory to copy from
            target: Directory to copy into (created if missing)

        Returns:
            int: Number of files copied
        """
        source_path = Path(source)
        target_path = Path(target)

        if not source_path.exists():
            logger.info(f"Nothing to copy, source directory does not exist: {source_path}")
            return 0

        if self.GetFullPath(source_path) == self.GetFullPath(target_path):
            return 0

        target_in_source = self.IsInside(target_path, source_path)

        copied = 0
        for file_path in list(source_path.rglob("*")):
            if not file_path.is_file():
                continue
            # Target nested inside source: don't copy the copy
            if target_in_source and self.IsInside(file_path, target_path):
                continue
            destination = target_path / file_path.relative_to(source_path)
            if destination.exists():
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(str(file_path), str(destination))
            copied += 1

        logger.info(f"Copied {copied} files from {source_path} to {target_path}")
        return copied

    def ClearAndDeleteDirectory(self, directory: PathLike) -> None:
        """Remove a directory and everything in it (no-op if it does not exist)"""
        path = Path(directory)
        if not path.exists():
            return
        shutil.rmtree(path)
        logger.info(f"Deleted directory {path}")

    def MoveBookmarks(self, source: PathLike, target: PathLike) -> int:
        """
        Move bookmark files to a new bookmark directory and remove the old one

        Returns:
            int: Number of files copied
        """
        self.ExistOrCreate(target)
        copied = self.CopyDirectoryToDirectory(source, target)

        if self.GetFullPath(source) == self.GetFullPath(target):
            logger.debug(f"Bookmark directory unchanged: {target}")
        elif self.IsInside(target, source):
            # New directory lives under the old one, only remove the old entries
            for entry in Path(source).iterdir():
                if self.GetFullPath(entry) == self.GetFullPath(target) or self.IsInside(target, entry):
                    continue
                if entry.is_dir():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
        else:
            self.ClearAndDeleteDirectory(source)

        self.bookmark_directory = str(target)
        return copied

    def FindFirstMissing(self, directory: PathLike) -> Optional[str]:
        """
        Outermost directory that ExistOrCreate(directory) would create

        Returns:
            None when the directory already exists
        """
        path = Path(self.GetFullPath(directory))
        missing = None
        while not path.exists():
            missing = path
            if path.parent == path:
                break
            path = path.parent
        return str(missing) if missing is not None else None

    def IsInside(self, path: PathLike, directory: PathLike) -> bool:
        """True when path is located somewhere below directory"""
        return self.GetFullPath(path).startswith(self.GetFullPath(directory) + os.sep)

    def ListFiles(self, directory: PathLike, pattern: str = "*") -> list:
        """Files directly inside a directory matching a glob pattern, oldest first"""
        path = Path(directory)
        if not path.exists():
            return []
        files = [p for p in path.glob(pattern) if p.is_file()]
        return sorted(files, key=lambda p: p.stat().st_mtime)
