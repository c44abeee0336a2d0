"""
Folio Server - Library Scanner

Walks library folders and reports the media files found in them.
Parsing the files into series, volumes and chapters happens downstream.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List

from models.database import Library
from managers.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {
    ".cbz", ".cbr", ".cb7", ".cbt",
    ".zip", ".rar", ".7z",
    ".epub", ".pdf",
    ".jpg", ".jpeg", ".png", ".webp", ".avif",
}


def IsSupportedFile(path: Path) -> bool:
    """Media file the reader can open (hidden files are skipped)"""
    if path.name.startswith("."):
        return False
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def FindMediaFiles(folder_path: str) -> List[Path]:
    """
    All supported files below a folder, sorted by path

    Returns:
        Empty list when the folder does not exist
    """
    root = Path(folder_path)
    if not root.is_dir():
        logger.warning(f"Library folder does not exist: {root}")
        return []

    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Skip hidden folders such as .thumbnails
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for filename in filenames:
            candidate = Path(dirpath) / filename
            if IsSupportedFile(candidate):
                found.append(candidate)
    return sorted(found)


class LibraryScanner:
    """
    Scans the folders of every library registered in the database
    """

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def GetLibraryFolders(self) -> Dict[int, str]:
        """library_id -> folder_path for every library"""
        with UnitOfWork(self.db_manager) as uow:
            libraries = uow.session.query(Library).all()
            return {library.library_id: library.folder_path for library in libraries}

    def ScanLibrary(self, library_id: int, folder_path: str) -> List[Path]:
        files = FindMediaFiles(folder_path)
        logger.info(f"Scanned library {library_id} ({folder_path}): {len(files)} media files")
        return files

    def ScanLibraries(self) -> Dict[int, int]:
        """
        Scan every library

        Returns:
            library_id -> number of media files found
        """
        results = {}
        for library_id, folder_path in self.GetLibraryFolders().items():
            results[library_id] = len(self.ScanLibrary(library_id, folder_path))
        return results
