"""
File operations for subtitle processing.

This module provides:
- Backup creation with timestamps
- Container file discovery for batch operations
"""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional
from core.exceptions import DirectoryNotFoundError
from core.video_containers import VideoContainerHandler
from .constants import CONTAINER_EXTENSIONS
from .logging_config import get_logger

logger = get_logger(__name__)

BACKUP_DIR_NAME = "subtitle_backups"


class FileHandler:
    """Handles file operations with proper error handling and logging."""

    @staticmethod
    def create_backup(file_path: Path, backup_dir: Optional[Path] = None) -> Path:
        """
        Create a backup of the file with timestamp.

        Args:
            file_path: Path to the file to backup
            backup_dir: Optional custom backup directory

        Returns:
            Path to the created backup file

        Raises:
            FileNotFoundError: If the file does not exist

        Example:
            >>> backup_path = FileHandler.create_backup(Path("subtitle.srt"))
            >>> print(f"Backup created at: {backup_path}")
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if backup_dir is None:
            backup_dir = file_path.parent / BACKUP_DIR_NAME

        backup_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = backup_dir / f"{file_path.stem}_{timestamp}{file_path.suffix}"

        shutil.copy2(file_path, backup_path)
        logger.debug(f"Created backup: {backup_path}")
        return backup_path

    @staticmethod
    def find_container_files(directory: Path,
                             extensions: Optional[Iterable[str]] = None) -> List[Path]:
        """
        List the container files directly inside a directory.

        Args:
            directory: Directory to search (not recursive)
            extensions: Extensions to accept, case-insensitive

        Returns:
            Sorted list of container file paths

        Raises:
            DirectoryNotFoundError: If the directory does not exist
            PermissionError: If the directory cannot be listed

        Example:
            >>> files = FileHandler.find_container_files(Path("/media/show"))
            >>> print(f"Found {len(files)} container files")
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise DirectoryNotFoundError(directory)

        allowed = {ext.lower() for ext in (extensions or CONTAINER_EXTENSIONS)}
        try:
            files = [entry for entry in directory.iterdir()
                     if entry.is_file() and VideoContainerHandler.is_video_container(entry, allowed)]
        except PermissionError as e:
            raise PermissionError(f"Permission denied accessing: {directory}") from e

        files.sort()
        logger.debug(f"Found {len(files)} container files in {directory}")
        return files
