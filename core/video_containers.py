"""
Video container operations and mkvtoolnix integration.

This module provides:
- External command execution with proper error handling
- Subtitle track listing through ``mkvmerge -J``
- Container file detection
"""

import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import ValidationError

from core.exceptions import ExternalToolError, MalformedOutputError
from core.mkvmerge_schema import Identification
from core.subtitle_formats import SubtitleTrack
from utils.config import ToolConfig
from utils.constants import CONTAINER_EXTENSIONS, SUBTITLE_TRACK_TYPE
from utils.logging_config import get_logger

logger = get_logger(__name__)


class VideoContainerHandler:
    """Handles video container operations through mkvtoolnix."""

    def __init__(self, config: Optional[ToolConfig] = None):
        """
        Initialize the handler.

        Args:
            config: External tool settings (defaults when omitted)
        """
        self.config = config or ToolConfig()

    @staticmethod
    def is_video_container(file_path: Path,
                           extensions: Optional[Iterable[str]] = None) -> bool:
        """
        Check if a file is a supported video container.

        Example:
            >>> VideoContainerHandler.is_video_container(Path("movie.mkv"))
            True
        """
        allowed = set(extensions) if extensions is not None else CONTAINER_EXTENSIONS
        return file_path.suffix.lower() in allowed

    def run_command(self, cmd: List[str]) -> subprocess.CompletedProcess:
        """
        Run an external command to completion, capturing its output.

        Args:
            cmd: Command and arguments as list

        Returns:
            CompletedProcess instance for a zero exit status

        Raises:
            ExternalToolError: If the program is missing, times out, or exits non-zero
        """
        tool = Path(cmd[0]).name
        logger.debug(f"Running command: {' '.join(cmd[:3])}...")  # Show only first 3 args

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding='utf-8',
                errors='replace',
                timeout=self.config.command_timeout
            )
        except FileNotFoundError as e:
            logger.debug(f"Executable not found: {cmd[0]}")
            raise ExternalToolError(tool, 127, f"executable not found: {cmd[0]}") from e
        except subprocess.TimeoutExpired as e:
            logger.error(f"Command timed out after {self.config.command_timeout}s: {' '.join(cmd[:3])}...")
            raise ExternalToolError(
                tool, -1,
                f"Command execution timed out after {self.config.command_timeout} seconds"
            ) from e

        if result.returncode != 0:
            logger.debug(f"Command failed with return code {result.returncode}")
            raise ExternalToolError(tool, result.returncode, result.stderr or "")

        return result

    @staticmethod
    def parse_identification(output: str) -> List[SubtitleTrack]:
        """
        Turn ``mkvmerge -J`` output into subtitle tracks.

        Args:
            output: Raw standard output of mkvmerge

        Returns:
            Subtitle tracks in mkvmerge order

        Raises:
            MalformedOutputError: If the output is not a valid identification document
        """
        try:
            document = Identification.model_validate_json(output)
        except ValidationError as e:
            raise MalformedOutputError(f"Unexpected mkvmerge output: {e}") from e

        return [
            SubtitleTrack(
                id=entry.id,
                type=entry.type,
                codec=entry.codec,
                language=entry.properties.language,
                track_name=entry.properties.track_name,
                is_default=entry.properties.default_track,
                is_forced=entry.properties.forced_track,
            )
            for entry in document.tracks
            if entry.type == SUBTITLE_TRACK_TYPE
        ]

    def list_subtitle_tracks(self, video_path: Path) -> List[SubtitleTrack]:
        """
        List all subtitle tracks in a video file.

        Args:
            video_path: Path to the video file

        Returns:
            List of SubtitleTrack objects

        Raises:
            FileNotFoundError: If the video file does not exist
            ExternalToolError: If mkvmerge fails
            MalformedOutputError: If mkvmerge output cannot be parsed

        Example:
            >>> tracks = VideoContainerHandler().list_subtitle_tracks(Path("movie.mkv"))
            >>> print(f"Found {len(tracks)} subtitle tracks")
        """
        video_path = Path(video_path)
        if not video_path.exists():
            raise FileNotFoundError(f"File not found: {video_path}")

        logger.info(f"Analyzing subtitle tracks in: {video_path.name}")
        result = self.run_command([self.config.mkvmerge_path, "-J", str(video_path)])
        tracks = self.parse_identification(result.stdout)

        logger.info(f"Found {len(tracks)} subtitle tracks")
        return tracks
