"""
Subtitle track extraction with mkvextract.

All requested tracks of one container are pulled out with a single
mkvextract run, then each expected output file is checked.
"""

from pathlib import Path
from typing import List, Optional, Sequence

from core.exceptions import ExtractionVerificationError, NoTracksError
from core.subtitle_formats import SubtitleTrack
from core.video_containers import VideoContainerHandler
from utils.config import ToolConfig
from utils.constants import CODEC_EXTENSION_RULES, DEFAULT_SUBTITLE_EXTENSION
from utils.logging_config import get_logger

logger = get_logger(__name__)


def get_subtitle_extension(codec: str) -> str:
    """
    Pick the file extension for an extracted track from its codec.

    Example:
        >>> get_subtitle_extension("HDMV PGS")
        '.sup'
    """
    codec_lower = codec.lower()
    for needles, extension in CODEC_EXTENSION_RULES:
        if any(needle in codec_lower for needle in needles):
            return extension
    return DEFAULT_SUBTITLE_EXTENSION


def get_output_filename(source_path: Path, track: SubtitleTrack) -> str:
    """Name of the file a track is extracted to: ``<stem>.<language><ext>``."""
    return f"{source_path.stem}.{track.language or ''}{get_subtitle_extension(track.codec)}"


class SubtitleExtractor:
    """Extracts subtitle tracks from containers."""

    def __init__(self, config: Optional[ToolConfig] = None,
                 container_handler: Optional[VideoContainerHandler] = None):
        self.config = config or ToolConfig()
        self.container_handler = container_handler or VideoContainerHandler(self.config)

    def extract(self, file_path: Path, tracks: Sequence[SubtitleTrack],
                output_dir: Path) -> List[Path]:
        """
        Extract tracks from a container into output_dir.

        Args:
            file_path: Source container
            tracks: Tracks to extract
            output_dir: Directory for the extracted files, created if needed

        Returns:
            Paths of the extracted files that exist, in track order

        Raises:
            NoTracksError: If no tracks were given
            FileNotFoundError: If the source container does not exist
            ExternalToolError: If mkvextract fails
            ExtractionVerificationError: If none of the expected files exist
        """
        if not tracks:
            raise NoTracksError("No subtitle tracks provided for extraction")

        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Source file not found: {file_path}")

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        cmd = [self.config.mkvextract_path, "tracks", str(file_path)]
        output_files = []
        for track in tracks:
            output_path = output_dir / get_output_filename(file_path, track)
            cmd.append(f"{track.id}:{output_path}")
            output_files.append(output_path)

        logger.info(f"Extracting {len(tracks)} subtitle track(s) from {file_path.name}...")
        result = self.container_handler.run_command(cmd)
        if result.stdout and result.stdout.strip():
            logger.debug(result.stdout.strip())

        verified = []
        for output_path in output_files:
            if output_path.exists():
                verified.append(output_path)
                logger.info(f"Extracted: {output_path}")
            else:
                logger.warning(f"Expected output file not found: {output_path}")

        if not verified:
            raise ExtractionVerificationError("No subtitle files were successfully extracted")

        return verified
