"""
Timing adjustment processor for subtitle files.

This module shifts every cue of an SRT file by a fixed millisecond offset
and parses the offset notations accepted on the command line.
"""

from pathlib import Path
from typing import Optional

from core.exceptions import InvalidOffsetError
from core.subtitle_formats import Cue, SRTParser
from core.timing_utils import TimeConverter
from utils.file_operations import FileHandler
from utils.logging_config import get_logger

logger = get_logger(__name__)


class TimingAdjuster:
    """Handles timing adjustments for subtitle files."""

    def __init__(self, create_backup: bool = False):
        """
        Initialize the timing adjuster.

        Args:
            create_backup: Whether to back up the input before rewriting it in place
        """
        self.create_backup = create_backup

    def shift(self, offset_ms: int, input_path: Path,
              output_path: Optional[Path] = None) -> Path:
        """
        Shift subtitle timing by a fixed offset.

        Negative results are written as they are; nothing is clamped to zero.

        Args:
            offset_ms: Offset in milliseconds (positive = delay, negative = advance)
            input_path: Path to input subtitle file
            output_path: Path for output file (if None, overwrites input)

        Returns:
            Path of the written file

        Raises:
            InvalidOffsetError: If the offset is zero or not an integer
            FileNotFoundError: If the input does not exist
            EmptyFileError: If the input is empty

        Example:
            >>> TimingAdjuster().shift(-2470, Path("sub.srt"))
        """
        if isinstance(offset_ms, bool) or not isinstance(offset_ms, int):
            raise InvalidOffsetError(f"Offset must be an integer number of milliseconds, got {offset_ms!r}")
        if offset_ms == 0:
            raise InvalidOffsetError("Time value cannot be zero.")

        input_path = Path(input_path)
        target = Path(output_path) if output_path is not None else input_path

        document = SRTParser.read(input_path)

        if self.create_backup and target.resolve() == input_path.resolve():
            FileHandler.create_backup(input_path)

        shifted = [node.shifted(offset_ms) if isinstance(node, Cue) else node
                   for node in document.nodes]
        SRTParser.write(shifted, target)

        direction = "delayed" if offset_ms > 0 else "advanced"
        logger.info(f"Successfully {direction} {len(document.cues)} cues by "
                    f"{TimeConverter.format_duration(abs(offset_ms))} in {target.name}")
        return target

    @staticmethod
    def parse_offset_string(offset_str: str) -> int:
        """
        Parse offset string to milliseconds.

        Args:
            offset_str: Offset string (e.g., "1500", "-1500ms", "2.5s", "-00:00:02,500")

        Returns:
            Offset in milliseconds

        Raises:
            InvalidOffsetError: If offset string format is invalid
        """
        offset_str = offset_str.strip()

        try:
            # Timestamp format (HH:MM:SS,mmm or HH:MM:SS.mmm)
            if ':' in offset_str:
                return TimeConverter.srt_to_milliseconds(offset_str)

            if offset_str.lower().endswith('ms'):
                return int(offset_str[:-2])

            if offset_str.lower().endswith('s'):
                return int(round(float(offset_str[:-1]) * 1000))

            # Plain numbers are milliseconds
            return int(offset_str)
        except (ValueError, OverflowError):
            # OverflowError: "infs" reaches round(inf)
            raise InvalidOffsetError(f"Invalid offset format: {offset_str}. "
                                     f"Supported formats: '1500', '1500ms', '2.5s', '00:00:02,500'")
