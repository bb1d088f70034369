"""
Time conversion utilities for subtitle processing.

This module provides functions for:
- Converting between SRT timestamps and integer milliseconds
- Parsing SRT timing lines
- Human-readable duration formatting

Timestamps are integer milliseconds throughout. Negative values are kept
(written with a leading '-') so that shifting back and forth is lossless.
"""

import re
from typing import Tuple
from utils.logging_config import get_logger

logger = get_logger(__name__)

SRT_TIME_PATTERN = r'-?\d+:\d{2}:\d{2}[,\.]\d{1,3}'
SRT_TIMING_LINE = re.compile(
    rf'^\s*({SRT_TIME_PATTERN})\s*-->\s*({SRT_TIME_PATTERN})'
)


class TimeConverter:
    """Handles time format conversions for SRT subtitles."""

    @staticmethod
    def srt_to_milliseconds(time_str: str) -> int:
        """
        Convert an SRT timestamp to milliseconds.

        Args:
            time_str: Timestamp such as "01:23:45,678" (a '.' separator is accepted)

        Returns:
            Time in milliseconds

        Raises:
            ValueError: If the timestamp format is invalid

        Example:
            >>> TimeConverter.srt_to_milliseconds("00:00:01,500")
            1500
        """
        value = time_str.strip()
        sign = 1
        if value.startswith('-'):
            sign = -1
            value = value[1:]

        try:
            hms, fraction = re.split(r'[,\.]', value)
            h, m, s = hms.split(':')
            # "1,5" means 500ms, not 5ms
            ms = int(fraction.ljust(3, '0')[:3])
            return sign * (((int(h) * 60 + int(m)) * 60 + int(s)) * 1000 + ms)
        except ValueError:
            logger.debug(f"Failed to parse SRT timestamp '{time_str}'")
            raise ValueError(f"Invalid time format: {time_str}")

    @staticmethod
    def milliseconds_to_srt(ms: int) -> str:
        """
        Convert milliseconds to an SRT timestamp.

        Args:
            ms: Time in milliseconds, may be negative

        Returns:
            Timestamp in "HH:MM:SS,mmm" form

        Example:
            >>> TimeConverter.milliseconds_to_srt(3825678)
            '01:03:45,678'
        """
        sign = '-' if ms < 0 else ''
        ms = abs(int(ms))
        hours, ms = divmod(ms, 3600000)
        minutes, ms = divmod(ms, 60000)
        seconds, ms = divmod(ms, 1000)
        return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d},{ms:03d}"

    @staticmethod
    def parse_srt_timestamp(timestamp_line: str) -> Tuple[int, int]:
        """
        Parse an SRT timing line to get start and end times.

        Args:
            timestamp_line: SRT timing line (e.g., "00:01:23,456 --> 00:01:26,789")

        Returns:
            Tuple of (start_ms, end_ms)

        Raises:
            ValueError: If the timing line format is invalid
        """
        match = SRT_TIMING_LINE.match(timestamp_line)
        if not match:
            raise ValueError(f"Invalid SRT timestamp format: {timestamp_line}")

        start_str, end_str = match.groups()
        return (TimeConverter.srt_to_milliseconds(start_str),
                TimeConverter.srt_to_milliseconds(end_str))

    @staticmethod
    def is_timing_line(line: str) -> bool:
        """Check whether a line looks like an SRT timing line."""
        return SRT_TIMING_LINE.match(line) is not None

    @staticmethod
    def format_timing_line(start_ms: int, end_ms: int) -> str:
        """Format a start/end pair as an SRT timing line."""
        return (f"{TimeConverter.milliseconds_to_srt(start_ms)} --> "
                f"{TimeConverter.milliseconds_to_srt(end_ms)}")

    @staticmethod
    def format_duration(ms: int) -> str:
        """
        Format a duration in milliseconds as a human-readable string.

        Example:
            >>> TimeConverter.format_duration(3825500)
            '1h 3m 45.5s'
        """
        sign = '-' if ms < 0 else ''
        seconds = abs(ms) / 1000.0
        if seconds < 60:
            return f"{sign}{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            return f"{sign}{minutes}m {seconds % 60:.1f}s"
        else:
            hours = int(seconds // 3600)
            remaining = seconds % 3600
            minutes = int(remaining // 60)
            return f"{sign}{hours}h {minutes}m {remaining % 60:.1f}s"
