"""
Error taxonomy for the subtitle toolkit.

Missing files and permission problems use the builtin FileNotFoundError and
PermissionError; everything specific to this tool derives from
SubtitleToolError so the CLI can report it uniformly.
"""

from pathlib import Path
from typing import Union


class SubtitleToolError(Exception):
    """Base class for all toolkit errors."""
    pass


class DirectoryNotFoundError(SubtitleToolError, FileNotFoundError):
    """Raised when a batch directory does not exist or is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Directory not found: {path}")


class EmptyFileError(SubtitleToolError):
    """Raised when a subtitle file is empty or whitespace-only."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Subtitle file is empty: {path}")


class ReadError(SubtitleToolError, IOError):
    """Raised when a subtitle file exists but cannot be read."""
    pass


class NoTracksError(SubtitleToolError):
    """Raised when there are no (or not enough) subtitle tracks to work with."""
    pass


class MalformedOutputError(SubtitleToolError):
    """Raised when mkvmerge output is not the expected identification document."""
    pass


class ExternalToolError(SubtitleToolError):
    """Raised when an external program exits with a non-zero status."""

    def __init__(self, tool: str, returncode: int, stderr: str = ""):
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{tool} failed with code {returncode}: {stderr.strip()}")


class ExtractionVerificationError(SubtitleToolError):
    """Raised when none of the expected extracted files exist."""
    pass


class InvalidOffsetError(SubtitleToolError, ValueError):
    """Raised for a zero or non-integer timing offset."""
    pass


class InvalidSelectionInputError(SubtitleToolError, ValueError):
    """Raised by the track selection validator; triggers a re-prompt."""
    pass
