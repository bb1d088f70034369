"""
Shared constants and configurations for the subtitle toolkit.

This module contains all the constants used across different modules including:
- Supported container and subtitle extensions
- Codec to extension mapping for extracted tracks
- Merge colors and external tool defaults
- Default logging configuration values
"""

from typing import List, Set, Tuple

# ============================================================================
# FILE FORMAT CONSTANTS
# ============================================================================

# Container formats handled by the batch pipeline
CONTAINER_EXTENSIONS: Set[str] = {'.mkv'}

# Codec substring -> extension, checked in order, first match wins
CODEC_EXTENSION_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (('ass', 'ssa', 'substation'), '.ass'),
    (('pgs', 'hdmv'), '.sup'),
    (('vobsub', 'dvd'), '.sub'),
]

# Fallback when no codec rule matches
DEFAULT_SUBTITLE_EXTENSION: str = '.srt'

# UTF-8 BOM marker
UTF8_BOM: bytes = b"\xef\xbb\xbf"

# ============================================================================
# TRACK CONSTANTS
# ============================================================================

# mkvmerge track type for subtitle tracks
SUBTITLE_TRACK_TYPE: str = "subtitles"

# Number of tracks the batch pipeline merges per file
BATCH_TRACK_COUNT: int = 2

# ============================================================================
# MERGE CONSTANTS
# ============================================================================

DEFAULT_PRIMARY_COLOR: str = "white"
DEFAULT_SECONDARY_COLOR: str = "yellow"

# ============================================================================
# EXTERNAL TOOL CONSTANTS
# ============================================================================

MKVMERGE_BINARY: str = "mkvmerge"
MKVEXTRACT_BINARY: str = "mkvextract"

# Default timeout for mkvtoolnix operations (seconds)
DEFAULT_COMMAND_TIMEOUT: int = 900  # 15 minutes

# Working subdirectory for extracted tracks
TRACKS_DIR_NAME: str = "tracks"

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================

DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "subkit"
APP_VERSION: str = "1.0.0"
APP_DESCRIPTION: str = """
A command-line toolkit for subtitle tracks in Matroska files:
- Subtitle track listing and interactive extraction
- Two-color subtitle merging
- Subtitle timing shifts
- Batch extract-and-merge over a directory
"""
