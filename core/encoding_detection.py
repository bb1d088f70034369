"""
Encoding detection utilities for subtitle files.

Extracted and downloaded subtitles are not always UTF-8; this module reads
them with BOM handling first and charset-normalizer detection second.
"""

from pathlib import Path
from typing import Optional, Tuple

from charset_normalizer import from_path

from utils.constants import UTF8_BOM
from utils.logging_config import get_logger

logger = get_logger(__name__)


class EncodingDetector:
    """Handles encoding detection for subtitle files."""

    @staticmethod
    def detect_encoding(file_path: Path) -> Optional[str]:
        """
        Detect the encoding of a text file.

        Args:
            file_path: Path to the file to analyze

        Returns:
            Detected encoding name or None if detection failed

        Example:
            >>> encoding = EncodingDetector.detect_encoding(Path("subtitle.srt"))
            >>> print(f"Detected encoding: {encoding}")
        """
        if EncodingDetector.has_bom(file_path):
            return 'utf-8-sig'

        best = from_path(file_path).best()
        if best is None:
            logger.debug(f"charset-normalizer found no match for {file_path.name}")
            return None

        logger.debug(f"Detected encoding for {file_path.name}: {best.encoding}")
        return best.encoding.lower()

    @staticmethod
    def read_file_with_encoding(file_path: Path) -> Tuple[str, str]:
        """
        Read a file with automatic encoding detection and proper BOM handling.

        Args:
            file_path: Path to the file to read

        Returns:
            Tuple of (file_content, encoding_used)

        Raises:
            FileNotFoundError: If the file does not exist
            PermissionError: If the file cannot be opened
            IOError: If the file cannot be decoded

        Example:
            >>> content, encoding = EncodingDetector.read_file_with_encoding(Path("subtitle.srt"))
            >>> print(f"Read file with {encoding} encoding")
        """
        encoding = EncodingDetector.detect_encoding(file_path) or 'utf-8'

        try:
            with open(file_path, 'r', encoding=encoding) as f:
                return f.read(), encoding
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning(f"Failed to decode {file_path.name} as {encoding}, "
                           f"using UTF-8 with error replacement: {e}")

        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read(), 'utf-8'

    @staticmethod
    def has_bom(file_path: Path) -> bool:
        """
        Check if file has UTF-8 BOM.

        Args:
            file_path: Path to the file

        Returns:
            True if file has UTF-8 BOM
        """
        with open(file_path, 'rb') as f:
            return f.read(len(UTF8_BOM)) == UTF8_BOM
