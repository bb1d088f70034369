"""
Subtitle data structures and the SRT codec.

This module provides:
- Immutable value types for subtitle tracks, cues and header blocks
- SRT parsing (from text or from a file) and SRT serialization
"""

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Union
from core.encoding_detection import EncodingDetector
from core.exceptions import EmptyFileError, ReadError
from core.timing_utils import TimeConverter
from utils.constants import SUBTITLE_TRACK_TYPE
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubtitleTrack:
    """A subtitle track inside a container, as reported by mkvmerge."""
    id: int
    codec: str
    type: str = SUBTITLE_TRACK_TYPE
    language: Optional[str] = None
    track_name: Optional[str] = None
    is_default: bool = False
    is_forced: bool = False

    def is_equivalent(self, other: 'SubtitleTrack') -> bool:
        """
        Check whether two tracks describe the same subtitle stream.

        Track ids are assigned per file, so they are left out of the
        comparison; every other field must be equal.
        """
        return (self.type == other.type and
                self.codec == other.codec and
                self.language == other.language and
                self.track_name == other.track_name and
                self.is_default == other.is_default and
                self.is_forced == other.is_forced)

    def describe(self) -> str:
        """One-line description used in track listings."""
        flags = []
        if self.is_default:
            flags.append("(Default)")
        if self.is_forced:
            flags.append("(Forced)")
        parts = [f"Track ID: {self.id}", self.codec,
                 self.language or 'Unknown', self.track_name or 'Unnamed']
        text = " | ".join(parts)
        return f"{text} {' '.join(flags)}".rstrip()

    def __str__(self) -> str:
        parts = [f"Track {self.id}"]
        if self.language:
            parts.append(f"lang={self.language}")
        if self.track_name:
            parts.append(f"name='{self.track_name}'")
        parts.append(f"codec={self.codec}")
        if self.is_default:
            parts.append("default")
        if self.is_forced:
            parts.append("forced")
        return f"<{' '.join(parts)}>"


@dataclass(frozen=True)
class Cue:
    """A single timed subtitle entry."""
    start: int  # milliseconds
    end: int    # milliseconds
    text: str

    def shifted(self, offset_ms: int) -> 'Cue':
        """Return a copy moved by offset_ms."""
        return replace(self, start=self.start + offset_ms, end=self.end + offset_ms)

    def with_text(self, text: str) -> 'Cue':
        """Return a copy with different text."""
        return replace(self, text=text)


@dataclass(frozen=True)
class SubtitleHeader:
    """Non-cue content that must survive every transform unchanged."""
    text: str


SubtitleNode = Union[Cue, SubtitleHeader]


@dataclass
class SubtitleDocument:
    """An ordered sequence of cues and header blocks."""
    nodes: List[SubtitleNode] = field(default_factory=list)
    path: Optional[Path] = None
    encoding: str = 'utf-8'

    @property
    def cues(self) -> List[Cue]:
        return [node for node in self.nodes if isinstance(node, Cue)]


def sort_key(node: SubtitleNode) -> int:
    """Start time used for ordering; header blocks sort as time zero."""
    return node.start if isinstance(node, Cue) else 0


class SRTParser:
    """Parser and writer for the SRT subtitle format."""

    @staticmethod
    def read(file_path: Path) -> SubtitleDocument:
        """
        Read and parse an SRT file.

        Args:
            file_path: Path to the SRT file

        Returns:
            Parsed SubtitleDocument

        Raises:
            FileNotFoundError: If the file does not exist
            ReadError: If the file exists but cannot be read
            EmptyFileError: If the file is empty or whitespace-only
        """
        file_path = Path(file_path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Subtitle file not found: {file_path}")

        try:
            content, encoding = EncodingDetector.read_file_with_encoding(file_path)
            logger.debug(f"Read {file_path.name} with encoding: {encoding}")
        except OSError as e:
            raise ReadError(f"Cannot read subtitle file {file_path}: {e}") from e

        if not content.strip():
            raise EmptyFileError(file_path)

        document = SRTParser.parse(content)
        document.path = file_path
        document.encoding = encoding
        logger.info(f"Parsed {len(document.cues)} cues from SRT file: {file_path.name}")
        return document

    @staticmethod
    def parse(content: str) -> SubtitleDocument:
        """
        Parse SRT text into a document.

        Blocks are separated by blank lines. A block is a cue when it has a
        timing line, optionally preceded by its index. Blocks without a timing
        line before the first cue are kept as header blocks; later ones are
        skipped with a warning.
        """
        content = content.lstrip('\ufeff').replace('\r\n', '\n').replace('\r', '\n')
        blocks = re.split(r'\n\s*\n', content.strip())
        nodes: List[SubtitleNode] = []
        seen_cue = False

        for block_idx, block in enumerate(blocks):
            if not block.strip():
                continue
            lines = block.strip('\n').split('\n')

            timing_idx = None
            for i, line in enumerate(lines[:2]):
                if TimeConverter.is_timing_line(line):
                    timing_idx = i
                    break

            if timing_idx is None:
                if seen_cue:
                    logger.warning(f"Skipping block {block_idx} without timing line: {lines[0][:40]}")
                else:
                    nodes.append(SubtitleHeader(text=block.strip('\n')))
                continue

            try:
                start, end = TimeConverter.parse_srt_timestamp(lines[timing_idx])
            except ValueError as e:
                logger.warning(f"Invalid timestamp in block {block_idx}: {e}")
                continue

            text = '\n'.join(lines[timing_idx + 1:]).rstrip()
            nodes.append(Cue(start=start, end=end, text=text))
            seen_cue = True

        return SubtitleDocument(nodes=nodes)

    @staticmethod
    def stringify(nodes: List[SubtitleNode]) -> str:
        """
        Serialize nodes to SRT text.

        Cues are numbered from 1 in output order; header blocks are written
        verbatim and unnumbered.
        """
        blocks = []
        index = 0
        for node in nodes:
            if isinstance(node, Cue):
                index += 1
                timing = TimeConverter.format_timing_line(node.start, node.end)
                blocks.append(f"{index}\n{timing}\n{node.text}\n")
            else:
                blocks.append(f"{node.text}\n")
        return "\n".join(blocks)

    @staticmethod
    def write(nodes: List[SubtitleNode], output_path: Path) -> None:
        """
        Write nodes to an SRT file, replacing any existing file.

        Raises:
            IOError: If the file cannot be written
        """
        output_path = Path(output_path)
        with open(output_path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(SRTParser.stringify(nodes))
        logger.info(f"Created SRT file: {output_path}")
