"""
Two-color subtitle merging.

Both inputs are parsed as SRT, every cue is wrapped in a font color tag and
the two cue lists are interleaved by start time into one SRT file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from core.subtitle_formats import Cue, SRTParser, SubtitleNode, sort_key
from utils.constants import DEFAULT_PRIMARY_COLOR, DEFAULT_SECONDARY_COLOR
from utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubtitleSource:
    """A subtitle file to merge and the color its cues are shown in."""
    path: Path
    color: Optional[str] = None


def apply_color_formatting(text: str, color: str) -> str:
    """
    Wrap subtitle text in an HTML font color tag.

    Blank text is returned untouched. Existing formatting inside the text is
    kept by wrapping the whole block.

    Example:
        >>> apply_color_formatting("hi", "white")
        '<font color="white">hi</font>'
    """
    if not text.strip():
        return text
    return f'<font color="{color}">{text}</font>'


def colorize(nodes: List[SubtitleNode], color: str) -> List[SubtitleNode]:
    """Return new nodes with every cue colored; header blocks pass through."""
    return [node.with_text(apply_color_formatting(node.text, color))
            if isinstance(node, Cue) else node
            for node in nodes]


def merge_nodes(first: List[SubtitleNode], second: List[SubtitleNode]) -> List[SubtitleNode]:
    """
    Interleave two node lists by start time.

    The sort is stable over ``first + second``, so at equal start times
    nodes of ``first`` stay ahead of nodes of ``second``.
    """
    return sorted(first + second, key=sort_key)


class SubtitleMerger:
    """Merges two subtitle files into one two-color SRT file."""

    def merge(self, sub1: SubtitleSource, sub2: SubtitleSource, output_path: Path) -> None:
        """
        Merge two SRT files.

        Args:
            sub1: First subtitle (white unless a color is given)
            sub2: Second subtitle (yellow unless a color is given)
            output_path: Destination SRT file, overwritten if present

        Raises:
            FileNotFoundError: If a source file does not exist
            ReadError: If a source file cannot be read
            EmptyFileError: If a source file is empty

        Example:
            >>> SubtitleMerger().merge(SubtitleSource(Path("en.srt")),
            ...                        SubtitleSource(Path("ja.srt")), Path("merged.srt"))
        """
        color1 = sub1.color or DEFAULT_PRIMARY_COLOR
        color2 = sub2.color or DEFAULT_SECONDARY_COLOR

        first = SRTParser.read(sub1.path)
        second = SRTParser.read(sub2.path)

        merged = merge_nodes(colorize(first.nodes, color1), colorize(second.nodes, color2))
        SRTParser.write(merged, output_path)

        logger.info(f"Successfully merged subtitles to: {output_path}")
        logger.info(f"Total subtitles: {len(first.cues) + len(second.cues)} "
                    f"({len(first.cues)} {color1} + {len(second.cues)} {color2})")
