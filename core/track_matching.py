"""
Structural matching of subtitle tracks across container files.

Episodes of the same release usually carry the same subtitle layout with
different track ids, so a previous selection is looked up by metadata.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from core.subtitle_formats import SubtitleTrack


@dataclass(frozen=True)
class TrackMatchResult:
    """Outcome of matching target tracks against a file's tracks."""
    found: List[SubtitleTrack] = field(default_factory=list)
    missing: List[SubtitleTrack] = field(default_factory=list)

    @property
    def all_found(self) -> bool:
        return not self.missing

    @property
    def found_count(self) -> int:
        return len(self.found)

    @property
    def total_requested(self) -> int:
        return len(self.found) + len(self.missing)


class TrackMatcher:
    """Finds tracks equivalent to a previous selection."""

    @staticmethod
    def find_equivalent(target: SubtitleTrack,
                        candidates: Sequence[SubtitleTrack]) -> Optional[SubtitleTrack]:
        """Return the first candidate equivalent to target, if any."""
        for candidate in candidates:
            if candidate.is_equivalent(target):
                return candidate
        return None

    @staticmethod
    def match(targets: Sequence[SubtitleTrack],
              candidates: Sequence[SubtitleTrack]) -> TrackMatchResult:
        """
        Match each target, in order, to the first equivalent candidate.

        Args:
            targets: Previously selected tracks
            candidates: Tracks of the file being processed

        Returns:
            TrackMatchResult whose ``found`` follows the order of ``targets``

        Example:
            >>> result = TrackMatcher.match(previous, current)
            >>> tracks = result.found if result.all_found else None
        """
        found = []
        missing = []
        for target in targets:
            match = TrackMatcher.find_equivalent(target, candidates)
            if match is not None:
                found.append(match)
            else:
                missing.append(target)
        return TrackMatchResult(found=found, missing=missing)
