"""
Batch extract-and-merge over a directory of container files.

Files are processed strictly in sorted order. The tracks chosen for one file
are remembered and looked up again in the next one, so a season with a
consistent track layout only needs a single interactive selection.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from core.exceptions import ExtractionVerificationError, NoTracksError
from core.subtitle_formats import SubtitleTrack
from core.track_matching import TrackMatcher
from core.video_containers import VideoContainerHandler
from ui.interactive import TrackSelector
from utils.config import ToolConfig
from utils.constants import BATCH_TRACK_COUNT
from utils.file_operations import FileHandler
from utils.logging_config import get_logger
from .extractor import SubtitleExtractor, get_subtitle_extension
from .merger import SubtitleMerger, SubtitleSource

logger = get_logger(__name__)


class BatchState(Enum):
    """Where the pipeline is in its per-file cycle."""
    IDLE = "idle"
    INSPECTING = "inspecting"
    MATCHING = "matching"
    SELECTING = "selecting"
    EXTRACTING = "extracting"
    MERGING = "merging"
    DONE = "done"


@dataclass
class SelectionState:
    """The most recent track selection, carried from file to file."""
    tracks: List[SubtitleTrack] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.tracks

    def replace(self, tracks: List[SubtitleTrack]) -> None:
        self.tracks = list(tracks)


def build_merged_output_path(directory: Path, video_path: Path,
                             tracks: List[SubtitleTrack]) -> Path:
    """
    Path of the merged file for one container.

    ``<directory>/<stem>.<lang1><lang2><ext>`` where the extension follows the
    first track's codec.
    """
    languages = "".join(track.language or "" for track in tracks)
    extension = get_subtitle_extension(tracks[0].codec)
    return directory / f"{video_path.stem}.{languages}{extension}"


class BatchProcessor:
    """Runs inspect, match or select, extract and merge for every file of a directory."""

    def __init__(self, config: Optional[ToolConfig] = None,
                 selector: Optional[TrackSelector] = None,
                 keep_going: bool = False):
        """
        Initialize the batch processor.

        Args:
            config: External tool settings
            selector: Interactive track selector (stdin/stdout by default)
            keep_going: Record per-file failures and continue instead of aborting
        """
        self.config = config or ToolConfig()
        self.container_handler = VideoContainerHandler(self.config)
        self.extractor = SubtitleExtractor(self.config, self.container_handler)
        self.merger = SubtitleMerger()
        self.selector = selector or TrackSelector()
        self.keep_going = keep_going
        self.state = BatchState.IDLE

    def run(self, directory: Path) -> Dict[str, Any]:
        """
        Process every container file in a directory.

        Args:
            directory: Directory holding the container files (not recursive)

        Returns:
            Dictionary with processing results

        Raises:
            DirectoryNotFoundError: If the directory does not exist
            PermissionError: If the directory cannot be listed
            Any per-file error, unless keep_going is set

        Example:
            >>> results = BatchProcessor().run(Path("/media/show/season1"))
            >>> print(f"{results['successful']}/{results['total']} merged")
        """
        directory = Path(directory)
        video_paths = FileHandler.find_container_files(directory, self.config.container_extensions)
        logger.info(f"Starting batch extract-merge for {len(video_paths)} files in {directory}")

        results = {
            'total': len(video_paths),
            'successful': 0,
            'failed': 0,
            'errors': [],
            'processed_files': [],
            'prompts': 0,
        }

        selection = SelectionState()
        for i, video_path in enumerate(video_paths, 1):
            logger.info(f"Processing file {i}/{len(video_paths)}: {video_path.name}")
            try:
                output_path, prompted = self.process_file(video_path, directory, selection)
            except Exception as e:
                if not self.keep_going:
                    raise
                results['failed'] += 1
                error_msg = f"Error processing {video_path.name}: {e}"
                results['errors'].append(error_msg)
                logger.error(error_msg)
                self.state = BatchState.IDLE
                continue

            results['successful'] += 1
            results['prompts'] += int(prompted)
            results['processed_files'].append(str(output_path))

        self.state = BatchState.DONE
        logger.info(f"Batch finished: {results['successful']} merged, {results['failed']} failed")
        return results

    def process_file(self, video_path: Path, directory: Path,
                     selection: SelectionState) -> Tuple[Path, bool]:
        """
        Run one file through the pipeline, updating the carried selection.

        Returns:
            Tuple of (merged output path, whether the user was prompted)
        """
        self.state = BatchState.INSPECTING
        tracks = self.container_handler.list_subtitle_tracks(video_path)

        targets = None
        if not selection.is_empty():
            self.state = BatchState.MATCHING
            match = TrackMatcher.match(selection.tracks, tracks)
            if match.all_found:
                logger.info("Found same tracks to extract")
                targets = match.found
            else:
                logger.info(f"Unable to find all tracks ({match.found_count}/{match.total_requested})")

        prompted = targets is None
        if prompted:
            if len(tracks) < BATCH_TRACK_COUNT:
                raise NoTracksError(
                    f"{video_path.name}: {BATCH_TRACK_COUNT} subtitle tracks are needed "
                    f"for merging, {len(tracks)} available"
                )
            self.state = BatchState.SELECTING
            targets = self.selector.select(tracks, BATCH_TRACK_COUNT,
                                           title=f"\n{video_path.name}")
            selection.replace(targets)

        self.state = BatchState.EXTRACTING
        extracted = self.extractor.extract(video_path, targets,
                                           video_path.parent / self.config.tracks_dir_name)
        if len(extracted) < BATCH_TRACK_COUNT:
            raise ExtractionVerificationError(
                f"{video_path.name}: only {len(extracted)} of {BATCH_TRACK_COUNT} tracks were extracted"
            )

        self.state = BatchState.MERGING
        output_path = build_merged_output_path(directory, video_path, targets)
        self.merger.merge(SubtitleSource(extracted[0]), SubtitleSource(extracted[1]), output_path)

        self.state = BatchState.IDLE
        return output_path, prompted
