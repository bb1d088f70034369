"""
Interactive subtitle track selection.

This is the only place the toolkit waits for a human: candidates are listed
1-based and the prompt repeats until a valid, not yet chosen, number is
entered.
"""

from typing import Callable, List, Optional, Sequence

from core.exceptions import InvalidSelectionInputError
from core.subtitle_formats import SubtitleTrack


def print_tracks(tracks: Sequence[SubtitleTrack],
                 output_func: Callable[[str], None] = print) -> None:
    """Print a 1-based listing of subtitle tracks."""
    if not tracks:
        output_func("No subtitle tracks found.")
        return

    output_func(f"Found {len(tracks)} subtitle track(s):\n")
    for index, track in enumerate(tracks, start=1):
        output_func(f"{index}. {track.describe()}")


class TrackSelector:
    """Collects distinct track choices from the user."""

    def __init__(self,
                 input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        """
        Initialize the selector.

        Args:
            input_func: Reads one line given a prompt
            output_func: Writes one line of feedback
        """
        self.input_func = input_func
        self.output_func = output_func
        self.prompt_count = 0

    @staticmethod
    def validate_choice(raw: str, candidates: Sequence[SubtitleTrack],
                        selected: Sequence[SubtitleTrack]) -> SubtitleTrack:
        """
        Turn one line of input into a track.

        Raises:
            InvalidSelectionInputError: If the input is not a listed number
                or names a track that was already selected
        """
        try:
            choice = int(raw.strip())
        except ValueError:
            raise InvalidSelectionInputError("Invalid selection. Please enter a valid number.")

        if choice < 1 or choice > len(candidates):
            raise InvalidSelectionInputError(
                f"Invalid selection. Please enter a number between 1 and {len(candidates)}."
            )

        track = candidates[choice - 1]
        if any(track.id == chosen.id for chosen in selected):
            raise InvalidSelectionInputError(
                "This subtitle is already selected. Please choose a different one."
            )
        return track

    def select(self, candidates: Sequence[SubtitleTrack], count: int,
               title: Optional[str] = None) -> List[SubtitleTrack]:
        """
        Ask the user for ``count`` distinct tracks.

        Args:
            candidates: Tracks to choose from
            count: Number of tracks to collect
            title: Optional heading printed above the listing

        Returns:
            Selected tracks in the order chosen; fewer than ``count`` when
            there are not enough candidates
        """
        if not candidates:
            self.output_func("No subtitle tracks found.")
            return []

        self.prompt_count += 1
        if title:
            self.output_func(title)
        print_tracks(candidates, self.output_func)

        wanted = min(count, len(candidates))
        selected: List[SubtitleTrack] = []
        prompt = f"Enter number (1-{len(candidates)}): "

        while len(selected) < wanted:
            self.output_func(f"\nSelect subtitle {len(selected) + 1}:")
            while True:
                raw = self.input_func(prompt)
                try:
                    track = self.validate_choice(raw, candidates, selected)
                    break
                except InvalidSelectionInputError as e:
                    self.output_func(str(e))

            selected.append(track)
            self.output_func(f"Selected: {track.language or 'Unknown'} - {track.track_name or 'Unnamed'}")

        return selected
