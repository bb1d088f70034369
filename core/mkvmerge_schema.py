"""
Validated model of the ``mkvmerge -J`` identification document.

Only the fields the toolkit reads are modelled; everything else mkvmerge
reports is ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class TrackProperties(BaseModel):
    """The ``properties`` object of one track entry."""

    model_config = ConfigDict(extra="ignore")

    language: Optional[str] = None
    track_name: Optional[str] = None
    default_track: bool = False
    forced_track: bool = False


class TrackEntry(BaseModel):
    """One entry of the ``tracks`` list."""

    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    type: str
    codec: str
    properties: TrackProperties = Field(default_factory=TrackProperties)


class Identification(BaseModel):
    """Top-level identification document."""

    model_config = ConfigDict(extra="ignore")

    tracks: List[TrackEntry]
