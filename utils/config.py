"""
Runtime configuration for the external mkvtoolnix programs.

Values come from command-line flags; nothing is read from the environment
or persisted between runs.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from .constants import (
    CONTAINER_EXTENSIONS,
    DEFAULT_COMMAND_TIMEOUT,
    MKVEXTRACT_BINARY,
    MKVMERGE_BINARY,
    TRACKS_DIR_NAME,
)


class ToolConfig(BaseModel):
    """Settings shared by the inspector, the extractor and the batch pipeline."""

    mkvmerge_path: str = Field(default=MKVMERGE_BINARY, description="mkvmerge executable")
    mkvextract_path: str = Field(default=MKVEXTRACT_BINARY, description="mkvextract executable")
    command_timeout: int = Field(default=DEFAULT_COMMAND_TIMEOUT, ge=1,
                                 description="Timeout for one external tool run (seconds)")
    tracks_dir_name: str = Field(default=TRACKS_DIR_NAME, min_length=1,
                                 description="Batch working subdirectory for extracted tracks")
    container_extensions: List[str] = Field(
        default_factory=lambda: sorted(CONTAINER_EXTENSIONS),
        min_length=1,
        description="Container file extensions picked up by the batch pipeline",
    )

    @field_validator("container_extensions")
    @classmethod
    def _normalize_extensions(cls, value: List[str]) -> List[str]:
        normalized = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                raise ValueError("empty container extension")
            normalized.append(ext if ext.startswith('.') else f".{ext}")
        return normalized
