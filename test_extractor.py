#!/usr/bin/env python3
"""Tests for mkvextract-based track extraction."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from core.exceptions import ExternalToolError, ExtractionVerificationError, NoTracksError
from core.subtitle_formats import SubtitleTrack
from processors.extractor import SubtitleExtractor, get_output_filename, get_subtitle_extension


@pytest.mark.parametrize("codec, extension", [
    ("SubStationAlpha", ".ass"),
    ("S_TEXT/ASS", ".ass"),
    ("S_TEXT/SSA", ".ass"),
    ("HDMV PGS", ".sup"),
    ("VobSub", ".sub"),
    ("S_VOBSUB", ".sub"),
    ("S_TEXT/UTF8", ".srt"),
    ("SubRip/SRT", ".srt"),
])
def test_subtitle_extension(codec, extension):
    assert get_subtitle_extension(codec) == extension


def test_output_filename_without_language():
    track = SubtitleTrack(id=4, codec="SubRip/SRT")

    assert get_output_filename(Path("/media/ep01.mkv"), track) == "ep01..srt"


def fake_handler(write_outputs=True):
    """Container handler whose run_command creates the files mkvextract would write."""
    handler = MagicMock()

    def run_command(cmd):
        if write_outputs:
            for spec in cmd[3:]:
                _, out = spec.split(":", 1)
                Path(out).write_text("1\n00:00:01,000 --> 00:00:02,000\nx\n", encoding="utf-8")
        return subprocess.CompletedProcess(cmd, 0, stdout="Progress: 100%", stderr="")

    handler.run_command.side_effect = run_command
    return handler


@pytest.fixture
def video(tmp_path: Path) -> Path:
    path = tmp_path / "ep01.mkv"
    path.write_bytes(b"")
    return path


def test_extract_builds_one_command(video: Path, tmp_path: Path):
    handler = fake_handler()
    tracks = [SubtitleTrack(id=2, codec="SubRip/SRT", language="eng"),
              SubtitleTrack(id=3, codec="SubStationAlpha", language="jpn")]
    output_dir = tmp_path / "tracks"

    files = SubtitleExtractor(container_handler=handler).extract(video, tracks, output_dir)

    assert files == [output_dir / "ep01.eng.srt", output_dir / "ep01.jpn.ass"]
    handler.run_command.assert_called_once_with([
        "mkvextract", "tracks", str(video),
        f"2:{output_dir / 'ep01.eng.srt'}",
        f"3:{output_dir / 'ep01.jpn.ass'}",
    ])


def test_extract_without_tracks(video: Path, tmp_path: Path):
    handler = fake_handler()

    with pytest.raises(NoTracksError):
        SubtitleExtractor(container_handler=handler).extract(video, [], tmp_path)
    handler.run_command.assert_not_called()


def test_extract_missing_source(tmp_path: Path):
    track = SubtitleTrack(id=2, codec="SubRip/SRT", language="eng")

    with pytest.raises(FileNotFoundError):
        SubtitleExtractor(container_handler=fake_handler()).extract(
            tmp_path / "gone.mkv", [track], tmp_path)


def test_missing_outputs_are_dropped(video: Path, tmp_path: Path):
    output_dir = tmp_path / "tracks"
    handler = MagicMock()

    def run_command(cmd):
        # Only the first track is written
        _, out = cmd[3].split(":", 1)
        Path(out).write_text("x", encoding="utf-8")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    handler.run_command.side_effect = run_command
    tracks = [SubtitleTrack(id=2, codec="SubRip/SRT", language="eng"),
              SubtitleTrack(id=3, codec="SubRip/SRT", language="jpn")]

    files = SubtitleExtractor(container_handler=handler).extract(video, tracks, output_dir)

    assert files == [output_dir / "ep01.eng.srt"]


def test_no_outputs_is_verification_error(video: Path, tmp_path: Path):
    track = SubtitleTrack(id=2, codec="SubRip/SRT", language="eng")

    with pytest.raises(ExtractionVerificationError):
        SubtitleExtractor(container_handler=fake_handler(write_outputs=False)).extract(
            video, [track], tmp_path / "tracks")


def test_mkvextract_failure_reaches_caller(video: Path, tmp_path: Path):
    track = SubtitleTrack(id=2, codec="SubRip/SRT", language="eng")
    failed = subprocess.CompletedProcess([], 2, stdout="", stderr="Error: track 2 does not exist")

    with patch("core.video_containers.subprocess.run", return_value=failed):
        with pytest.raises(ExternalToolError) as excinfo:
            SubtitleExtractor().extract(video, [track], tmp_path / "tracks")

    assert excinfo.value.returncode == 2
    assert "track 2 does not exist" in str(excinfo.value)
