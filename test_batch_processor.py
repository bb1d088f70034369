#!/usr/bin/env python3
"""Tests for batch extract-and-merge with a stand-in mkvtoolnix."""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from core.exceptions import DirectoryNotFoundError, ExternalToolError, NoTracksError
from core.subtitle_formats import SRTParser
from processors.batch_processor import BatchProcessor, BatchState
from ui.interactive import TrackSelector
from utils.config import ToolConfig


def subtitle_track(track_id, language, name=None, codec="SubRip/SRT"):
    properties = {"language": language}
    if name:
        properties["track_name"] = name
    return {"id": track_id, "type": "subtitles", "codec": codec, "properties": properties}


STANDARD_LAYOUT = [
    {"id": 0, "type": "video", "codec": "AVC/H.264/MPEG-4p10"},
    subtitle_track(2, "eng"),
    subtitle_track(3, "jpn"),
]


class FakeMkvToolNix:
    """Answers ``mkvmerge -J`` from a per-file layout and writes files for ``mkvextract``."""

    def __init__(self, layouts):
        self.layouts = layouts
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        if cmd[1] == "-J":
            layout = self.layouts[Path(cmd[2]).name]
            if layout is None:
                return subprocess.CompletedProcess(cmd, 2, stdout="", stderr="Error: broken file")
            return subprocess.CompletedProcess(cmd, 0, stdout=json.dumps({"tracks": layout}), stderr="")

        for spec in cmd[3:]:
            track_id, out = spec.split(":", 1)
            Path(out).write_text(f"1\n00:00:01,000 --> 00:00:02,000\ntrack {track_id}\n",
                                 encoding="utf-8")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


def make_season(directory: Path, layouts) -> FakeMkvToolNix:
    for name in layouts:
        (directory / name).write_bytes(b"")
    (directory / "notes.txt").write_text("not a container", encoding="utf-8")
    return FakeMkvToolNix(layouts)


def scripted_selector(*answers):
    replies = iter(answers)
    return TrackSelector(input_func=lambda prompt: next(replies), output_func=lambda line: None)


def test_single_selection_covers_the_season(tmp_path: Path):
    fake = make_season(tmp_path, {
        "ep01.mkv": STANDARD_LAYOUT,
        "ep02.mkv": [subtitle_track(7, "jpn"), subtitle_track(8, "eng")],
        "ep03.mkv": STANDARD_LAYOUT,
    })
    selector = scripted_selector("2", "1")
    processor = BatchProcessor(selector=selector)

    with patch("core.video_containers.subprocess.run", side_effect=fake):
        results = processor.run(tmp_path)

    assert selector.prompt_count == 1
    assert results["total"] == 3 and results["successful"] == 3 and results["failed"] == 0
    assert results["prompts"] == 1
    assert results["processed_files"] == [
        str(tmp_path / "ep01.jpneng.srt"),
        str(tmp_path / "ep02.jpneng.srt"),
        str(tmp_path / "ep03.jpneng.srt"),
    ]
    assert processor.state == BatchState.DONE

    # ep02 lists the same tracks under other ids; the remembered ones are found again
    extract_calls = [c for c in fake.calls if c[1] == "tracks"]
    assert [c[3].split(":", 1)[0] for c in extract_calls] == ["3", "7", "3"]
    assert (tmp_path / "tracks" / "ep02.jpn.srt").exists()

    merged = SRTParser.read(tmp_path / "ep02.jpneng.srt").cues
    assert [c.text for c in merged] == ['<font color="white">track 7</font>',
                                        '<font color="yellow">track 8</font>']


def test_changed_layout_prompts_again(tmp_path: Path):
    fake = make_season(tmp_path, {
        "ep01.mkv": STANDARD_LAYOUT,
        "ep02.mkv": [subtitle_track(2, "eng", name="Signs"), subtitle_track(3, "jpn")],
        "ep03.mkv": [subtitle_track(2, "eng", name="Signs"), subtitle_track(3, "jpn")],
    })
    selector = scripted_selector("1", "2", "1", "2")

    with patch("core.video_containers.subprocess.run", side_effect=fake):
        results = BatchProcessor(selector=selector).run(tmp_path)

    assert selector.prompt_count == 2
    assert results["successful"] == 3


def test_failure_aborts_by_default(tmp_path: Path):
    fake = make_season(tmp_path, {
        "ep01.mkv": STANDARD_LAYOUT,
        "ep02.mkv": None,
        "ep03.mkv": STANDARD_LAYOUT,
    })

    with patch("core.video_containers.subprocess.run", side_effect=fake):
        with pytest.raises(ExternalToolError):
            BatchProcessor(selector=scripted_selector("1", "2")).run(tmp_path)

    assert not (tmp_path / "ep03.engjpn.srt").exists()


def test_keep_going_records_failures(tmp_path: Path):
    fake = make_season(tmp_path, {
        "ep01.mkv": STANDARD_LAYOUT,
        "ep02.mkv": None,
        "ep03.mkv": STANDARD_LAYOUT,
    })

    with patch("core.video_containers.subprocess.run", side_effect=fake):
        results = BatchProcessor(selector=scripted_selector("1", "2"), keep_going=True).run(tmp_path)

    assert results["successful"] == 2 and results["failed"] == 1
    assert "ep02.mkv" in results["errors"][0]
    assert (tmp_path / "ep03.engjpn.srt").exists()


def test_single_track_file_fails_without_prompting(tmp_path: Path):
    fake = make_season(tmp_path, {"ep01.mkv": [subtitle_track(2, "eng")]})
    selector = scripted_selector()

    with patch("core.video_containers.subprocess.run", side_effect=fake):
        with pytest.raises(NoTracksError):
            BatchProcessor(selector=selector).run(tmp_path)

    assert selector.prompt_count == 0
    assert not any(c[1] == "tracks" for c in fake.calls)


def test_empty_directory(tmp_path: Path):
    results = BatchProcessor(selector=scripted_selector()).run(tmp_path)

    assert results["total"] == 0 and results["successful"] == 0


def test_missing_directory(tmp_path: Path):
    with pytest.raises(DirectoryNotFoundError):
        BatchProcessor(selector=scripted_selector()).run(tmp_path / "nowhere")


def test_unlistable_directory(tmp_path: Path, monkeypatch):
    def deny(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(type(tmp_path), "iterdir", deny)

    with pytest.raises(PermissionError):
        BatchProcessor(selector=scripted_selector()).run(tmp_path)


def test_configured_extensions_select_containers(tmp_path: Path):
    fake = make_season(tmp_path, {"ep01.MKA": STANDARD_LAYOUT, "ep02.mkv": STANDARD_LAYOUT})

    with patch("core.video_containers.subprocess.run", side_effect=fake):
        results = BatchProcessor(ToolConfig(container_extensions=["mka"]),
                                 selector=scripted_selector("1", "2")).run(tmp_path)

    assert results["processed_files"] == [str(tmp_path / "ep01.engjpn.srt")]
