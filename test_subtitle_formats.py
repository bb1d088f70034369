#!/usr/bin/env python3
"""Tests for the SRT codec, timing conversion and track equivalence."""

from pathlib import Path

import pytest

from core.exceptions import EmptyFileError, ReadError
from core.subtitle_formats import Cue, SRTParser, SubtitleHeader, SubtitleTrack
from core.timing_utils import TimeConverter

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:02,500
Hello there

2
00:00:03,000 --> 00:00:04,000
<i>Two</i>
lines
"""


def test_srt_timestamp_conversion():
    assert TimeConverter.srt_to_milliseconds("00:00:01,500") == 1500
    assert TimeConverter.srt_to_milliseconds("01:03:45.678") == 3825678
    assert TimeConverter.milliseconds_to_srt(3825678) == "01:03:45,678"
    assert TimeConverter.milliseconds_to_srt(0) == "00:00:00,000"


def test_negative_timestamps_are_kept():
    assert TimeConverter.milliseconds_to_srt(-1500) == "-00:00:01,500"
    assert TimeConverter.srt_to_milliseconds("-00:00:01,500") == -1500


def test_invalid_timestamp_raises():
    with pytest.raises(ValueError):
        TimeConverter.srt_to_milliseconds("00:00:01")
    with pytest.raises(ValueError):
        TimeConverter.parse_srt_timestamp("not a timing line")


def test_parse_srt_content():
    document = SRTParser.parse(SAMPLE_SRT)

    assert document.cues == [
        Cue(start=1000, end=2500, text="Hello there"),
        Cue(start=3000, end=4000, text="<i>Two</i>\nlines"),
    ]


def test_parse_handles_crlf_bom_and_missing_index():
    content = "\ufeff00:00:01,000 --> 00:00:02,000\r\nNo index\r\n\r\n"

    document = SRTParser.parse(content)

    assert document.cues == [Cue(start=1000, end=2000, text="No index")]


def test_leading_block_without_timing_is_header():
    content = "Subtitles by somebody\n\n" + SAMPLE_SRT

    document = SRTParser.parse(content)

    assert document.nodes[0] == SubtitleHeader(text="Subtitles by somebody")
    assert len(document.cues) == 2


def test_stringify_renumbers_cues():
    nodes = [Cue(start=5000, end=6000, text="b"), Cue(start=1000, end=2000, text="a")]

    text = SRTParser.stringify(nodes)

    assert text == ("1\n00:00:05,000 --> 00:00:06,000\nb\n\n"
                    "2\n00:00:01,000 --> 00:00:02,000\na\n")


def test_write_then_read(tmp_path: Path):
    document = SRTParser.parse(SAMPLE_SRT)
    output = tmp_path / "out.srt"

    SRTParser.write(document.nodes, output)

    assert SRTParser.read(output).cues == document.cues


def test_read_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        SRTParser.read(tmp_path / "missing.srt")


def test_read_whitespace_only_file(tmp_path: Path):
    path = tmp_path / "blank.srt"
    path.write_text("   \n\n  \n", encoding="utf-8")

    with pytest.raises(EmptyFileError):
        SRTParser.read(path)


def test_read_unreadable_file(tmp_path: Path, monkeypatch):
    path = tmp_path / "locked.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")

    def deny(file_path):
        raise PermissionError(13, "Permission denied", str(file_path))

    monkeypatch.setattr("core.subtitle_formats.EncodingDetector.read_file_with_encoding", deny)

    with pytest.raises(ReadError):
        SRTParser.read(path)


def test_track_equivalence_ignores_id():
    a = SubtitleTrack(id=2, codec="S_TEXT/UTF8", language="eng")
    b = SubtitleTrack(id=7, codec="S_TEXT/UTF8", language="eng")
    c = SubtitleTrack(id=2, codec="S_TEXT/UTF8", language="eng", is_forced=True)

    assert a.is_equivalent(a)
    assert a.is_equivalent(b) and b.is_equivalent(a)
    assert not a.is_equivalent(c) and not c.is_equivalent(a)


def test_track_describe():
    track = SubtitleTrack(id=3, codec="SubRip/SRT", language="jpn", is_default=True)

    assert track.describe() == "Track ID: 3 | SubRip/SRT | jpn | Unnamed (Default)"
