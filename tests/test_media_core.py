"""Tests for ffprobe output parsing and the ffmpeg concat invocation."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from gopro.errors import ConcatenationError, MetadataUnavailableError
from gopro.media import core
from gopro.utils import system_util


def _probe_json(tags=None, streams=None) -> str:
    return json.dumps(
        {
            "streams": [{"index": 0, "codec_name": "hevc", "codec_type": "video"}] if streams is None else streams,
            "format": {"filename": "GX010042.MP4", "tags": {} if tags is None else tags},
        }
    )


def test_parse_probe_output() -> None:
    out = _probe_json(tags={"creation_time": "2023-06-01T10:00:00.000000Z", "encoder": "GoPro"})

    metadata = core.parse_probe_output(Path("GX010042.MP4"), out)

    assert metadata.codec == "hevc"
    assert metadata.creation_time == datetime(2023, 6, 1, 10, 0, tzinfo=timezone.utc)
    assert metadata.creation_time_string() == "2023-06-01 10_00_00"


@pytest.mark.parametrize(
    "output",
    [
        "not json",
        _probe_json(tags={}),
        _probe_json(tags={"creation_time": 1685613600}),
        _probe_json(tags={"creation_time": "2023-06-01 10:00:00"}),
        _probe_json(tags={"creation_time": "2023-06-01T10:00:00.0Z"}, streams=[]),
        "[]",
        json.dumps({"streams": [{"codec_name": "h264"}], "format": "oops"}),
        json.dumps({"streams": {"a": 1}, "format": {"tags": {"creation_time": "2023-06-01T10:00:00Z"}}}),
        json.dumps({"streams": ["h264"], "format": {"tags": {"creation_time": "2023-06-01T10:00:00Z"}}}),
        json.dumps({"streams": [{"codec_name": 7}], "format": {"tags": {"creation_time": "2023-06-01T10:00:00Z"}}}),
        _probe_json(tags=["creation_time", "2023-06-01T10:00:00Z"]),
    ],
)
def test_parse_probe_output_rejects_unusable_data(output: str) -> None:
    with pytest.raises(MetadataUnavailableError):
        core.parse_probe_output(Path("GX010042.MP4"), output)


def test_probe_metadata_runs_ffprobe(monkeypatch) -> None:
    seen = {}

    def fake_run_cmd(cmd, stdin_text=None):
        seen["cmd"] = cmd
        return 0, _probe_json(tags={"creation_time": "2023-06-01T10:00:00.5Z"}), ""

    monkeypatch.setattr(system_util, "run_cmd", fake_run_cmd)

    metadata = core.probe_metadata(Path("/videos/GX010042.MP4"))

    assert metadata.codec == "hevc"
    assert seen["cmd"][1] == "/videos/GX010042.MP4"
    assert "-show_format" in seen["cmd"]
    assert seen["cmd"][seen["cmd"].index("-select_streams") + 1] == "v:0"


def test_probe_metadata_reports_process_failure(monkeypatch) -> None:
    monkeypatch.setattr(system_util, "run_cmd", lambda cmd, stdin_text=None: (1, "", "Invalid data found"))

    with pytest.raises(MetadataUnavailableError, match="code 1"):
        core.probe_metadata(Path("/videos/GX010042.MP4"))


def test_probe_metadata_reports_missing_binary(monkeypatch) -> None:
    def missing(cmd, stdin_text=None):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(system_util, "run_cmd", missing)

    with pytest.raises(MetadataUnavailableError):
        core.probe_metadata(Path("/videos/GX010042.MP4"))


def test_build_concat_listing_escapes_quotes() -> None:
    listing = core.build_concat_listing([Path("/v/a.mp4"), Path("/v/it's.mp4")])

    assert listing == "file '/v/a.mp4'\nfile '/v/it'\\''s.mp4'\n"


def test_build_ffmpeg_concat_cmd() -> None:
    cmd = core.build_ffmpeg_concat_cmd(Path("/out/merged.mp4"))

    assert cmd[-1] == "/out/merged.mp4"
    assert "-n" in cmd
    assert cmd[cmd.index("-f") + 1] == "concat"
    assert cmd[cmd.index("-i") + 1] == "pipe:"
    assert cmd[cmd.index("-codec") + 1] == "copy"
    assert "-y" in core.build_ffmpeg_concat_cmd(Path("/out/merged.mp4"), overwrite=True)


def test_concatenate_pipes_sources_in_order(monkeypatch) -> None:
    seen = {}

    def fake_run_cmd(cmd, stdin_text=None):
        seen["cmd"] = cmd
        seen["stdin"] = stdin_text
        return 0, "", ""

    monkeypatch.setattr(system_util, "run_cmd", fake_run_cmd)

    core.concatenate(Path("/out/m.mp4"), [Path("/v/GX010042.mp4"), Path("/v/GX020042.mp4")])

    assert seen["stdin"].splitlines() == ["file '/v/GX010042.mp4'", "file '/v/GX020042.mp4'"]
    assert seen["cmd"][-1] == "/out/m.mp4"


def test_concatenate_failure(monkeypatch) -> None:
    monkeypatch.setattr(system_util, "run_cmd", lambda cmd, stdin_text=None: (1, "", "Impossible to open"))

    with pytest.raises(ConcatenationError, match="Impossible to open"):
        core.concatenate(Path("/out/m.mp4"), [Path("/v/GX010042.mp4")])


def test_concatenate_requires_sources() -> None:
    with pytest.raises(ConcatenationError):
        core.concatenate(Path("/out/m.mp4"), [])
