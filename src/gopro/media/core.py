"""
Functions to read recording metadata with ffprobe and merge fragments with ffmpeg.

This module provides the two external capabilities the toolkit relies on:
probing a fragment for its video codec and creation time, and concatenating
an ordered list of fragments into a single file without re-encoding.
"""
import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Sequence

from gopro.errors import ConcatenationError, MetadataUnavailableError
from gopro.utils import CREATION_TIME_TAG, FFMPEG_BINARY, FFPROBE_BINARY, LogLevel, logger, system_util, time_util


@dataclass
class Metadata:
    """What ffprobe reports about a fragment."""
    codec: str
    creation_time: Optional[datetime] = None

    def creation_time_string(self) -> str:
        return time_util.format_name_timestamp(self.creation_time)


def build_ffprobe_cmd(path: Path) -> List[str]:
    return [
        FFPROBE_BINARY, str(path),
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        "-select_streams", "v:0",
        "-hide_banner",
        "-loglevel", "fatal",
    ]


def parse_probe_output(path: Path, output: str) -> Metadata:
    """
    Extract codec and creation time from ffprobe's JSON output.

    Raises MetadataUnavailableError when the output is not JSON, is not shaped
    like ffprobe output, or carries no usable `creation_time` tag.
    """
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise MetadataUnavailableError(path, f"invalid ffprobe output: {e}") from e
    if not isinstance(data, dict):
        raise MetadataUnavailableError(path, "invalid ffprobe output")

    streams = data.get("streams") or []
    if not isinstance(streams, list) or not streams or not isinstance(streams[0], dict):
        raise MetadataUnavailableError(path, "no video stream")
    codec = streams[0].get("codec_name") or ""
    if not isinstance(codec, str):
        raise MetadataUnavailableError(path, "codec_name is not a string")

    fmt = data.get("format") or {}
    if not isinstance(fmt, dict):
        raise MetadataUnavailableError(path, "invalid format section")
    tags = fmt.get("tags") or {}
    if not isinstance(tags, dict):
        raise MetadataUnavailableError(path, "invalid format tags")
    if CREATION_TIME_TAG not in tags:
        raise MetadataUnavailableError(path, f'tag "{CREATION_TIME_TAG}" not embedded in video')
    raw_time = tags[CREATION_TIME_TAG]
    if not isinstance(raw_time, str):
        raise MetadataUnavailableError(path, f'tag "{CREATION_TIME_TAG}" is not a string')

    try:
        creation_time = time_util.parse_creation_time(raw_time)
    except ValueError as e:
        raise MetadataUnavailableError(path, str(e)) from e

    return Metadata(codec=codec, creation_time=creation_time)


def probe_metadata(path: Path) -> Metadata:
    """Probe a fragment for its codec and creation time."""
    try:
        code, out, err = system_util.run_cmd(build_ffprobe_cmd(path))
    except OSError as e:
        raise MetadataUnavailableError(path, f"could not run ffprobe: {e}") from e
    if code != 0:
        raise MetadataUnavailableError(path, f"ffprobe exited with code {code}: {err.strip()[:200]}")
    return parse_probe_output(path, out)


def build_concat_listing(sources: Sequence[Path]) -> str:
    """Build the concat demuxer script naming each source on its own line."""
    lines = []
    for src in sources:
        quoted = str(src).replace("'", "'\\''")
        lines.append(f"file '{quoted}'\n")
    return "".join(lines)


def build_ffmpeg_concat_cmd(dst: Path, overwrite: bool = False) -> List[str]:
    return [
        FFMPEG_BINARY,
        "-hide_banner",
        "-loglevel", "error",
        "-y" if overwrite else "-n",
        "-protocol_whitelist", "file,pipe",
        "-f", "concat",
        "-safe", "0",
        "-i", "pipe:",
        "-codec", "copy",
        "-map_metadata", "0",
        str(dst),
    ]


def concatenate(dst: Path, sources: Sequence[Path], overwrite: bool = False) -> None:
    """
    Concatenate `sources`, in order, into `dst` with a stream copy.

    The source list is piped to ffmpeg on stdin. A failed run may leave a
    partial output file behind; it is not removed here.

    Raises ConcatenationError when ffmpeg cannot be started or exits non-zero.
    """
    if not sources:
        raise ConcatenationError(dst, "no sources")

    cmd = build_ffmpeg_concat_cmd(dst, overwrite=overwrite)
    logger.log("merge.ffmpeg", LogLevel.DEBUG, dst=dst.name, sources=len(sources))

    try:
        code, _, err = system_util.run_cmd(cmd, stdin_text=build_concat_listing(sources))
    except OSError as e:
        raise ConcatenationError(dst, f"could not run ffmpeg: {e}") from e
    if code != 0:
        raise ConcatenationError(dst, f"ffmpeg exited with code {code}: {err.strip()[:200]}")
