"""ffprobe and ffmpeg integration.

- core: metadata probing (Metadata, probe_metadata) and stream-copy
  concatenation (concatenate).
"""

from .core import (
    Metadata,
    build_concat_listing,
    build_ffmpeg_concat_cmd,
    build_ffprobe_cmd,
    concatenate,
    parse_probe_output,
    probe_metadata,
)

__all__ = [
    "Metadata",
    "build_ffprobe_cmd",
    "parse_probe_output",
    "probe_metadata",
    "build_concat_listing",
    "build_ffmpeg_concat_cmd",
    "concatenate",
]
