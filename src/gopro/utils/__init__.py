"""
A module providing constants, utility functions, and logging mechanisms
for recording processing tasks.

This module includes a collection of constants related to the rename and
merge workflows, utility functions for system operations such as command
execution, path and timestamp helpers, and a thread-safe logging mechanism.
"""

from .constants import (
    CREATION_TIME_TAG,
    DEBUG,
    FFMPEG_BINARY,
    FFPROBE_BINARY,
    NAME_TIMESTAMP_FORMAT,
    PROBE_TIMESTAMP_FORMAT,
    STATUS_DRY_RUN,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    WORKERS,
)
from .logger import LogLevel

__all__ = [
    "DEBUG",
    "WORKERS",
    "FFPROBE_BINARY",
    "FFMPEG_BINARY",
    "CREATION_TIME_TAG",
    "NAME_TIMESTAMP_FORMAT",
    "PROBE_TIMESTAMP_FORMAT",
    "STATUS_OK",
    "STATUS_DRY_RUN",
    "STATUS_SKIP",
    "STATUS_FAIL",
    "LogLevel",
]
