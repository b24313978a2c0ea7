"""
Constants and configuration settings for recording processing.

This module contains the defaults used across the toolkit: worker counts,
external tool names, the ffprobe metadata tag and timestamp layouts, and the
status codes reported for every rename and merge decision. Values that are
commonly tuned per machine can be overridden through environment variables,
optionally loaded from a `.env` file.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Run settings
DEBUG = _env_flag("STOPCON_DEBUG")
WORKERS = int(os.getenv("STOPCON_WORKERS", "4"))

# External tools
FFPROBE_BINARY = os.getenv("STOPCON_FFPROBE", "ffprobe")
FFMPEG_BINARY = os.getenv("STOPCON_FFMPEG", "ffmpeg")

# ffprobe format tag carrying the recording start
CREATION_TIME_TAG = "creation_time"

# Timestamp layout embedded in canonical names, e.g. "2023-06-01 10_00_00"
NAME_TIMESTAMP_FORMAT = "%Y-%m-%d %H_%M_%S"

# Timestamp layout reported by ffprobe (fraction and trailing "Z" handled separately)
PROBE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Processing status codes
STATUS_OK = "OK"
STATUS_DRY_RUN = "DRY-RUN"
STATUS_SKIP = "SKIP"
STATUS_FAIL = "FAIL"
