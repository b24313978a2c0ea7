import re
from datetime import datetime, timezone

from gopro.utils.constants import NAME_TIMESTAMP_FORMAT, PROBE_TIMESTAMP_FORMAT

# "2023-06-01T10:00:00.000000Z"; the fraction is optional, the trailing Z is not.
_PROBE_TIMESTAMP_REGEX = re.compile(r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(\.\d+)?Z")


def parse_creation_time(value: str) -> datetime:
    """Parse an ffprobe creation_time tag into an aware UTC datetime.

    Raises ValueError for any other layout.
    """
    m = _PROBE_TIMESTAMP_REGEX.fullmatch(value)
    if not m:
        raise ValueError(f"unsupported timestamp layout: {value!r}")
    parsed = datetime.strptime(m.group(1), PROBE_TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    if m.group(2):
        # Keep microsecond precision only; ffprobe may report more digits.
        parsed = parsed.replace(microsecond=int(m.group(2)[1:7].ljust(6, "0")))
    return parsed


def format_name_timestamp(value: datetime | None) -> str:
    """Format a creation time the way it appears in canonical names."""
    if value is None:
        return ""
    return value.strftime(NAME_TIMESTAMP_FORMAT)


def format_runtime(time_in_seconds: float) -> str:
    runtime_seconds = int(time_in_seconds)
    runtime_hours = runtime_seconds // 3600
    runtime_mins = (runtime_seconds % 3600) // 60
    runtime_secs = runtime_seconds % 60
    return f"{runtime_hours:02d}:{runtime_mins:02d}:{runtime_secs:02d}"
