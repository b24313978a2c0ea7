"""Error kinds raised while collecting, renaming and merging recordings."""
from pathlib import Path


class StopconError(Exception):
    """Base class for all errors raised by the toolkit."""


class ConfigError(StopconError):
    """The run configuration is incomplete or inconsistent."""


class UnrecognizedNameError(StopconError):
    """A filename matches none of the known recording grammars."""

    def __init__(self, name: str):
        super().__init__(f"name not parseable: {name!r}")
        self.name = name


class MetadataUnavailableError(StopconError):
    """ffprobe failed or returned data that cannot be used."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"metadata unavailable for {path}: {reason}")
        self.path = path
        self.reason = reason


class CodecMismatchError(StopconError):
    """A fragment's codec differs from the codec of its recording."""

    def __init__(self, recording_id: str, expected: str, actual: str):
        super().__init__(f"recording {recording_id} uses codec {expected!r}, fragment has {actual!r}")
        self.recording_id = recording_id
        self.expected = expected
        self.actual = actual


class FilesystemError(StopconError):
    """Listing a directory or renaming a file failed."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ConcatenationError(StopconError):
    """ffmpeg could not merge the fragments of a recording."""

    def __init__(self, output: Path | str, reason: str):
        super().__init__(f"could not merge into {output}: {reason}")
        self.output = output
        self.reason = reason


class EmptyResultError(StopconError):
    """The input directory holds no recognizable recording fragments."""

    def __init__(self, directory: Path | str):
        super().__init__(f"directory {directory} does not contain GoPro-named videos")
        self.directory = directory
