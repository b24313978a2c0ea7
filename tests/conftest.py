"""Shared fixtures: fake ffprobe/ffmpeg capabilities and fragment folders."""

import threading
from datetime import datetime, timezone
from pathlib import Path

import pytest

from gopro.errors import ConcatenationError, MetadataUnavailableError
from gopro.media.core import Metadata

JUNE_FIRST = datetime(2023, 6, 1, 10, 0, 0, 500000, tzinfo=timezone.utc)


class FakeProbe:
    """Stands in for ffprobe, answering from a name -> Metadata table."""

    def __init__(self, default: Metadata | None = None, **by_name):
        self.default = default or Metadata(codec="h264", creation_time=JUNE_FIRST)
        self.by_name = by_name
        self.calls: list[Path] = []
        self._lock = threading.Lock()

    def set(self, name: str, value) -> None:
        self.by_name[name] = value

    def __call__(self, path: Path) -> Metadata:
        with self._lock:
            self.calls.append(path)
        value = self.by_name.get(path.name, self.default)
        if isinstance(value, Exception):
            raise value
        return Metadata(codec=value.codec, creation_time=value.creation_time)


class FakeConcat:
    """Stands in for ffmpeg; writes the joined source bytes to the output."""

    def __init__(self, fail_for: set[str] | None = None):
        self.fail_for = fail_for or set()
        self.calls: list[tuple[Path, list[Path], bool]] = []

    def __call__(self, dst: Path, sources, overwrite: bool = False) -> None:
        self.calls.append((dst, list(sources), overwrite))
        if dst.name in self.fail_for:
            raise ConcatenationError(dst, "ffmpeg exited with code 1")
        dst.write_bytes(b"".join(Path(s).read_bytes() for s in sources))


def missing_creation_time(name: str) -> MetadataUnavailableError:
    return MetadataUnavailableError(name, 'tag "creation_time" not embedded in video')


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def concat() -> FakeConcat:
    return FakeConcat()


@pytest.fixture
def make_files(tmp_path: Path):
    """Create files named `names` inside a fresh input folder."""

    def _make(*names: str, folder: str = "input") -> Path:
        directory = tmp_path / folder
        directory.mkdir(exist_ok=True)
        for name in names:
            (directory / name).write_bytes(name.encode("utf-8"))
        return directory

    return _make
