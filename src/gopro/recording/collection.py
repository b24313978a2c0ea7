"""
Aggregation of parsed fragments into recordings.

`RecordingCollection.add` is called once per directory entry from many worker
threads at once. Parsing and probing, the slow part, run outside the lock; the
lock only guards the short fold of a finished Fragment into its Recording.

`collect_recordings` lists a directory, fans the entries out to a thread pool,
waits for every entry to finish, and returns the collection together with the
entries that could not be used.
"""
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator, Optional

from tqdm import tqdm

from gopro.errors import CodecMismatchError, EmptyResultError, StopconError
from gopro.media import core as media
from gopro.naming import MERGED
from gopro.recording import parser
from gopro.recording.models import Fragment, Recording
from gopro.utils import WORKERS, LogLevel, file_util, logger


class RecordingCollection:
    """Recordings keyed by id, safe for concurrent `add` calls."""

    def __init__(self, input_dir: Path, probe: parser.Prober = media.probe_metadata, strict_codec: bool = False):
        self.input_dir = input_dir
        self.strict_codec = strict_codec
        self._probe = probe
        self._lock = threading.Lock()
        self._recordings: dict[str, Recording] = {}

    def add(self, name: str) -> Fragment:
        """
        Parse `name` and fold the resulting fragment into its recording.

        The first fragment seen for a recording sets the recording's creation
        time; every later fragment has its creation time normalized to it. The
        fragment's canonical name was rendered while parsing and is left as is.

        Raises UnrecognizedNameError, MetadataUnavailableError, or with
        `strict_codec` CodecMismatchError. Nothing is changed when it raises.
        """
        fragment = parser.parse_fragment(name, self.input_dir, self._probe)
        mismatch: Optional[str] = None

        with self._lock:
            recording = self._recordings.get(fragment.recording_id)

            if recording is not None and recording.codec != fragment.metadata.codec:
                if self.strict_codec:
                    raise CodecMismatchError(recording.recording_id, recording.codec, fragment.metadata.codec)
                mismatch = recording.codec

            if recording is None:
                recording = Recording(recording_id=fragment.recording_id, codec=fragment.metadata.codec)
                self._recordings[fragment.recording_id] = recording

            if recording.creation_time is not None:
                fragment.metadata = replace(fragment.metadata, creation_time=recording.creation_time)
            else:
                recording.creation_time = fragment.metadata.creation_time

            recording.fragments.append(fragment)
            recording.expected_count = max(recording.expected_count, fragment.index)

            if recording.recording_id and recording.merged_name is None:
                recording.merged_name = MERGED.render(
                    recording.creation_time_string(), recording.recording_id, fragment.extension
                )

        if mismatch is not None:
            logger.log(
                "recording.codec_mismatch",
                LogLevel.WARN,
                id=fragment.recording_id,
                file=name,
                expected=mismatch,
                actual=fragment.metadata.codec,
            )
        return fragment

    def get(self, recording_id: str) -> Optional[Recording]:
        with self._lock:
            return self._recordings.get(recording_id)

    def recordings(self) -> list[Recording]:
        """Snapshot of all recordings ordered by id."""
        with self._lock:
            return [self._recordings[k] for k in sorted(self._recordings)]

    def fragment_count(self) -> int:
        with self._lock:
            return sum(len(r.fragments) for r in self._recordings.values())

    def __iter__(self) -> Iterator[Recording]:
        return iter(self.recordings())

    def __len__(self) -> int:
        with self._lock:
            return len(self._recordings)

    def __contains__(self, recording_id: object) -> bool:
        with self._lock:
            return recording_id in self._recordings


@dataclass
class CollectResult:
    collection: RecordingCollection
    failures: list[tuple[str, StopconError]] = field(default_factory=list)


def collect_recordings(
        input_dir: Path,
        probe: parser.Prober = media.probe_metadata,
        workers: int = WORKERS,
        strict_codec: bool = False,
        show_progress: bool = True,
) -> CollectResult:
    """
    Build a RecordingCollection from every file directly inside `input_dir`.

    Entries that cannot be parsed or probed are logged and returned in
    `failures`; they never abort the batch.

    Raises:
        FilesystemError: the directory cannot be listed.
        EmptyResultError: no entry yielded a fragment.
    """
    names = file_util.list_entry_names(input_dir)
    collection = RecordingCollection(input_dir, probe=probe, strict_codec=strict_codec)
    result = CollectResult(collection)

    logger.log("collect.start", LogLevel.INFO, source=str(input_dir), entries=len(names), workers=workers)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futs = {executor.submit(collection.add, name): name for name in names}
        for fut in tqdm(as_completed(futs), total=len(futs), desc="Analyzing files", disable=not show_progress):
            name = futs[fut]
            try:
                fut.result()
            except StopconError as e:
                logger.log("collect.skip", LogLevel.WARN, file=name, reason=type(e).__name__, error=str(e))
                result.failures.append((name, e))

    if len(collection) == 0:
        raise EmptyResultError(input_dir)

    logger.log(
        "collect.complete",
        LogLevel.INFO,
        recordings=len(collection),
        fragments=collection.fragment_count(),
        skipped=len(result.failures),
    )
    return result
