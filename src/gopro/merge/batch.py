"""
Merging of collected recordings into single files.

Each recording's fragments are concatenated in part order into
`<output_dir>/<merged name>`. A failed merge is reported and the next
recording is processed; nothing is retried and partial output is not removed.
"""
from pathlib import Path
from typing import Callable, Iterable, Sequence

from tqdm import tqdm

from gopro.errors import ConcatenationError, FilesystemError
from gopro.media import core as media
from gopro.recording.models import Recording
from gopro.utils import STATUS_FAIL, STATUS_OK, STATUS_SKIP, LogLevel, logger

Concatenator = Callable[..., None]

STATUS_OUTPUT_EXISTS = f"{STATUS_SKIP} (already exists)"


def merge_recordings(
        recordings: Iterable[Recording],
        input_dir: Path,
        output_dir: Path,
        overwrite: bool = False,
        concatenate: Concatenator = media.concatenate,
        show_progress: bool = True,
) -> list[tuple[str, Path | None, str]]:
    """Merge every recording into one file under `output_dir`.

    Returns:
        list of (recording_id, output_path, status) for every recording.

    Raises:
        FilesystemError: the output directory cannot be created.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(output_dir, e.strerror or str(e)) from e

    recordings = list(recordings)
    results = []
    for recording in tqdm(recordings, desc="Merging recordings", disable=not show_progress):
        results.append(merge_one(recording, input_dir, output_dir, overwrite, concatenate))
    return results


def merge_one(
        recording: Recording, input_dir: Path, output_dir: Path, overwrite: bool, concatenate: Concatenator
) -> tuple[str, Path | None, str]:
    """Merge a single recording."""
    dst = recording.output_path(output_dir)

    missing = recording.missing_indices()
    if missing:
        logger.log(
            "merge.incomplete",
            LogLevel.WARN,
            id=recording.recording_id,
            expected=recording.expected_count,
            found=len(recording.fragments),
            missing=",".join(f"{i:02d}" for i in missing),
        )

    if dst.exists() and not overwrite:
        logger.log("merge.skip", LogLevel.INFO, id=recording.recording_id, dst=dst.name, reason="already exists")
        return recording.recording_id, dst, STATUS_OUTPUT_EXISTS

    sources: Sequence[Path] = [f.input_path(input_dir) for f in recording.ordered_fragments()]
    logger.log("merge.start", LogLevel.INFO, id=recording.recording_id, dst=dst.name, parts=len(sources))

    try:
        concatenate(dst, sources, overwrite=overwrite)
    except ConcatenationError as e:
        logger.log("merge.failed", LogLevel.ERROR, id=recording.recording_id, dst=dst.name, error=e.reason)
        return recording.recording_id, None, f"{STATUS_FAIL} ({e.reason})"

    logger.log("merge.done", LogLevel.INFO, id=recording.recording_id, dst=dst.name)
    return recording.recording_id, dst, STATUS_OK
