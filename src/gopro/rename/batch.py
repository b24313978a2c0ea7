# python
"""Batch rename of fragments to their canonical names.

Every fragment of every recording is renamed in place, inside the input
directory. Without `commit` the renames are only reported. A fragment already
carrying its canonical name is left alone, so running the batch twice is
harmless. A failure on one file never stops the remaining files.
"""
import shutil
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from gopro.recording.models import Fragment, Recording
from gopro.utils import STATUS_DRY_RUN, STATUS_FAIL, STATUS_OK, STATUS_SKIP, LogLevel, logger

STATUS_ALREADY_RENAMED = f"{STATUS_SKIP} (already renamed)"
STATUS_DESTINATION_EXISTS = f"{STATUS_SKIP} (destination exists)"


def rename_fragments(
        recordings: Iterable[Recording], input_dir: Path, commit: bool = False, show_progress: bool = True
) -> list[tuple[Path, Path | None, str]]:
    """Rename fragments under `input_dir` to their canonical names.

    A committed rename also updates `Fragment.current_name`, so the collected
    recordings keep pointing at the files on disk.

    Args:
        recordings (Iterable[Recording]): Collected recordings, e.g. a RecordingCollection.
        input_dir (Path): Directory holding the fragments.
        commit (bool): Actually move files; otherwise only report the proposal.
        show_progress (bool): Display a progress bar while renaming.

    Returns:
        list of (old_path, new_path, status) for every fragment.
    """
    fragments = [f for recording in recordings for f in recording.ordered_fragments()]

    results: list[tuple[Path, Path | None, str]] = []
    for fragment in tqdm(fragments, desc="Renaming files" if commit else "Planning renames",
                         disable=not show_progress):
        results.append(_rename_one(fragment, input_dir, commit))
    return results


def _rename_one(fragment: Fragment, input_dir: Path, commit: bool) -> tuple[Path, Path | None, str]:
    old = fragment.input_path(input_dir)
    new = fragment.new_path(input_dir)

    if old == new:
        logger.log("rename.already_renamed", LogLevel.INFO, file=old.name)
        return old, new, STATUS_ALREADY_RENAMED

    if new.exists():
        logger.log("rename.exists", LogLevel.WARN, file=old.name, dst=new.name)
        return old, new, STATUS_DESTINATION_EXISTS

    logger.log("rename.propose", LogLevel.INFO, src=old.name, dst=new.name, dry_run=not commit)
    if not commit:
        return old, new, STATUS_DRY_RUN

    try:
        shutil.move(str(old), str(new))
    except (OSError, shutil.Error) as e:
        logger.log("rename.failed", LogLevel.ERROR, file=old.name, error=str(e))
        return old, None, f"{STATUS_FAIL} (rename error: {e})"

    fragment.current_name = fragment.new_name
    logger.log("rename.done", LogLevel.DEBUG, src=old.name, dst=new.name)
    return old, new, STATUS_OK
