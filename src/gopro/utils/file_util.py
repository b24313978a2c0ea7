"""
Path helpers for the input and output directories of a run.

Paths arrive from the command line and may carry shell artefacts; they are
cleaned once here so the rest of the toolkit can join names onto them safely.
"""
import os
import platform
from pathlib import Path

from gopro.errors import FilesystemError


def clean_path(raw: str | Path) -> Path:
    """
    Normalize a user supplied directory path.

    Windows shells leave a trailing double quote when a quoted path ends with a
    backslash (`"C:\\Videos\\"`), so that quote is dropped before normalizing.
    """
    text = str(raw)
    if platform.system() == "Windows":
        text = text.removesuffix('"')
    return Path(os.path.normpath(os.path.expanduser(text)))


def list_entry_names(directory: Path) -> list[str]:
    """
    Return the names of the regular files directly inside `directory`.

    Sub-directories are ignored; fragments never live below the input folder.
    Raises FilesystemError when the directory cannot be listed.
    """
    try:
        with os.scandir(directory) as entries:
            return sorted(entry.name for entry in entries if entry.is_file())
    except OSError as e:
        raise FilesystemError(directory, e.strerror or str(e)) from e
