"""
Renaming of fragments to their canonical names.

- batch: `rename_fragments` walks collected recordings and renames (or, in a
  dry run, only reports) every fragment whose name is not canonical yet.

Core renaming returns `(old_path, new_path, status)` tuples; status is one of
OK, DRY-RUN, SKIP (already renamed / destination exists) or FAIL (...).
"""
from .batch import (
    STATUS_ALREADY_RENAMED,
    STATUS_DESTINATION_EXISTS,
    rename_fragments,
)

__all__ = [
    "rename_fragments",
    "STATUS_ALREADY_RENAMED",
    "STATUS_DESTINATION_EXISTS",
]
