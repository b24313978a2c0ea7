"""Data structures for fragments and the recordings they belong to."""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from gopro.media.core import Metadata
from gopro.naming.patterns import NameKind
from gopro.utils import time_util


@dataclass
class Fragment:
    """One physical file holding part of a recording."""

    recording_id: str
    index: int
    extension: str
    current_name: str
    new_name: str
    metadata: Metadata
    kind: NameKind = NameKind.RAW

    def input_path(self, input_dir: Path) -> Path:
        """Absolute path to the fragment's current location."""
        return input_dir / self.current_name

    def new_path(self, input_dir: Path) -> Path:
        """Absolute path to the fragment's canonical location."""
        return input_dir / self.new_name


@dataclass
class Recording:
    """
    A logical recording made of one or more fragments sharing an id.

    `expected_count` is the highest fragment index seen so far, which is only an
    estimate of the total: trailing fragments may be missing from the folder.
    """

    recording_id: str
    creation_time: Optional[datetime] = None
    codec: Optional[str] = None
    fragments: list[Fragment] = field(default_factory=list)
    expected_count: int = 0
    merged_name: Optional[str] = None

    def creation_time_string(self) -> str:
        return time_util.format_name_timestamp(self.creation_time)

    def ordered_fragments(self) -> list[Fragment]:
        """Fragments in concatenation order."""
        return sorted(self.fragments, key=lambda f: (f.index, f.current_name))

    def missing_indices(self) -> list[int]:
        """Part numbers between 1 and `expected_count` with no fragment."""
        present = {f.index for f in self.fragments}
        return [i for i in range(1, self.expected_count + 1) if i not in present]

    def output_path(self, output_dir: Path) -> Path:
        """Absolute path of the merged file."""
        if self.merged_name is None:
            raise ValueError(f"recording {self.recording_id} has no merged name")
        return output_dir / self.merged_name
