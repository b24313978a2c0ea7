"""
Run configuration.

A run always reads one input directory and performs one or both of the two
modes: renaming fragments in place, and merging recordings into an output
directory. Paths are cleaned on construction; `validate` checks that the
combination makes sense before any file is touched.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gopro.errors import ConfigError
from gopro.utils import DEBUG, WORKERS, file_util


@dataclass
class RenameOptions:
    commit: bool = False  # really rename files, not just do a dry run


@dataclass
class MergeOptions:
    output_dir: Path
    overwrite: bool = False

    def __post_init__(self):
        self.output_dir = file_util.clean_path(self.output_dir)


@dataclass
class RunConfig:
    input_dir: Path
    rename: Optional[RenameOptions] = None
    merge: Optional[MergeOptions] = None
    workers: int = WORKERS
    strict_codec: bool = False
    debug: bool = DEBUG

    def __post_init__(self):
        self.input_dir = file_util.clean_path(self.input_dir)

    def validate(self) -> None:
        """Raise ConfigError unless the configuration can be run."""
        if self.rename is None and self.merge is None:
            raise ConfigError("no subcommand was picked; choose rename and/or merge")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        if not self.input_dir.is_dir():
            raise ConfigError(f"input directory does not exist: {self.input_dir}")
        if self.merge is not None and self.merge.output_dir.exists() and not self.merge.output_dir.is_dir():
            raise ConfigError(f"output path is not a directory: {self.merge.output_dir}")
