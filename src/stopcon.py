"""
stopcon: rename and merge fragmented GoPro recordings.

The camera splits long recordings into several files. This script finds the
fragments in a directory, groups them by recording id and then either renames
each fragment to a readable, sortable name or merges the fragments of each
recording into one file.

Examples:
    stopcon --input-dir /Volumes/GoPro/DCIM/100GOPRO rename
    stopcon --input-dir ./clips rename --commit
    stopcon --input-dir ./clips merge --output-dir ./merged
"""

import argparse
import os
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

import gopro as gopro_module
from gopro.config import MergeOptions, RenameOptions, RunConfig
from gopro.errors import ConfigError, EmptyResultError, FilesystemError
from gopro.media import core as media
from gopro.merge import merge_recordings
from gopro.recording import CollectResult, collect_recordings
from gopro.rename import rename_fragments
from gopro.utils import (
    DEBUG,
    FFMPEG_BINARY,
    FFPROBE_BINARY,
    STATUS_DRY_RUN,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    WORKERS,
    LogLevel,
    logger,
    system_util,
    time_util,
)


@dataclass
class RunSummary:
    """Everything a run decided, per fragment and per recording."""

    collected: CollectResult
    renames: list[tuple[Path, Path | None, str]] = field(default_factory=list)
    merges: list[tuple[str, Path | None, str]] = field(default_factory=list)

    def count(self, status: str) -> int:
        statuses = [s for _, _, s in self.renames] + [s for _, _, s in self.merges]
        return sum(1 for s in statuses if s.startswith(status))


def run(
        config: RunConfig,
        probe: Callable[[Path], media.Metadata] = media.probe_metadata,
        concatenate: Callable[..., None] = media.concatenate,
        show_progress: bool = True,
) -> RunSummary:
    """
    Collect the recordings of `config.input_dir`, then rename and/or merge them.

    Raises:
        FilesystemError: the input directory cannot be listed.
        EmptyResultError: no GoPro-named fragment was found.
    """
    collected = collect_recordings(
        config.input_dir,
        probe=probe,
        workers=config.workers,
        strict_codec=config.strict_codec,
        show_progress=show_progress,
    )
    summary = RunSummary(collected)
    recordings = collected.collection.recordings()

    if config.rename is not None:
        logger.safe_print("\n=== Renaming ===" if config.rename.commit else "\n=== Renaming (Dry Run) ===")
        summary.renames = rename_fragments(
            recordings, config.input_dir, commit=config.rename.commit, show_progress=show_progress
        )

    if config.merge is not None:
        logger.safe_print("\n=== Merging ===")
        summary.merges = merge_recordings(
            recordings,
            config.input_dir,
            config.merge.output_dir,
            overwrite=config.merge.overwrite,
            concatenate=concatenate,
            show_progress=show_progress,
        )

    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stopcon",
        description="Rename and merge GoPro video fragments. Uses ffprobe for metadata and ffmpeg for merging.",
        epilog="Example: stopcon --input-dir ./DCIM/100GOPRO rename --commit",
    )
    parser.add_argument("--input-dir", required=True, help="directory containing GoPro video files")
    parser.add_argument(
        "--workers",
        type=int,
        default=WORKERS,
        help=f"parallel ffprobe workers (default: {WORKERS} or $STOPCON_WORKERS)",
    )
    parser.add_argument(
        "--strict-codec",
        action="store_true",
        help="reject fragments whose codec differs from the rest of their recording",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {gopro_module.__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="{rename,merge}")

    rename_parser = subparsers.add_parser("rename", help="rename GoPro video files")
    rename_parser.add_argument("--commit", action="store_true", help="really rename files, not just do a dry run")

    merge_parser = subparsers.add_parser("merge", help="merge GoPro video files")
    merge_parser.add_argument(
        "--output-dir", required=True, help="directory to output merged GoPro video files"
    )
    merge_parser.add_argument("--overwrite", action="store_true", help="replace merged files that already exist")

    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    config = RunConfig(
        input_dir=Path(args.input_dir),
        workers=args.workers,
        strict_codec=args.strict_codec,
        debug=args.debug or DEBUG,
    )
    if args.command == "rename":
        config.rename = RenameOptions(commit=args.commit)
    elif args.command == "merge":
        config.merge = MergeOptions(output_dir=Path(args.output_dir), overwrite=args.overwrite)
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    gopro_module.DEBUG = config.debug
    logger.set_log_level(LogLevel.DEBUG if config.debug else LogLevel.INFO)

    try:
        config.validate()
    except ConfigError as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e))
        return 2

    system_util.which_or_die(FFPROBE_BINARY)
    if config.merge is not None:
        system_util.which_or_die(FFMPEG_BINARY)

    logger.log(
        "stopcon.start",
        LogLevel.INFO,
        pid=os.getpid(),
        source=str(config.input_dir),
        mode=args.command,
        commit=config.rename.commit if config.rename else None,
        output=str(config.merge.output_dir) if config.merge else None,
        workers=config.workers,
        strict_codec=config.strict_codec,
    )
    start_time = time.time()

    try:
        summary = run(config)
    except (FilesystemError, EmptyResultError) as e:
        logger.log("stopcon.failed", LogLevel.ERROR, error=str(e))
        return 1

    collection = summary.collected.collection
    logger.log(
        "stopcon.end",
        LogLevel.INFO,
        runtime=time_util.format_runtime(time.time() - start_time),
        recordings=len(collection),
        fragments=collection.fragment_count(),
        excluded=len(summary.collected.failures),
        ok=summary.count(STATUS_OK),
        dry_run=summary.count(STATUS_DRY_RUN),
        skip=summary.count(STATUS_SKIP),
        fail=summary.count(STATUS_FAIL),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
