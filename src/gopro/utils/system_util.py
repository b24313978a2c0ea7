"""
Utility functions for running system commands and verifying binary availability.

This module provides helper functions to execute external commands and check if
required binaries exist in the system's PATH. ffprobe and ffmpeg are the only
external tools the toolkit depends on.

Functions:
    - run_cmd: Executes a system command, optionally feeding it text on stdin,
      and returns its exit code along with its standard output and error streams.
    - which_or_die: Checks for the presence of a specific binary on the system's
      PATH and terminates the process if it is unavailable.
"""
import shutil
import subprocess
import sys
from typing import Tuple, List, Optional

from gopro.utils.logger import safe_print


def run_cmd(cmd: List[str], stdin_text: Optional[str] = None) -> Tuple[int, str, str]:
    """Run a command and return (code, stdout, stderr).

    Raises OSError when the executable cannot be started.
    """
    p = subprocess.run(
        cmd,
        input=stdin_text,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        errors="replace",
    )
    return p.returncode, p.stdout, p.stderr


def which_or_die(binary: str):
    """Check if a binary exists on PATH, exit if not found."""
    if shutil.which(binary) is None:
        safe_print(f"ERROR: '{binary}' not found on PATH. Install it first (e.g. brew install ffmpeg).",
                   file=sys.stderr)
        sys.exit(2)
