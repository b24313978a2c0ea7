"""
A toolkit for organizing fragmented GoPro recordings.

Cameras split a long recording into several files ("chapters") named after
the hardware's own convention. This package identifies those fragments in a
directory, groups them by recording id, gives each fragment a canonical,
human-readable name and can merge all fragments of one recording into a
single output file.

The package is organized into several categories:
- Name grammars shared by parsing and rendering (naming).
- Parsing of fragment filenames and aggregation into recordings (recording).
- ffprobe/ffmpeg integration for metadata and concatenation (media).
- Renaming fragments and merging recordings (rename, merge).
- Utility functions for logging, system commands and file handling (utils).
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
