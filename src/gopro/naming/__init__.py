"""
Filename grammars shared by fragment parsing, renaming and merging.

Public API (top-level exports)
- `PatternToken`, `Matcher`, `build_matcher`: the grammar engine.
- `RAW`, `RENAMED`, `MERGED`: the three predefined grammars.
- `NameKind`, `NAME_GRAMMARS`: grammars in the priority order used by the parser.
"""
from .patterns import (
    MERGED,
    NAME_GRAMMARS,
    RAW,
    RENAMED,
    Matcher,
    NameKind,
    PatternToken,
    build_matcher,
)

__all__ = [
    "PatternToken",
    "Matcher",
    "build_matcher",
    "RAW",
    "RENAMED",
    "MERGED",
    "NameKind",
    "NAME_GRAMMARS",
]
