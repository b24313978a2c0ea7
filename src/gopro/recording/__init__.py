"""
Fragments and the recordings they make up.

Package organization:
- models: `Fragment` and `Recording` data structures.
- parser: filename grammar dispatch plus metadata probing (`parse_fragment`).
- collection: thread-safe aggregation of fragments into recordings
  (`RecordingCollection`) and parallel collection of a directory
  (`collect_recordings`).

Behavior notes:
- A Fragment's canonical name is computed when it is parsed.
- Within one recording, the creation time of the first fragment added wins
  and later fragments are normalized to it.
- `expected_count` is the highest part number seen, not a verified total.
"""
from .models import Fragment, Recording
from .parser import match_name, parse_fragment
from .collection import CollectResult, RecordingCollection, collect_recordings

__all__ = [
    "Fragment",
    "Recording",
    "match_name",
    "parse_fragment",
    "RecordingCollection",
    "CollectResult",
    "collect_recordings",
]
