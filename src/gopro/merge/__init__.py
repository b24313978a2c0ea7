"""Merging of fragmented recordings.

- batch: `merge_recordings` concatenates each recording's fragments, in part
  order, into one file named after the recording.
"""
from .batch import STATUS_OUTPUT_EXISTS, merge_one, merge_recordings

__all__ = [
    "merge_recordings",
    "merge_one",
    "STATUS_OUTPUT_EXISTS",
]
