"""
Module for turning a bare filename into a fully populated Fragment.

A name is tried against the renamed, raw and merged grammars in that order and
the first full match wins. The matched file is then probed for its codec and
creation time, and its canonical name is computed right away so later stages
only ever read it.
"""
from pathlib import Path
from typing import Any, Callable

from gopro.errors import UnrecognizedNameError
from gopro.media import core as media
from gopro.naming import NAME_GRAMMARS, RENAMED, NameKind
from gopro.recording.models import Fragment
from gopro.utils import LogLevel, logger

Prober = Callable[[Path], media.Metadata]


def match_name(name: str) -> tuple[NameKind, dict[str, Any]]:
    """Return the grammar kind and field values for `name`.

    Raises UnrecognizedNameError when no grammar matches the whole name.
    """
    for kind, matcher in NAME_GRAMMARS:
        fields = matcher.parse(name)
        if fields is not None:
            return kind, fields
    raise UnrecognizedNameError(name)


def render_fragment_name(metadata: media.Metadata, recording_id: str, index: int, extension: str) -> str:
    return RENAMED.render(metadata.creation_time_string(), recording_id, index, extension)


def parse_fragment(name: str, input_dir: Path, probe: Prober = media.probe_metadata) -> Fragment:
    """
    Parse a fragment by its name and embedded metadata.

    Merged names carry no part number; they are given index 0.

    Raises:
        UnrecognizedNameError: the name matches none of the grammars.
        MetadataUnavailableError: probing the file failed.
    """
    kind, fields = match_name(name)
    recording_id = fields["id"]
    index = fields.get("index", 0)
    extension = fields["extension"].lower()

    logger.log("collect.match", LogLevel.TRACE, file=name, kind=kind.value, id=recording_id, index=index)

    metadata = probe(input_dir / name)

    return Fragment(
        recording_id=recording_id,
        index=index,
        extension=extension,
        current_name=name,
        new_name=render_fragment_name(metadata, recording_id, index, extension),
        metadata=metadata,
        kind=kind,
    )
