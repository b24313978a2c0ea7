"""
Filename grammars for GoPro recordings.

A grammar is written once as a template with positional `{}` placeholders and
an ordered list of tokens. Each token carries both a regular expression
fragment (used to match names) and a format specification (used to render
names), so the matching pattern and the output template are always derived
from the same source and can never drift apart:

    RAW      "G{}{}{}.{}"                                   GX010042.MP4
    RENAMED  "Recording _-_ Date {} _-_ ID {} _-_ Part {}.{}"
    MERGED   "Recording _-_ Date {} _-_ ID {}.{}"

Whatever a Matcher renders it can parse back into the same values.
"""
import re
import string
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Mapping


@dataclass(frozen=True)
class PatternToken:
    """A named field: how to capture it, how to render it, how to convert it."""

    name: str
    capture: str
    format_spec: str = ""
    convert: Callable[[str], Any] = str
    index: int = -1


@dataclass(frozen=True)
class Matcher:
    template: str
    tokens: tuple[PatternToken, ...]
    tokens_by_name: Mapping[str, PatternToken] = field(repr=False)
    regex: re.Pattern = field(repr=False)
    layout: str = field(repr=False)

    def match(self, name: str) -> tuple[str, ...] | None:
        """Return the captured strings in token order, or None unless the whole name matches."""
        m = self.regex.fullmatch(name)
        if m is None:
            return None
        return m.groups()

    def parse(self, name: str) -> dict[str, Any] | None:
        """Match `name` and return converted values keyed by token name."""
        groups = self.match(name)
        if groups is None:
            return None
        return {t.name: t.convert(groups[t.index]) for t in self.tokens}

    def value(self, groups: tuple[str, ...], token_name: str) -> str:
        """Read a raw captured value by token name."""
        return groups[self.tokens_by_name[token_name].index]

    def render(self, *values) -> str:
        """Render values given in token order."""
        if len(values) != len(self.tokens):
            raise ValueError(f"expected {len(self.tokens)} values, got {len(values)}")
        return self.layout.format(*values)

    def render_fields(self, fields: Mapping[str, Any]) -> str:
        """Render values keyed by token name."""
        return self.render(*(fields[t.name] for t in self.tokens))


def build_matcher(template: str, tokens: list[PatternToken]) -> Matcher:
    """
    Compile `template` and `tokens` into a Matcher.

    Every `{}` placeholder of the template is bound, in order, to one token.
    Literal text between placeholders is escaped for the regular expression
    and kept verbatim for rendering. Token names are expected to be unique.

    Each token contributes exactly one capture group, so group k of a match is
    token k-1. A token capture must therefore not define groups of its own;
    use `(?:...)` for grouping.

    Raises ValueError when the placeholder count differs from the token count,
    the template uses anything other than bare `{}` placeholders, or a token
    capture contains a capturing group.
    """
    for t in tokens:
        if re.compile(t.capture).groups:
            raise ValueError(f"token {t.name!r} capture must not contain capturing groups: {t.capture!r}")

    indexed = tuple(replace(t, index=i) for i, t in enumerate(tokens))

    literals: list[str] = []
    placeholders = 0
    trailing = ""
    for literal, field_name, spec, conversion in string.Formatter().parse(template):
        if field_name is None:
            trailing = literal
            continue
        if field_name or spec or conversion:
            raise ValueError(f"template placeholders must be bare '{{}}': {template!r}")
        literals.append(literal)
        placeholders += 1

    if placeholders != len(indexed):
        raise ValueError(f"template {template!r} has {placeholders} placeholders for {len(indexed)} tokens")

    pattern_parts = []
    layout_parts = []
    for literal, token in zip(literals, indexed):
        pattern_parts.append(re.escape(literal))
        pattern_parts.append(f"({token.capture})")
        layout_parts.append(_escape_braces(literal))
        layout_parts.append("{:" + token.format_spec + "}" if token.format_spec else "{}")
    pattern_parts.append(re.escape(trailing))
    layout_parts.append(_escape_braces(trailing))

    return Matcher(
        template=template,
        tokens=indexed,
        tokens_by_name={t.name: t for t in indexed},
        regex=re.compile("^" + "".join(pattern_parts) + "$"),
        layout="".join(layout_parts),
    )


def _escape_braces(text: str) -> str:
    return text.replace("{", "{{").replace("}", "}}")


TOKEN_DATE = PatternToken("date", r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}_[0-9]{2}_[0-9]{2}")
TOKEN_ID = PatternToken("id", r"[0-9]{4}")
TOKEN_INDEX = PatternToken("index", r"[0-9]{2}", "02d", int)
TOKEN_EXTENSION = PatternToken("extension", r"[a-zA-Z0-9]+")
TOKEN_CODEC = PatternToken("codec", r"[XH]")

# Name as written by the camera.
RAW = build_matcher("G{}{}{}.{}", [TOKEN_CODEC, TOKEN_INDEX, TOKEN_ID, TOKEN_EXTENSION])

# Canonical name of one fragment.
RENAMED = build_matcher(
    "Recording _-_ Date {} _-_ ID {} _-_ Part {}.{}",
    [TOKEN_DATE, TOKEN_ID, TOKEN_INDEX, TOKEN_EXTENSION],
)

# Canonical name of a whole, merged recording.
MERGED = build_matcher("Recording _-_ Date {} _-_ ID {}.{}", [TOKEN_DATE, TOKEN_ID, TOKEN_EXTENSION])


class NameKind(Enum):
    """Which grammar a fragment name was recognized by."""
    RENAMED = "renamed"
    RAW = "raw"
    MERGED = "merged"


# Evaluated in this order; the first full match wins.
NAME_GRAMMARS: tuple[tuple[NameKind, Matcher], ...] = (
    (NameKind.RENAMED, RENAMED),
    (NameKind.RAW, RAW),
    (NameKind.MERGED, MERGED),
)
