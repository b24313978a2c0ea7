"""Tests for the filename grammar engine."""

import pytest

from gopro.naming import MERGED, NAME_GRAMMARS, RAW, RENAMED, NameKind, PatternToken, build_matcher


def test_build_matcher_assigns_positions_and_names() -> None:
    matcher = build_matcher(
        "x{}-{}",
        [PatternToken("a", r"[a-z]+"), PatternToken("n", r"[0-9]+", "03d", int)],
    )

    assert [t.index for t in matcher.tokens] == [0, 1]
    assert matcher.tokens_by_name["n"].index == 1
    assert matcher.render("abc", 7) == "xabc-007"
    assert matcher.match("xabc-007") == ("abc", "007")
    assert matcher.parse("xabc-007") == {"a": "abc", "n": 7}


def test_match_requires_whole_name() -> None:
    assert RAW.match("GX010042.mp4") == ("X", "01", "0042", "mp4")
    assert RAW.match("aGX010042.mp4") is None
    assert RAW.match("GX010042.mp4.part") is None
    assert RAW.match("GX0100421.mp4") is None


def test_literal_dot_is_not_a_wildcard() -> None:
    assert RAW.match("GX010042xmp4") is None


def test_value_reads_field_by_token_name() -> None:
    groups = RENAMED.match("Recording _-_ Date 2023-06-01 10_00_00 _-_ ID 0042 _-_ Part 03.mp4")

    assert RENAMED.value(groups, "id") == "0042"
    assert RENAMED.value(groups, "index") == "03"
    assert RENAMED.value(groups, "extension") == "mp4"


def test_renamed_render_matches_canonical_layout() -> None:
    name = RENAMED.render("2023-06-01 10_00_00", "0042", 1, "mp4")

    assert name == "Recording _-_ Date 2023-06-01 10_00_00 _-_ ID 0042 _-_ Part 01.mp4"


def test_merged_render_has_no_part() -> None:
    assert MERGED.render("2023-06-01 10_00_00", "0042", "mp4") == "Recording _-_ Date 2023-06-01 10_00_00 _-_ ID 0042.mp4"


@pytest.mark.parametrize(
    "matcher, fields",
    [
        (RAW, {"codec": "H", "index": 12, "id": "0815", "extension": "MP4"}),
        (RENAMED, {"date": "2021-12-31 23_59_59", "id": "0001", "index": 7, "extension": "mov"}),
        (MERGED, {"date": "2000-01-01 00_00_00", "id": "9999", "extension": "mkv"}),
    ],
)
def test_parse_recovers_rendered_fields(matcher, fields) -> None:
    assert matcher.parse(matcher.render_fields(fields)) == fields


def test_renamed_names_are_never_raw_names() -> None:
    name = RENAMED.render("2023-06-01 10_00_00", "0042", 1, "mp4")

    assert RAW.match(name) is None
    assert MERGED.match(name) is None


def test_grammar_priority_order() -> None:
    assert [kind for kind, _ in NAME_GRAMMARS] == [NameKind.RENAMED, NameKind.RAW, NameKind.MERGED]


def test_render_rejects_wrong_value_count() -> None:
    with pytest.raises(ValueError):
        MERGED.render("2023-06-01 10_00_00", "0042")


def test_template_token_count_must_agree() -> None:
    with pytest.raises(ValueError):
        build_matcher("{}-{}", [PatternToken("a", "a")])


def test_template_rejects_named_placeholders() -> None:
    with pytest.raises(ValueError):
        build_matcher("{a}", [PatternToken("a", "a")])


def test_token_capture_with_own_group_is_rejected() -> None:
    with pytest.raises(ValueError, match="capturing groups"):
        build_matcher("{}.{}", [PatternToken("stem", r"(ab)+"), PatternToken("ext", "mp4")])


def test_token_capture_may_use_non_capturing_groups() -> None:
    matcher = build_matcher("{}.{}", [PatternToken("stem", r"(?:ab)+"), PatternToken("ext", "mp4")])

    assert matcher.parse("abab.mp4") == {"stem": "abab", "ext": "mp4"}
