"""Tests for structured log formatting."""

from datetime import datetime, timezone

from gopro.utils import LogLevel, logger


def test_format_event_with_fields() -> None:
    line = logger.format_event(
        "rename.propose",
        LogLevel.INFO,
        datetime(2023, 6, 1, 10, 0, tzinfo=timezone.utc),
        src="GX010042.mp4",
        dry_run=True,
        parts=2,
        output=None,
    )

    assert line == (
        '2023-06-01 10:00:00 | [INFO] | rename.propose | src="GX010042.mp4" | dry_run=true | parts=2 | output=null'
    )


def test_format_event_escapes_quotes_and_newlines() -> None:
    line = logger.format_event("x", LogLevel.WARN, datetime(2023, 1, 1, tzinfo=timezone.utc), error='bad "a"\nb')

    assert line.endswith('error="bad \\"a\\"\\nb"')


def test_log_respects_level(capsys) -> None:
    previous = logger.get_log_level()
    logger.set_log_level(LogLevel.WARN)
    try:
        logger.log("hidden.event", LogLevel.INFO)
        logger.log("shown.event", LogLevel.ERROR, file="a.mp4")
    finally:
        logger.set_log_level(previous)

    out = capsys.readouterr().out
    assert "hidden.event" not in out
    assert "shown.event" in out
    assert "worker=main" in out
