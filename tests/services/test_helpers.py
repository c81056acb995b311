"""Tests for shared service helpers."""

from datetime import datetime

from wingetctl.services._helpers import now_iso, tail


class TestNowIso:
    def test_parseable_with_timezone(self) -> None:
        assert datetime.fromisoformat(now_iso()).tzinfo is not None


class TestTail:
    def test_keeps_last_non_empty_lines(self) -> None:
        text = "a\n\nb\nc\n\n"
        assert tail(text, lines=2) == "b\nc"

    def test_empty(self) -> None:
        assert tail("") == ""
