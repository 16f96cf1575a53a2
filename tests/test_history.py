"""Tests for clipwarp.clip.history — the cliphist adapter."""

from __future__ import annotations

import pytest

from clipwarp.clip.history import HistoryAdapter, parse_line
from clipwarp.clip.models import ContentKind
from clipwarp.errors import DaemonError


class TestParseLine:
    def test_text_entry(self) -> None:
        entry = parse_line("7\thello world")
        assert entry is not None
        assert entry.id == "7"
        assert entry.payload == "hello world"
        assert entry.raw_line == "7\thello world"
        assert entry.kind is ContentKind.TEXT

    def test_image_entry(self) -> None:
        entry = parse_line("12\t[[ binary data 48 KiB png 640x480 ]]")
        assert entry is not None
        assert entry.is_image

    def test_image_match_is_case_insensitive(self) -> None:
        entry = parse_line("3\t[[ BINARY data 2 MiB JPEG 10x10 ]]")
        assert entry is not None and entry.kind is ContentKind.IMAGE

    def test_binary_without_image_extension_is_text(self) -> None:
        entry = parse_line("4\t[[ binary data 1 KiB application/pdf ]]")
        assert entry is not None and entry.kind is ContentKind.TEXT

    def test_only_first_tab_splits(self) -> None:
        entry = parse_line("5\tcol1\tcol2")
        assert entry is not None
        assert entry.payload == "col1\tcol2"

    def test_line_without_tab(self) -> None:
        entry = parse_line("99")
        assert entry is not None
        assert entry.id == "99"
        assert entry.payload == ""

    def test_blank_line(self) -> None:
        assert parse_line("") is None
        assert parse_line("   \n") is None


class TestHistoryAdapter:
    def test_list(self, runner) -> None:
        runner.on("cliphist", "list", stdout=b"3\tthird\n\n2\tsecond\n1\t[[ binary data png ]]\n")
        entries = list(HistoryAdapter(runner=runner).list())
        assert [e.id for e in entries] == ["3", "2", "1"]
        assert entries[2].is_image

    def test_list_failure_yields_nothing(self, runner) -> None:
        runner.on("cliphist", "list", returncode=1)
        assert list(HistoryAdapter(runner=runner).list()) == []

    def test_list_is_not_cached(self, runner) -> None:
        adapter = HistoryAdapter(runner=runner)
        runner.on("cliphist", "list", stdout=b"1\tone\n")
        assert len(list(adapter.list())) == 1
        runner.on("cliphist", "list", stdout=b"2\ttwo\n1\tone\n")
        assert len(list(adapter.list())) == 2

    def test_decode(self, runner) -> None:
        runner.on("cliphist", "decode", "7", stdout=b"full content\n")
        assert HistoryAdapter(runner=runner).decode("7") == b"full content\n"
        assert runner.commands() == [["cliphist", "decode", "7"]]

    def test_decode_failure(self, runner) -> None:
        runner.on("cliphist", "decode", returncode=1)
        with pytest.raises(DaemonError):
            HistoryAdapter(runner=runner).decode("7")

    def test_decode_empty(self, runner) -> None:
        runner.on("cliphist", "decode", stdout=b"")
        with pytest.raises(DaemonError):
            HistoryAdapter(runner=runner).decode("7")

    def test_delete_feeds_raw_line(self, runner) -> None:
        assert HistoryAdapter(runner=runner).delete("7", raw_line="7\thello") is True
        assert runner.calls == [(["cliphist", "delete"], b"7\thello")]

    def test_delete_without_raw_line_uses_id(self, runner) -> None:
        HistoryAdapter(runner=runner).delete("8")
        assert runner.calls == [(["cliphist", "delete"], b"8")]

    def test_delete_failure_is_swallowed(self, runner) -> None:
        runner.on("cliphist", "delete", returncode=2)
        assert HistoryAdapter(runner=runner).delete("7") is False

    def test_custom_command(self, runner) -> None:
        runner.on("/opt/cliphist", "list", stdout=b"1\tx\n")
        adapter = HistoryAdapter(command="/opt/cliphist", runner=runner)
        assert [e.id for e in adapter.list()] == ["1"]
