"""Tests for the bounded command history."""

import itertools

import pytest

from wren.commands.history import CommandHistory


class TestCommandHistory:
    def test_entries_are_newest_first(self):
        ticks = itertools.count(1)
        history = CommandHistory(clock=lambda: float(next(ticks)))

        history.append("/a", True)
        history.append("/b", False)

        entries = history.entries()
        assert [e.command for e in entries] == ["/b", "/a"]
        assert [e.timestamp for e in entries] == [2.0, 1.0]
        assert [e.success for e in entries] == [False, True]

    def test_capacity_evicts_oldest(self):
        history = CommandHistory(max_size=3)

        for i in range(5):
            history.append(f"/cmd{i}", True)

        assert len(history) == 3
        assert history.recent() == ["/cmd4", "/cmd3", "/cmd2"]

    def test_recent_limit(self):
        history = CommandHistory()
        for i in range(20):
            history.append(f"/cmd{i}", True)

        assert history.recent(limit=2) == ["/cmd19", "/cmd18"]
        assert len(history.recent()) == 10

    def test_default_capacity(self):
        history = CommandHistory()
        for i in range(60):
            history.append("/x", True)

        assert history.max_size == 50
        assert len(history) == 50

    def test_clear(self):
        history = CommandHistory()
        history.append("/x", True)
        history.clear()
        assert len(history) == 0

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            CommandHistory(max_size=size)
