"""Tests for output targets and the stdout guard."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

from runformat.errors import ConfigurationError
from runformat.output import (
    FILE,
    PATH,
    STDOUT,
    STDOUT_CONFLICT,
    OutputTarget,
    StdoutGuard,
    open_sink,
    path_handle,
)


class TestStdoutGuard:
    def test_first_bind_succeeds(self):
        guard = StdoutGuard()
        assert guard.bind("pretty") is True
        assert guard.bound_count == 1
        assert guard.bound_spec == "pretty"

    def test_second_bind_fails_without_changing_state(self):
        guard = StdoutGuard()
        guard.bind("pretty")
        assert guard.bind("usage") is False
        assert guard.bound_count == 1
        assert guard.bound_spec == "pretty"

    def test_release(self):
        guard = StdoutGuard()
        guard.bind("pretty")
        guard.release()
        assert guard.bind("usage") is True

    def test_guards_are_independent(self):
        first, second = StdoutGuard(), StdoutGuard()
        assert first.bind("pretty")
        assert second.bind("pretty")


class TestOpenSink:
    def test_stdout_without_destination(self):
        target = open_sink(None, StdoutGuard())
        assert target.kind == STDOUT
        assert target.stream is sys.stdout
        assert not target.owns_stream
        assert target.describe() == "<stdout>"

    def test_second_stdout_fails(self):
        guard = StdoutGuard()
        open_sink(None, guard)
        with pytest.raises(ConfigurationError) as exc_info:
            open_sink(None, guard)
        assert str(exc_info.value) == STDOUT_CONFLICT

    def test_opens_utf8_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out.txt"
            target = open_sink(str(path), StdoutGuard())
            assert target.kind == FILE
            assert target.path == path
            assert target.owns_stream
            target.stream.write("h\u00e9llo")
            target.stream.close()
            assert path.read_bytes() == "h\u00e9llo".encode("utf-8")

    def test_truncates_existing_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out.txt"
            path.write_text("old content", encoding="utf-8")
            target = open_sink(str(path), StdoutGuard())
            target.stream.close()
            assert path.read_text(encoding="utf-8") == ""

    def test_file_does_not_touch_guard(self):
        guard = StdoutGuard()
        with tempfile.TemporaryDirectory() as tmpdir:
            target = open_sink(os.path.join(tmpdir, "a.txt"), guard)
            target.stream.close()
        assert guard.bound_count == 0

    def test_creates_parent_dirs(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "deeper" / "out.json"
            target = open_sink(str(path), StdoutGuard())
            target.stream.close()
            assert path.parent.is_dir()
            assert path.exists()

    def test_unportable_dir_name_fails(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            monkeypatch.chdir(tmpdir)
            destination = "target/invalid_path_!@#$%^&*()/impossible.json"
            with pytest.raises(ConfigurationError) as exc_info:
                open_sink(destination, StdoutGuard())
            assert str(exc_info.value) == (
                "Could not create dirs for formatter output file " + destination
            )
            assert not Path("target").exists()

    def test_file_name_is_not_checked_for_portability(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = open_sink(os.path.join(tmpdir, "report?.json"), StdoutGuard())
            target.stream.close()

    def test_parent_is_a_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            blocker = Path(tmpdir) / "blocker"
            blocker.write_text("x", encoding="utf-8")
            destination = str(blocker / "sub" / "out.json")
            with pytest.raises(ConfigurationError, match="Could not create dirs"):
                open_sink(destination, StdoutGuard())

    def test_unopenable_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigurationError) as exc_info:
                open_sink(tmpdir, StdoutGuard())
            assert str(exc_info.value) == (
                f"Could not open formatter output file {tmpdir}"
            )


class TestPathHandle:
    def test_does_not_touch_filesystem(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            destination = os.path.join(tmpdir, "missing", "report")
            target = path_handle(destination)
            assert target == OutputTarget(kind=PATH, path=Path(destination))
            assert not Path(destination).exists()
            assert target.stream is None
            assert target.describe() == destination
