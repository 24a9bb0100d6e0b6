"""Tests for prettyjsonlog/reader.py"""

import io
import os
import threading
import time

import pytest

from prettyjsonlog.reader import STDIN, expand_paths, read_source, read_sources, read_stream, tail_file


def _follow(path, count, timeout=2.0):
    """Start tailing *path* in a thread; returns (received, thread)."""
    received = []

    def consume():
        for line, _ in tail_file(str(path), poll_interval=0.01):
            received.append(line)
            if len(received) == count:
                return

    thread = threading.Thread(target=consume, daemon=True)
    thread.start()
    time.sleep(0.1)
    return received, thread


class TestReadStream:
    def test_yields_lines_with_name(self):
        stream = io.StringIO('{"msg": "a"}\nplain\n')
        assert list(read_stream(stream)) == [('{"msg": "a"}\n', "-"), ("plain\n", "-")]


class TestReadSource:
    def test_reads_all_lines(self, tmp_path):
        path = tmp_path / "test.log"
        path.write_text("line one\nline two\n")
        lines = list(read_source(str(path)))
        assert lines == [("line one\n", str(path)), ("line two\n", str(path))]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.log"
        path.write_text("")
        assert list(read_source(str(path))) == []

    def test_dash_reads_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("from stdin\n"))
        assert list(read_source(STDIN)) == [("from stdin\n", STDIN)]

    def test_invalid_utf8_is_replaced(self, tmp_path):
        path = tmp_path / "bin.log"
        path.write_bytes(b"ok \xff\n")
        assert list(read_source(str(path))) == [("ok \ufffd\n", str(path))]


class TestReadSources:
    def test_reads_files_in_order(self, tmp_path):
        a = tmp_path / "a.log"
        b = tmp_path / "b.log"
        a.write_text("from a\n")
        b.write_text("from b\n")
        lines = list(read_sources([str(a), str(b)]))
        assert [line for line, _ in lines] == ["from a\n", "from b\n"]

    def test_mixes_stdin_and_files(self, tmp_path, monkeypatch):
        a = tmp_path / "a.log"
        a.write_text("from a\n")
        monkeypatch.setattr("sys.stdin", io.StringIO("from stdin\n"))
        lines = list(read_sources([str(a), STDIN]))
        assert lines == [("from a\n", str(a)), ("from stdin\n", STDIN)]


class TestExpandPaths:
    def test_glob_expansion(self, tmp_path):
        for name in ("b.log", "a.log", "c.txt"):
            (tmp_path / name).write_text("x\n")
        result = expand_paths([os.path.join(str(tmp_path), "*.log")])
        assert [os.path.basename(r) for r in result] == ["a.log", "b.log"]

    def test_glob_skips_directories(self, tmp_path):
        (tmp_path / "dir.log").mkdir()
        (tmp_path / "app.log").write_text("x\n")
        result = expand_paths([os.path.join(str(tmp_path), "*.log")])
        assert result == [str(tmp_path / "app.log")]

    def test_deduplication(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("x\n")
        assert expand_paths([str(path), str(path)]) == [str(path)]

    def test_dash_kept(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("x\n")
        assert expand_paths([STDIN, str(path)]) == [STDIN, str(path)]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="File not found"):
            expand_paths([str(tmp_path / "nope.log")])

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            expand_paths([str(tmp_path)])

    def test_empty_glob_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="No log files"):
            expand_paths([os.path.join(str(tmp_path), "*.none")])

    def test_empty_glob_with_other_match(self, tmp_path):
        path = tmp_path / "app.log"
        path.write_text("x\n")
        result = expand_paths([os.path.join(str(tmp_path), "*.none"), str(path)])
        assert result == [str(path)]


class TestTailFile:
    def test_yields_appended_lines(self, tmp_path):
        path = tmp_path / "live.log"
        path.write_text("old line\n")
        received, thread = _follow(path, 2)
        with open(path, "a") as f:
            f.write('{"msg": "new"}\nsecond\n')
        thread.join(timeout=2)

        assert received == ['{"msg": "new"}\n', "second\n"]

    def test_partial_line_held_until_newline(self, tmp_path):
        path = tmp_path / "live.log"
        path.write_text("")
        received, thread = _follow(path, 1)
        with open(path, "a") as f:
            f.write('{"msg": ')
            f.flush()
            time.sleep(0.05)
            f.write('"joined"}\n')
        thread.join(timeout=2)

        assert received == ['{"msg": "joined"}\n']

    def test_truncated_file_read_from_start(self, tmp_path):
        path = tmp_path / "live.log"
        path.write_text("a fairly long line that was already there\n")
        received, thread = _follow(path, 1)
        with open(path, "w") as f:
            f.write("short\n")
        thread.join(timeout=2)

        assert received == ["short\n"]

    def test_rotated_file_reopened(self, tmp_path):
        path = tmp_path / "live.log"
        path.write_text("before rotation\n")
        received, thread = _follow(path, 1)
        os.rename(path, tmp_path / "live.log.1")
        time.sleep(0.05)
        path.write_text("after rotation\n")
        thread.join(timeout=2)

        assert received == ["after rotation\n"]
