"""Line sources for the CLI: stdin, files, globs, and a rotation-aware tail."""

import glob
import logging
import os
import sys
import time
from typing import Generator, TextIO

logger = logging.getLogger(__name__)

STDIN = "-"

Lines = Generator[tuple[str, str], None, None]


def read_stream(stream: TextIO, name: str = STDIN) -> Lines:
    """Yield (line, name) for each line of an open text stream."""
    for line in stream:
        yield line, name


def read_source(source: str) -> Lines:
    """Yield (line, source) from a file path, or from stdin for '-'."""
    if source == STDIN:
        yield from read_stream(sys.stdin)
        return
    # Log files are not always clean UTF-8; keep going rather than abort the stream
    with open(source, "r", encoding="utf-8", errors="replace") as f:
        yield from read_stream(f, source)


def read_sources(sources: list[str]) -> Lines:
    """Yield lines from each source in turn."""
    for source in sources:
        yield from read_source(source)


def expand_paths(raw_paths: list[str]) -> list[str]:
    """Resolve CLI path arguments into an ordered, de-duplicated source list.

    '-' stands for stdin and is kept as-is. Glob patterns expand in sorted
    order and may match nothing as long as something else matched.

    Raises FileNotFoundError for a plain path that is not a file, or when
    nothing at all is left to read.
    """
    sources = []
    for raw in raw_paths:
        if raw == STDIN:
            matches = [STDIN]
        elif glob.has_magic(raw):
            matches = sorted(p for p in glob.glob(raw) if os.path.isfile(p))
            if not matches:
                logger.info("Pattern %s matched no files", raw)
        elif os.path.isfile(raw):
            matches = [raw]
        else:
            raise FileNotFoundError(f"File not found: {raw}")
        sources.extend(m for m in matches if m not in sources)

    if not sources:
        raise FileNotFoundError("No log files found matching the given paths")
    return sources


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def tail_file(filepath: str, poll_interval: float = 0.1) -> Lines:
    """Follow *filepath* like ``tail -F``, yielding lines appended after start.

    A file that shrinks (truncated in place) is re-read from the top. A file
    replaced under the same name (rotated) is reopened and read from its
    first line. Partial lines are held until their newline arrives.
    """
    f = open(filepath, "rb")
    f.seek(0, os.SEEK_END)
    inode = os.fstat(f.fileno()).st_ino
    pending = b""
    try:
        while True:
            chunk = f.read()
            if chunk:
                pending += chunk
                *complete, pending = pending.split(b"\n")
                for raw in complete:
                    yield _decode(raw) + "\n", filepath
                continue

            time.sleep(poll_interval)
            try:
                stat = os.stat(filepath)
            except FileNotFoundError:
                # Rotated away and not yet recreated
                continue
            if stat.st_ino != inode:
                logger.info("%s was rotated, reopening", filepath)
                f.close()
                f = open(filepath, "rb")
                inode = os.fstat(f.fileno()).st_ino
                pending = b""
            elif stat.st_size < f.tell():
                logger.info("%s was truncated, reading from the start", filepath)
                f.seek(0)
                pending = b""
    finally:
        f.close()
