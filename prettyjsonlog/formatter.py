"""Output formatters — text, JSON (NDJSON), colorized (ANSI)."""

import json
from typing import Callable

from prettyjsonlog.record import LogRecord

# ANSI color codes
COLORS = {
    "TRACE": "\033[90m",   # grey
    "DEBUG": "\033[36m",   # cyan
    "INFO": "\033[32m",    # green
    "WARN": "\033[33m",    # yellow
    "ERROR": "\033[31m",   # red
    "FATAL": "\033[1;31m", # bold red
}
RESET = "\033[0m"

OUTPUT_FORMATS = ("text", "json")


def _head(record: LogRecord, level_text: str | None, show_rest: bool) -> str:
    parts = []
    if record.timestamp is not None:
        parts.append(record.timestamp.isoformat())
    if level_text is not None:
        parts.append(level_text)
    if record.message is not None:
        parts.append(record.message)
    head = " ".join(parts)
    if show_rest and record.rest:
        # Trailing text after the JSON span goes out exactly as it came in
        head += record.rest
    return head


def _with_stack_trace(head: str, record: LogRecord) -> str:
    if record.stack_trace is None:
        return head
    # Inner line breaks stay; only the final newline is dropped
    trace = record.stack_trace.rstrip("\n")
    return f"{head}\n{trace}" if head else trace


def format_text(record: LogRecord, show_rest: bool = True) -> str:
    """Return '<timestamp> <LEVEL> <message>' plus the stack trace below it."""
    level_text = record.level.name if record.level is not None else None
    return _with_stack_trace(_head(record, level_text, show_rest), record)


def format_color(record: LogRecord, show_rest: bool = True, colors: dict | None = None) -> str:
    """Return the text layout with an ANSI-colored level."""
    colors = colors if colors is not None else COLORS
    level_text = None
    if record.level is not None:
        color = colors.get(record.level.name, "")
        level_text = f"{color}{record.level.name}{RESET}" if color else record.level.name
    return _with_stack_trace(_head(record, level_text, show_rest), record)


def format_json(record: LogRecord, show_rest: bool = True) -> str:
    """Return NDJSON with the normalized fields, compatible with jq."""
    data = {
        "timestamp": record.timestamp.isoformat() if record.timestamp is not None else None,
        "level": record.level.name if record.level is not None else None,
        "message": record.message,
        "stack_trace": record.stack_trace,
    }
    if show_rest and record.rest:
        data["rest"] = record.rest
    return json.dumps(data)


def get_formatter(
    output_format: str = "text",
    color: bool = False,
    show_rest: bool = True,
    colors: dict | None = None,
) -> Callable[[LogRecord], str]:
    """Factory that returns the right formatter based on options."""
    if output_format == "json":
        return lambda record: format_json(record, show_rest=show_rest)
    if color:
        return lambda record: format_color(record, show_rest=show_rest, colors=colors)
    return lambda record: format_text(record, show_rest=show_rest)


def render_line(raw: str, record: LogRecord | None, formatter: Callable[[LogRecord], str]) -> str:
    """Format a record, or pass the raw line through when nothing was extracted."""
    if record is None or record.is_empty:
        return raw.rstrip("\r\n")
    return formatter(record)
