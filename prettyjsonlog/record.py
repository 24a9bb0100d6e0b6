"""LogRecord — the four normalized fields of one JSON log line."""

import logging
from dataclasses import dataclass

from prettyjsonlog.extract import (
    extract_level,
    extract_message,
    extract_stack_trace,
    extract_timestamp,
)
from prettyjsonlog.json_parser import DEFAULT_MAX_DEPTH, MalformedJsonError, parse_json
from prettyjsonlog.levels import Level
from prettyjsonlog.nodes import JsonObject
from prettyjsonlog.timestamps import Timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogRecord:
    raw: str
    node: JsonObject
    rest: str = ""
    timestamp: Timestamp | None = None
    level: Level | None = None
    message: str | None = None
    stack_trace: str | None = None

    @property
    def is_empty(self) -> bool:
        """True when none of the four fields could be extracted."""
        return (
            self.timestamp is None
            and self.level is None
            and self.message is None
            and self.stack_trace is None
        )


def extract_record(node: JsonObject, raw: str = "", rest: str = "") -> LogRecord:
    """Run all four extractors over an already-parsed object."""
    return LogRecord(
        raw=raw,
        node=node,
        rest=rest,
        timestamp=extract_timestamp(node),
        level=extract_level(node),
        message=extract_message(node),
        stack_trace=extract_stack_trace(node),
    )


def parse_log_line(line: str, max_depth: int = DEFAULT_MAX_DEPTH) -> LogRecord | None:
    """Parse one log line. Returns None for anything but a JSON object.

    Malformed JSON is logged at DEBUG and treated like plain text.
    """
    stripped = line.rstrip("\r\n")
    try:
        result = parse_json(stripped, max_depth=max_depth)
    except MalformedJsonError as e:
        logger.debug("Malformed JSON line, passing through: %s", e)
        return None

    if result is None or not isinstance(result.node, JsonObject):
        return None

    return extract_record(result.node, raw=stripped, rest=result.rest(stripped))
