"""Extract timestamp, level, message and stack trace from JSON log lines."""

from prettyjsonlog.extract import (
    extract_level,
    extract_message,
    extract_stack_trace,
    extract_timestamp,
)
from prettyjsonlog.json_parser import MalformedJsonError, ParseResult, parse_json
from prettyjsonlog.levels import Level
from prettyjsonlog.record import LogRecord, parse_log_line
from prettyjsonlog.timestamps import Timestamp

__all__ = [
    "Level",
    "LogRecord",
    "MalformedJsonError",
    "ParseResult",
    "Timestamp",
    "extract_level",
    "extract_message",
    "extract_stack_trace",
    "extract_timestamp",
    "parse_json",
    "parse_log_line",
]
