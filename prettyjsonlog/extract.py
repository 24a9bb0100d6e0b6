"""Field extractors — timestamp, level, message, stack trace.

Each extractor walks a fixed, priority-ordered table of candidate keys.
Support for another logging framework is added by adding a row, not a branch.

Candidate keys are literal: "log.level" is one key, not a path.
"""

from typing import Callable, NamedTuple

from prettyjsonlog.levels import Level, level_from_code, level_from_name
from prettyjsonlog.nodes import JsonNode, JsonNumber, JsonObject, JsonString
from prettyjsonlog.timestamps import Timestamp, parse_epoch_millis, parse_iso_timestamp

# ---------------------------------------------------------------------------
# Candidate tables
# ---------------------------------------------------------------------------

TIMESTAMP_KEYS = (
    "timestamp",   # generic
    "time",        # Cloud Logging, slog, Bunyan, Pino
    "@timestamp",  # Logstash Logback Encoder, ECS
    "ts",
    "timeMillis",  # Log4j2 JsonLayout
    "@t",          # Serilog compact
)

# Value kind -> parser. A kind missing here means "absent".
TIMESTAMP_PARSERS: dict[type, Callable[[JsonNode], Timestamp | None]] = {
    JsonString: lambda node: parse_iso_timestamp(node.value),
    JsonNumber: lambda node: parse_epoch_millis(node.value),
}


class LevelStrategy(NamedTuple):
    keys: tuple[str, ...]
    kind: type
    convert: Callable[[JsonNode], Level | None]


LEVEL_STRATEGIES = (
    # Named: "INFO", "warning", "Information", ...
    LevelStrategy(
        keys=("level", "severity", "log.level", "@l"),
        kind=JsonString,
        convert=lambda node: level_from_name(node.value),
    ),
    # Numeric: Bunyan/Pino codes 10..60
    LevelStrategy(
        keys=("level",),
        kind=JsonNumber,
        convert=lambda node: level_from_code(node.value),
    ),
)

MESSAGE_KEYS = ("message", "msg", "error.message", "@m")

STACK_TRACE_KEYS = ("stack_trace", "exception", "error.stack_trace", "err.stack", "@x")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _first_present(obj: JsonObject, keys) -> JsonNode | None:
    for key in keys:
        node = obj.get(key)
        if node is not None:
            return node
    return None


def _first_of_kind(obj: JsonObject, keys, kind: type) -> JsonNode | None:
    for key in keys:
        node = obj.get(key)
        if isinstance(node, kind):
            return node
    return None


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def extract_timestamp(node: JsonNode) -> Timestamp | None:
    """Normalize the first present timestamp key to a UTC instant.

    Only the first candidate key found is considered; if its value cannot be
    parsed the result is None even when later candidates exist.
    """
    if not isinstance(node, JsonObject):
        return None
    value = _first_present(node, TIMESTAMP_KEYS)
    if value is None:
        return None
    parse = TIMESTAMP_PARSERS.get(type(value))
    if parse is None:
        return None
    return parse(value)


def extract_level(node: JsonNode) -> Level | None:
    """Map a level field to the canonical scale.

    Strategies run in order. The first strategy that finds a key holding its
    value kind decides the outcome, recognized or not.
    """
    if not isinstance(node, JsonObject):
        return None
    for strategy in LEVEL_STRATEGIES:
        value = _first_of_kind(node, strategy.keys, strategy.kind)
        if value is not None:
            return strategy.convert(value)
    return None


def extract_message(node: JsonNode) -> str | None:
    if not isinstance(node, JsonObject):
        return None
    value = _first_of_kind(node, MESSAGE_KEYS, JsonString)
    return value.value if value is not None else None


def extract_stack_trace(node: JsonNode) -> str | None:
    """Return the first string-valued stack trace field verbatim.

    Null values (e.g. ECS "error.stack_trace": null) are skipped.
    """
    if not isinstance(node, JsonObject):
        return None
    value = _first_of_kind(node, STACK_TRACE_KEYS, JsonString)
    return value.value if value is not None else None
