"""Canonical severity scale with synonym and numeric-code tables."""

from enum import IntEnum


class Level(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50
    FATAL = 60

    def __str__(self) -> str:
        return self.name


# Spellings used by other frameworks (Cloud Logging, Serilog, zap, ...)
SYNONYMS = {
    "verbose": Level.TRACE,
    "information": Level.INFO,
    "notice": Level.INFO,
    "warning": Level.WARN,
    "err": Level.ERROR,
    "critical": Level.FATAL,
    "alert": Level.FATAL,
    "emergency": Level.FATAL,
    "panic": Level.FATAL,
    "dpanic": Level.FATAL,
}

# Bunyan/Pino spacing: multiples of ten
NUMERIC_CODES = {
    10: Level.TRACE,
    20: Level.DEBUG,
    30: Level.INFO,
    40: Level.WARN,
    50: Level.ERROR,
    60: Level.FATAL,
}


def level_from_name(name: str) -> Level | None:
    """Case-insensitive lookup against canonical names and synonyms.

    The name must match exactly apart from case; padded names are unknown.
    """
    key = name.lower()
    for level in Level:
        if level.name.lower() == key:
            return level
    return SYNONYMS.get(key)


def level_from_code(code) -> Level | None:
    """Map a numeric severity code (10..60) to a Level; anything else is None."""
    return NUMERIC_CODES.get(code)
