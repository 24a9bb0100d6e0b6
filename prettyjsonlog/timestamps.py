"""Timestamp value — an instant held as integer nanoseconds since the epoch.

Nanoseconds are kept as an int so ISO strings with 9 fractional digits and
exact epoch-millisecond integers survive without float rounding. Only
instants that a datetime can show (years 1 to 9999, UTC) are valid.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, Overflow

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MILLI = 1_000_000
NANOS_PER_MICRO = 1_000

MIN_EPOCH_NANOS = (datetime.min.replace(tzinfo=timezone.utc) - EPOCH) // timedelta(microseconds=1) * NANOS_PER_MICRO
MAX_EPOCH_NANOS = (datetime.max.replace(tzinfo=timezone.utc) - EPOCH) // timedelta(microseconds=1) * NANOS_PER_MICRO + 999

# Loose by one millisecond; Timestamp itself does the exact check
_MIN_EPOCH_MILLIS = MIN_EPOCH_NANOS // NANOS_PER_MILLI - 1
_MAX_EPOCH_MILLIS = MAX_EPOCH_NANOS // NANOS_PER_MILLI + 1

# YYYY-MM-DDTHH:MM[:SS[.fffffffff]](Z|+HH:MM|+HHMM), ASCII digits only
_ISO_RE = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"[Tt](?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})"
    r"(?::(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,9}))?)?"
    r"(?P<offset>[Zz]|[+-][0-9]{2}:?[0-9]{2})"
)


class TimestampRangeError(ValueError):
    """Raised when an instant falls outside years 1..9999 UTC."""


@dataclass(frozen=True)
class Timestamp:
    epoch_nanos: int

    def __post_init__(self):
        if not MIN_EPOCH_NANOS <= self.epoch_nanos <= MAX_EPOCH_NANOS:
            raise TimestampRangeError(f"Instant out of range: {self.epoch_nanos}ns since epoch")

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        """Build from an aware datetime (naive values are taken as UTC)."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls((dt - EPOCH) // timedelta(microseconds=1) * NANOS_PER_MICRO)

    @classmethod
    def from_epoch_millis(cls, millis: int | Decimal) -> "Timestamp":
        """Raises TimestampRangeError for instants a datetime cannot hold."""
        if isinstance(millis, int):
            return cls(millis * NANOS_PER_MILLI)
        # Range-check before multiplying so huge exponents never reach the decimal context
        if not _MIN_EPOCH_MILLIS <= millis <= _MAX_EPOCH_MILLIS:
            raise TimestampRangeError(f"Instant out of range: {millis}ms since epoch")
        return cls(int(millis * NANOS_PER_MILLI))

    @property
    def instant(self) -> datetime:
        """UTC datetime view (truncated to microseconds)."""
        return EPOCH + timedelta(microseconds=self.epoch_nanos // NANOS_PER_MICRO)

    def isoformat(self) -> str:
        """ISO-8601 in UTC with a 'Z' suffix, keeping every significant fraction digit."""
        seconds, nanos = divmod(self.epoch_nanos, NANOS_PER_SECOND)
        base = (EPOCH + timedelta(seconds=seconds)).replace(tzinfo=None).isoformat()
        if nanos:
            base += "." + f"{nanos:09d}".rstrip("0")
        return base + "Z"

    def __str__(self) -> str:
        return self.isoformat()


def parse_iso_timestamp(value: str) -> Timestamp | None:
    """Parse an ISO-8601 / RFC-3339 date-time with an explicit offset.

    Fractions of 0 to 9 digits are accepted. Returns None for anything that
    does not match exactly (no surrounding whitespace), names an impossible
    calendar date/time, or lands outside the representable range.
    """
    m = _ISO_RE.fullmatch(value)
    if not m:
        return None

    offset_str = m.group("offset")
    if offset_str in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset_str[0] == "-" else 1
        digits = offset_str[1:].replace(":", "")
        hours, minutes = int(digits[:2]), int(digits[2:])
        if hours > 23 or minutes > 59:
            return None
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))

    fraction = m.group("fraction") or ""
    nanos = int(fraction.ljust(9, "0")) if fraction else 0

    try:
        dt = datetime(
            int(m.group("year")),
            int(m.group("month")),
            int(m.group("day")),
            int(m.group("hour")),
            int(m.group("minute")),
            int(m.group("second") or 0),
            tzinfo=tz,
        )
        return Timestamp(Timestamp.from_datetime(dt).epoch_nanos + nanos)
    except ValueError:
        # Bad calendar fields, or an offset pushing the instant past year 1/9999
        return None


def parse_epoch_millis(value) -> Timestamp | None:
    """Interpret a JSON number as milliseconds since the Unix epoch.

    Returns None for non-finite or unrepresentable values.
    """
    if isinstance(value, bool):
        return None
    try:
        millis = value if isinstance(value, int) else Decimal(value)
        if isinstance(millis, Decimal) and not millis.is_finite():
            return None
        return Timestamp.from_epoch_millis(millis)
    except (Overflow, InvalidOperation, TypeError, ValueError):
        return None
