"""Boundary: FixedOffsetClock, timestamp string / datetime ↔ integer instant.

Instants are epoch milliseconds. The operating zone is a single fixed UTC
offset, set once at the boundary. Precondition: the zone observes no
daylight-saving transitions (e.g. Australia/Brisbane). A zone with DST
cannot be represented by one offset and must not be configured here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from fleet_availability.types import ConfigurationError, DayWindow, ParseError

SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR

# UTC-12:00 .. UTC+14:00 are the widest offsets in use.
_MAX_OFFSET_MINUTES = 14 * 60

_UNIX_EPOCH = datetime(1970, 1, 1)

_TIMESTAMP_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[T ](?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?)?"
    r"(?P<zone>Z|[+-]\d{2}:?\d{2})?$",
    re.ASCII,
)


def minutes(n: int) -> int:
    """Duration of n minutes in milliseconds."""
    return n * MINUTE


def _civil_ms(dt: datetime) -> int:
    """Naive datetime read as UTC, to epoch milliseconds. Exact integer math."""
    delta = dt - _UNIX_EPOCH
    return delta.days * DAY + delta.seconds * SECOND + delta.microseconds // 1000


def _zone_minutes(zone: str, raw: str) -> int:
    if zone == "Z":
        return 0
    sign = -1 if zone[0] == "-" else 1
    digits = zone[1:].replace(":", "")
    hh, mm = int(digits[:2]), int(digits[2:])
    if hh > 23 or mm > 59:
        raise ParseError(raw, f"invalid UTC offset {zone!r}")
    return sign * (hh * 60 + mm)


def _reject_aware(dt: datetime, name: str) -> None:
    if dt.tzinfo is not None:
        raise TypeError(
            f"{name} must be a naive datetime in local civil time, "
            f"got tzinfo={dt.tzinfo!r}."
        )


@dataclass(frozen=True)
class FixedOffsetClock:
    """Converts between timestamps and integer instants. Immutable.

    offset_minutes is the operating zone's offset east of UTC
    (Brisbane: +600). It is required; there is no default.
    """

    offset_minutes: int

    def __post_init__(self) -> None:
        value = self.offset_minutes
        if value is None:
            raise ConfigurationError("utc_offset_minutes is required")
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(
                f"utc_offset_minutes must be an integer, got {value!r}"
            )
        if abs(value) > _MAX_OFFSET_MINUTES:
            raise ConfigurationError(
                f"utc_offset_minutes {value} is outside "
                f"±{_MAX_OFFSET_MINUTES} minutes"
            )

    @property
    def tzinfo(self) -> timezone:
        return timezone(timedelta(minutes=self.offset_minutes))

    def parse(self, ts: str) -> int:
        """Parse a timestamp string to an instant.

        Offset-qualified values ('Z', '+10:00', '-0530') are absolute.
        Naive values are local civil time in this clock's zone.

        Raises ParseError for anything else, including impossible dates.
        """
        if not isinstance(ts, str):
            raise ParseError(ts, "not a string")
        match = _TIMESTAMP_RE.match(ts.strip())
        if match is None:
            raise ParseError(ts)

        fraction = match["fraction"] or "0"
        try:
            civil = datetime(
                int(match["year"]),
                int(match["month"]),
                int(match["day"]),
                int(match["hour"]),
                int(match["minute"]),
                int(match["second"] or 0),
                int(fraction[:6].ljust(6, "0")),
            )
        except ValueError as e:
            raise ParseError(ts, str(e)) from e

        zone = match["zone"]
        if zone is None:
            offset = self.offset_minutes
        else:
            offset = _zone_minutes(zone, ts)
        return _civil_ms(civil) - offset * MINUTE

    def to_local(self, instant: int) -> datetime:
        """Instant to naive local datetime."""
        return _UNIX_EPOCH + timedelta(
            milliseconds=instant + self.offset_minutes * MINUTE
        )

    def from_local(self, dt: datetime) -> int:
        """Naive local datetime to instant. Raises TypeError if dt is aware."""
        _reject_aware(dt, "dt")
        return _civil_ms(dt) - self.offset_minutes * MINUTE

    def local_date(self, instant: int) -> date:
        return self.to_local(instant).date()

    def local_hour(self, instant: int) -> int:
        return self.to_local(instant).hour

    def day_window(self, local_date: date) -> DayWindow:
        """Local midnight-to-midnight window for a date."""
        start = self.from_local(datetime.combine(local_date, time(0, 0)))
        return DayWindow(local_date, start, start + DAY)

    def day_windows(self, now: int, days: int) -> list[DayWindow]:
        """Windows for today (local date of now) and the following days."""
        today = self.local_date(now)
        return [self.day_window(today + timedelta(days=i)) for i in range(days)]

    def format_hhmm(self, instant: int) -> str:
        return self.to_local(instant).strftime("%H:%M")

    def format_time(self, instant: int, on_date: date) -> str:
        """'HH:MM' when the instant falls on on_date, else 'Sun 19 Jan 10:00'."""
        local = self.to_local(instant)
        if local.date() == on_date:
            return local.strftime("%H:%M")
        return local.strftime("%a %d %b %H:%M")

    def isoformat(self, instant: int) -> str:
        """Offset-qualified ISO 8601 string, e.g. '2025-01-06T13:15:00+10:00'."""
        local = self.to_local(instant).replace(tzinfo=self.tzinfo)
        return local.isoformat(timespec="seconds")


def parse_timestamp(ts: str, offset_minutes: int) -> int:
    """Parse ts to an instant under a fixed UTC offset (see FixedOffsetClock.parse)."""
    return FixedOffsetClock(offset_minutes).parse(ts)
