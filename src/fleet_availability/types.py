"""Shared types: reservations, busy intervals, day tiles and errors.

Instants are integer epoch milliseconds (UTC). Durations are integer
milliseconds. Only the clock converts to and from datetime.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class RawReservation:
    """One reservation as received from the booking system.

    Timestamps are the unbuffered pickup/return moments, either naive local
    time or offset-qualified. Buffers are applied by the engine.
    """

    resource_id: str
    pickup_time: str
    return_time: str
    reservation_id: str | None = None


@dataclass(frozen=True)
class Resource:
    """A rentable resource and its logistics buffers (milliseconds)."""

    id: str
    buffer_before: int = 0
    buffer_after: int = 0
    name: str | None = None

    def __post_init__(self) -> None:
        errors = [
            f"{name} must be a non-negative integer, got {value!r}"
            for name, value in (
                ("buffer_before", self.buffer_before),
                ("buffer_after", self.buffer_after),
            )
            if not _is_int(value) or value < 0
        ]
        if errors:
            raise ConfigurationError(errors, source=f"resource {self.id!r}")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Booking:
    """Normalised, unbuffered human times of one reservation."""

    pickup: int
    return_: int
    reservation_id: str | None = None


@dataclass(frozen=True)
class BusyInterval:
    """Half-open [start, end) during which a resource is not rentable.

    Invariants after merging a resource's intervals:
        - Sorted by start
        - end[i] < start[i + 1]
        - bookings sorted by pickup
    """

    start: int
    end: int
    bookings: tuple[Booking, ...] = ()

    def contains(self, instant: int) -> bool:
        return self.start <= instant < self.end

    def overlaps(self, start: int, end: int) -> bool:
        """Whether this interval intersects the half-open range [start, end)."""
        return self.start < end and self.end > start


@dataclass(frozen=True)
class DayWindow:
    """Local midnight to midnight, as absolute instants. Half-open."""

    local_date: date
    from_instant: int
    till_instant: int

    def contains(self, instant: int) -> bool:
        return self.from_instant <= instant < self.till_instant


class DayStatus(str, enum.Enum):
    AVAILABLE = "Available"
    BOOKED = "Booked"
    HEADS_UP = "Heads-up"


@dataclass(frozen=True)
class DayTile:
    """Status of one resource on one day.

    Booked tiles may carry the human pickup/return of the first reservation
    starting that day. Heads-up tiles carry the human return (back_time) and
    the buffered instant the resource is truly free (free_time).
    """

    status: DayStatus
    booked_from: int | None = None
    booked_until: int | None = None
    back_time: int | None = None
    free_time: int | None = None


@dataclass(frozen=True)
class Diagnostic:
    """A reservation dropped while building intervals."""

    resource_id: str
    reservation_id: str | None
    field: str
    raw_value: str
    message: str


@dataclass(frozen=True)
class ResourceAvailability:
    """Per-resource result of the engine.

    next_available is None when the resource can be rented right now.
    """

    resource_id: str
    booked_now: bool
    next_available: int | None
    days: tuple[tuple[DayWindow, DayTile], ...]
    intervals: tuple[BusyInterval, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def available_now(self) -> bool:
        return self.next_available is None


class ParseError(ValueError):
    """Raised when a timestamp does not match the accepted formats."""

    def __init__(self, raw_value: object, reason: str = "unrecognised format") -> None:
        self.raw_value = raw_value
        self.reason = reason
        super().__init__(f"Cannot parse timestamp {raw_value!r}: {reason}")


class ConfigurationError(ValueError):
    """Raised at setup when configuration is missing or invalid."""

    def __init__(self, errors: list[str] | str, source: str | None = None) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        self.source = source
        header = "Invalid configuration"
        if source:
            header += f" in {source}"
        super().__init__(header + ":\n" + "\n".join(f"  - {e}" for e in self.errors))
