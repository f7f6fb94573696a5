"""fleet-availability: booked-now, next-rentable and day tiles for a rental fleet."""

from fleet_availability.availability import (
    free_windows,
    is_booked_at,
    next_available,
    next_rentable_instant,
)
from fleet_availability.clock import (
    DAY,
    HOUR,
    MINUTE,
    FixedOffsetClock,
    minutes,
    parse_timestamp,
)
from fleet_availability.daygrid import build_day_grid, classify_day
from fleet_availability.engine import (
    AvailabilityPolicy,
    classify_fleet,
    classify_resource,
)
from fleet_availability.intervals import build_intervals, merge_intervals
from fleet_availability.report import AVAILABLE_NOW, availability_to_dict, fleet_to_dict
from fleet_availability.types import (
    Booking,
    BusyInterval,
    ConfigurationError,
    DayStatus,
    DayTile,
    DayWindow,
    Diagnostic,
    ParseError,
    RawReservation,
    Resource,
    ResourceAvailability,
)

__all__ = [
    "AVAILABLE_NOW",
    "AvailabilityPolicy",
    "Booking",
    "BusyInterval",
    "ConfigurationError",
    "DAY",
    "DayStatus",
    "DayTile",
    "DayWindow",
    "Diagnostic",
    "FixedOffsetClock",
    "HOUR",
    "MINUTE",
    "ParseError",
    "RawReservation",
    "Resource",
    "ResourceAvailability",
    "availability_to_dict",
    "build_day_grid",
    "build_intervals",
    "classify_day",
    "classify_fleet",
    "classify_resource",
    "fleet_to_dict",
    "free_windows",
    "is_booked_at",
    "merge_intervals",
    "minutes",
    "next_available",
    "next_rentable_instant",
    "parse_timestamp",
]
