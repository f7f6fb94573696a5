"""Per-resource classification: composition of the availability primitives.

Pipeline for one resource:
    reservations -> build_intervals -> merge_intervals
                 -> is_booked_at / next_available      (now)
                 -> build_day_grid                     (horizon days)

Each resource is classified independently from an immutable snapshot.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence

from fleet_availability.availability import is_booked_at, next_available
from fleet_availability.clock import HOUR, FixedOffsetClock
from fleet_availability.daygrid import build_day_grid
from fleet_availability.intervals import build_intervals, merge_intervals
from fleet_availability.types import (
    ConfigurationError,
    Diagnostic,
    RawReservation,
    Resource,
    ResourceAvailability,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_GAP = 4 * HOUR
DEFAULT_EARLY_CUTOFF_HOUR = 6
DEFAULT_HORIZON_DAYS = 4


@dataclass(frozen=True)
class AvailabilityPolicy:
    """Policy parameters for one classification run. Immutable.

    min_gap: shortest free duration (ms) that counts as rentable.
    early_cutoff_hour: local hour before which an overnight return does
        not block the day.
    horizon_days: number of day tiles, starting with today.
    """

    clock: FixedOffsetClock
    min_gap: int = DEFAULT_MIN_GAP
    early_cutoff_hour: int = DEFAULT_EARLY_CUTOFF_HOUR
    horizon_days: int = DEFAULT_HORIZON_DAYS

    def __post_init__(self) -> None:
        errors: list[str] = []
        if not isinstance(self.clock, FixedOffsetClock):
            errors.append(f"clock must be a FixedOffsetClock, got {self.clock!r}")
        for name in ("min_gap", "early_cutoff_hour", "horizon_days"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")
        if errors:
            raise ConfigurationError(errors)

        if self.min_gap < 0:
            errors.append(f"min_gap must be non-negative, got {self.min_gap}")
        if not 0 <= self.early_cutoff_hour <= 23:
            errors.append(
                f"early_cutoff_hour must be 0-23, got {self.early_cutoff_hour}"
            )
        if self.horizon_days < 1:
            errors.append(f"horizon_days must be >= 1, got {self.horizon_days}")
        if errors:
            raise ConfigurationError(errors)


def classify_resource(
    resource: Resource,
    reservations: Iterable[RawReservation],
    now: int,
    policy: AvailabilityPolicy,
) -> ResourceAvailability:
    """Booked-now, next rentable instant and day tiles for one resource."""
    diagnostics: list[Diagnostic] = []
    raw = build_intervals(resource, reservations, policy.clock, diagnostics)
    merged = merge_intervals(raw)

    windows = policy.clock.day_windows(now, policy.horizon_days)
    days = build_day_grid(windows, merged, policy.early_cutoff_hour, policy.clock)

    result = ResourceAvailability(
        resource_id=resource.id,
        booked_now=is_booked_at(merged, now),
        next_available=next_available(merged, now, policy.min_gap),
        days=tuple(days),
        intervals=tuple(merged),
        diagnostics=tuple(diagnostics),
    )
    logger.debug(
        "Resource %s: %d reservations -> %d busy intervals, booked_now=%s, "
        "%d dropped",
        resource.id, len(raw) + len(diagnostics), len(merged),
        result.booked_now, len(diagnostics),
    )
    return result


def classify_fleet(
    resources: Sequence[Resource],
    reservations: Iterable[RawReservation],
    now: int,
    policy: AvailabilityPolicy,
) -> list[ResourceAvailability]:
    """Classify every resource, in the order given.

    Reservations are grouped by resource_id first; those naming a resource
    not in the list are ignored.
    """
    by_resource: dict[str, list[RawReservation]] = defaultdict(list)
    for reservation in reservations:
        by_resource[reservation.resource_id].append(reservation)

    known = {r.id for r in resources}
    for resource_id in by_resource.keys() - known:
        logger.debug(
            "Ignoring %d reservations for unknown resource %s",
            len(by_resource[resource_id]), resource_id,
        )

    return [
        classify_resource(resource, by_resource.get(resource.id, ()), now, policy)
        for resource in resources
    ]
