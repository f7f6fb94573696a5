"""Day tiles: classify each local day of the horizon for one resource.

The decision per (resource, day) is a single pass with three terminal
outcomes: Available, Booked, Heads-up.

Displayed times are the unbuffered human pickup/return, even though the
buffered interval drove the classification.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from fleet_availability.types import BusyInterval, DayStatus, DayTile, DayWindow

if TYPE_CHECKING:
    from fleet_availability.clock import FixedOffsetClock


_AVAILABLE = DayTile(DayStatus.AVAILABLE)


def overlapping(
    window: DayWindow, merged: Sequence[BusyInterval]
) -> list[BusyInterval]:
    """Merged intervals intersecting the day window.

    An interval that reaches the day only through the preparation buffer of
    a pickup on a later day is not occupancy and is left out.
    """
    return [
        iv for iv in merged
        if iv.overlaps(window.from_instant, window.till_instant)
        and _first_pickup(iv) < window.till_instant
    ]


def _first_pickup(iv: BusyInterval) -> int:
    # Bare intervals (no bookings) count from their own start.
    return min((b.pickup for b in iv.bookings), default=iv.start)


def classify_day(
    window: DayWindow,
    merged: Sequence[BusyInterval],
    early_cutoff_hour: int,
    clock: FixedOffsetClock,
) -> DayTile:
    """Classify one day for one resource.

    1. No overlapping interval: Available. A buffer leading into a pickup
       after midnight does not count as overlapping.
    2. A reservation is picked up during the day: Booked, showing the
       earliest such reservation's pickup and return.
    3. A carry-over from an earlier day ends during the day: Heads-up with
       the human return (back_time) and buffered end (free_time), unless the
       return is before early_cutoff_hour local, which leaves the day
       Available.
    4. Otherwise the day is covered to midnight: Booked, no times.
    """
    day = overlapping(window, merged)
    if not day:
        return _AVAILABLE

    pickups = [
        b for iv in day for b in iv.bookings if window.contains(b.pickup)
    ]
    if pickups:
        first = min(pickups, key=lambda b: (b.pickup, b.return_))
        return DayTile(
            DayStatus.BOOKED,
            booked_from=first.pickup,
            booked_until=first.return_,
        )

    carry_over = [
        iv for iv in day
        if iv.start < window.from_instant and iv.end < window.till_instant
    ]
    if carry_over:
        iv = min(carry_over, key=lambda c: c.end)
        back = max((b.return_ for b in iv.bookings), default=iv.end)
        # Returned overnight, before opening hours.
        if back < window.from_instant or clock.local_hour(back) < early_cutoff_hour:
            return _AVAILABLE
        return DayTile(
            DayStatus.HEADS_UP,
            back_time=back,
            free_time=iv.end if iv.end != back else None,
        )

    return DayTile(DayStatus.BOOKED)


def build_day_grid(
    windows: Sequence[DayWindow],
    merged: Sequence[BusyInterval],
    early_cutoff_hour: int,
    clock: FixedOffsetClock,
) -> list[tuple[DayWindow, DayTile]]:
    """One (window, tile) pair per day window, in window order."""
    return [
        (window, classify_day(window, merged, early_cutoff_hour, clock))
        for window in windows
    ]
