"""JSON-ready output for the dashboard.

Shape per resource:
    {id, name?, bookedNow, nextAvailable, days: [tile...], diagnostics: [...]}
Shape per tile:
    {date, label, status, bookedFrom?, bookedUntil?, backTime?, freeTime?, detail?}

nextAvailable is an offset-qualified ISO string, or "available-now".
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Sequence

from fleet_availability.daygrid import overlapping
from fleet_availability.types import (
    BusyInterval,
    DayStatus,
    DayTile,
    DayWindow,
    ResourceAvailability,
)

if TYPE_CHECKING:
    from fleet_availability.clock import FixedOffsetClock
    from fleet_availability.engine import AvailabilityPolicy

AVAILABLE_NOW = "available-now"

_DETAIL_MAX_WINDOWS = 3


def day_label(d: date) -> str:
    """Short dashboard label, e.g. 'Mon 06 Jan'."""
    return d.strftime("%a %d %b")


def booked_detail(
    merged: Sequence[BusyInterval],
    window: DayWindow,
    clock: FixedOffsetClock,
) -> str:
    """Buffered busy windows within the day, e.g.

    'Booked windows (incl. buffer): 08:45–13:15, 16:00–24:00 (+1 more)'

    Windows are clipped to the day. Empty string when nothing overlaps.
    """
    day = overlapping(window, merged)
    if not day:
        return ""

    parts = []
    for iv in day[:_DETAIL_MAX_WINDOWS]:
        start = max(iv.start, window.from_instant)
        end = min(iv.end, window.till_instant)
        end_label = "24:00" if end == window.till_instant else clock.format_hhmm(end)
        parts.append(f"{clock.format_hhmm(start)}–{end_label}")

    more = ""
    if len(day) > _DETAIL_MAX_WINDOWS:
        more = f" (+{len(day) - _DETAIL_MAX_WINDOWS} more)"
    return f"Booked windows (incl. buffer): {', '.join(parts)}{more}"


def tile_to_dict(
    window: DayWindow,
    tile: DayTile,
    clock: FixedOffsetClock,
    merged: Sequence[BusyInterval] | None = None,
) -> dict[str, Any]:
    """Serialise one day tile. Optional time fields are omitted when unset."""
    out: dict[str, Any] = {
        "date": window.local_date.isoformat(),
        "label": day_label(window.local_date),
        "status": tile.status.value,
    }
    on = window.local_date
    if tile.booked_from is not None:
        out["bookedFrom"] = clock.format_time(tile.booked_from, on)
    if tile.booked_until is not None:
        out["bookedUntil"] = clock.format_time(tile.booked_until, on)
    if tile.back_time is not None:
        out["backTime"] = clock.format_time(tile.back_time, on)
    if tile.free_time is not None:
        out["freeTime"] = clock.format_time(tile.free_time, on)

    if merged is not None and tile.status is not DayStatus.AVAILABLE:
        detail = booked_detail(merged, window, clock)
        if detail:
            out["detail"] = detail
    return out


def availability_to_dict(
    result: ResourceAvailability,
    policy: AvailabilityPolicy,
    name: str | None = None,
) -> dict[str, Any]:
    clock = policy.clock
    out: dict[str, Any] = {"id": result.resource_id}
    if name is not None:
        out["name"] = name
    out["bookedNow"] = result.booked_now
    out["nextAvailable"] = (
        AVAILABLE_NOW if result.next_available is None
        else clock.isoformat(result.next_available)
    )
    out["days"] = [
        tile_to_dict(window, tile, clock, result.intervals)
        for window, tile in result.days
    ]
    out["diagnostics"] = [
        {
            "reservationId": d.reservation_id,
            "field": d.field,
            "rawValue": d.raw_value,
            "message": d.message,
        }
        for d in result.diagnostics
    ]
    return out


def fleet_to_dict(
    results: Sequence[ResourceAvailability],
    policy: AvailabilityPolicy,
    now: int,
    names: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Whole-dashboard payload: the day header row plus one entry per resource."""
    names = names or {}
    windows = policy.clock.day_windows(now, policy.horizon_days)
    return {
        "generatedAt": policy.clock.isoformat(now),
        "days": [
            {"date": w.local_date.isoformat(), "label": day_label(w.local_date)}
            for w in windows
        ],
        "resources": [
            availability_to_dict(r, policy, names.get(r.resource_id))
            for r in results
        ],
    }
