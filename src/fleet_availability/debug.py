"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from fleet_availability.availability import free_windows
from fleet_availability.report import day_label

if TYPE_CHECKING:
    from fleet_availability.clock import FixedOffsetClock
    from fleet_availability.types import ResourceAvailability

_CHARS_PER_DAY = 48
_MINUTES_PER_CHAR = 30

_STATUS_MARK = {
    "Available": "A",
    "Booked": "B",
    "Heads-up": "H",
}


def _header() -> str:
    hours = "".join(f"{h:02d}" if h % 3 == 0 else "  " for h in range(24))
    return f"{'':>12s}     {hours}"


def show_day_grid(result: ResourceAvailability, clock: FixedOffsetClock) -> str:
    """Print ASCII day grid for one resource.

    Each row is one day of the horizon: its status letter, then 48 cells of
    30 minutes each. '#' = busy (buffer included) at the cell start, '-' = free.
    Returns the string and also prints to stdout.
    """
    lines = [f"=== {result.resource_id} ===", _header()]
    step = _MINUTES_PER_CHAR * 60 * 1000

    for window, tile in result.days:
        row = ["#"] * _CHARS_PER_DAY
        for gap_start, gap_end in free_windows(
            result.intervals, window.from_instant, window.till_instant
        ):
            first = -(-(gap_start - window.from_instant) // step)
            for i in range(first, _CHARS_PER_DAY):
                if window.from_instant + i * step >= gap_end:
                    break
                row[i] = "-"
        mark = _STATUS_MARK[tile.status.value]
        row_str = "".join(row)
        lines.append(f"{day_label(window.local_date):>12s}  {mark}  {row_str}")

    if result.available_now:
        lines.append("Next available: now")
    else:
        lines.append(f"Next available: {clock.isoformat(result.next_available)}")
    lines.append("Legend: A = Available, B = Booked, H = Heads-up, # = busy, - = free")

    output = "\n".join(lines)
    print(output)
    return output


def show_fleet(
    results: Sequence[ResourceAvailability], clock: FixedOffsetClock
) -> str:
    """Print day grids for several resources. Returns the combined string."""
    import contextlib
    import io

    sections: list[str] = []
    for result in results:
        with contextlib.redirect_stdout(io.StringIO()):
            sections.append(show_day_grid(result, clock))
        sections.append("")

    output = "\n".join(sections)
    print(output)
    return output
