"""Booked-now and next-rentable queries over a merged interval list.

All functions are read-only and expect the output of merge_intervals:
sorted by start, disjoint, with strict gaps between intervals.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterator, Sequence

from fleet_availability.types import BusyInterval


def is_booked_at(merged: Sequence[BusyInterval], instant: int) -> bool:
    """True iff instant lies in [start, end) of some merged interval."""
    # Last interval starting at or before instant is the only candidate.
    idx = bisect_right(merged, instant, key=lambda iv: iv.start) - 1
    return idx >= 0 and instant < merged[idx].end


def next_rentable_instant(
    merged: Sequence[BusyInterval],
    from_: int,
    min_gap: int,
) -> int:
    """Earliest instant >= from_ that opens a free gap of at least min_gap.

    If from_ is inside a busy interval the candidate moves to its end. A
    free gap shorter than min_gap before the next booking is not rentable,
    so the candidate skips past that booking as well. The trailing gap after
    the last interval is unbounded and always qualifies.

    A return value equal to from_ means "available now".
    """
    candidate = from_
    for iv in merged:
        if iv.end <= candidate:
            continue
        if iv.start <= candidate:
            candidate = iv.end
            continue
        if iv.start - candidate >= min_gap:
            return candidate
        candidate = iv.end
    return candidate


def next_available(
    merged: Sequence[BusyInterval],
    now: int,
    min_gap: int,
) -> int | None:
    """next_rentable_instant from now, or None when rentable right now."""
    instant = next_rentable_instant(merged, now, min_gap)
    return None if instant == now else instant


def free_windows(
    merged: Sequence[BusyInterval],
    start: int,
    end: int,
) -> Iterator[tuple[int, int]]:
    """Yield the free (gap_start, gap_end) ranges inside [start, end)."""
    cursor = start
    for iv in merged:
        if iv.end <= cursor:
            continue
        if iv.start >= end:
            break
        if iv.start > cursor:
            yield (cursor, iv.start)
        cursor = max(cursor, iv.end)
    if cursor < end:
        yield (cursor, end)
