"""Busy intervals: build buffered intervals from reservations, then merge.

build_intervals tolerates partial failure: a reservation with a bad
timestamp is dropped and recorded, the rest of the resource continues.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from fleet_availability.types import (
    Booking,
    BusyInterval,
    Diagnostic,
    ParseError,
    RawReservation,
    Resource,
)

if TYPE_CHECKING:
    from fleet_availability.clock import FixedOffsetClock

logger = logging.getLogger(__name__)


def _drop(
    diagnostics: list[Diagnostic] | None,
    resource: Resource,
    reservation: RawReservation,
    field: str,
    raw_value: str,
    message: str,
) -> None:
    logger.warning(
        "Dropping reservation %s for resource %s: %s=%r (%s)",
        reservation.reservation_id, resource.id, field, raw_value, message,
    )
    if diagnostics is not None:
        diagnostics.append(Diagnostic(
            resource_id=resource.id,
            reservation_id=reservation.reservation_id,
            field=field,
            raw_value=raw_value,
            message=message,
        ))


def build_intervals(
    resource: Resource,
    reservations: Iterable[RawReservation],
    clock: FixedOffsetClock,
    diagnostics: list[Diagnostic] | None = None,
) -> list[BusyInterval]:
    """Buffered busy intervals for one resource, in input order (unsorted).

    start = pickup - buffer_before, end = return + buffer_after.
    Reservations for other resources are ignored. A reservation that fails
    to parse, or returns before it is picked up, is dropped and appended
    to diagnostics.
    """
    intervals: list[BusyInterval] = []
    for reservation in reservations:
        if reservation.resource_id != resource.id:
            continue

        try:
            pickup = clock.parse(reservation.pickup_time)
        except ParseError as e:
            _drop(diagnostics, resource, reservation,
                  "pickup_time", reservation.pickup_time, e.reason)
            continue
        try:
            return_ = clock.parse(reservation.return_time)
        except ParseError as e:
            _drop(diagnostics, resource, reservation,
                  "return_time", reservation.return_time, e.reason)
            continue

        if return_ < pickup:
            _drop(diagnostics, resource, reservation,
                  "return_time", reservation.return_time,
                  "return precedes pickup")
            continue

        intervals.append(BusyInterval(
            start=pickup - resource.buffer_before,
            end=return_ + resource.buffer_after,
            bookings=(Booking(pickup, return_, reservation.reservation_id),),
        ))
    return intervals


def _booking_key(b: Booking) -> tuple[int, int]:
    return (b.pickup, b.return_)


def merge_intervals(intervals: Iterable[BusyInterval]) -> list[BusyInterval]:
    """Merge overlapping or touching intervals into a sorted, disjoint list.

    Two intervals merge when next.start <= current.end, so exactly adjacent
    bookings form one continuous busy block. The bookings of merged
    intervals are combined and kept sorted by pickup.
    """
    items = sorted(intervals, key=lambda iv: (iv.start, iv.end))
    if not items:
        return []

    merged: list[BusyInterval] = []
    cur_start = items[0].start
    cur_end = items[0].end
    cur_bookings = list(items[0].bookings)

    for iv in items[1:]:
        if iv.start <= cur_end:
            cur_end = max(cur_end, iv.end)
            cur_bookings.extend(iv.bookings)
        else:
            merged.append(BusyInterval(
                cur_start, cur_end, tuple(sorted(cur_bookings, key=_booking_key))
            ))
            cur_start, cur_end = iv.start, iv.end
            cur_bookings = list(iv.bookings)

    merged.append(BusyInterval(
        cur_start, cur_end, tuple(sorted(cur_bookings, key=_booking_key))
    ))
    return merged
