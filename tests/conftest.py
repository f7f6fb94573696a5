"""Shared test fixtures and data loading for fleet-availability.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference week: Sun 2025-01-05 through Fri 2025-01-10, Australia/Brisbane
(fixed UTC+10:00, no daylight saving).
Times in scenario files are written "mon 09:00" (local civil time).
"""

from __future__ import annotations

import json
from datetime import date, datetime, time
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"
CONFIG_DIR = FIXTURES_DIR / "config"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")

OFFSET_MINUTES: int = _reference["utc_offset_minutes"]

# Day lookup:  DAYS["mon"] → {"date": date(2025, 1, 6), "label": "Mon 06 Jan"}
DAYS: dict[str, dict] = {
    d["name"]: {"date": date.fromisoformat(d["date"]), "label": d["label"]}
    for d in _reference["days"]
}


def _clock():
    from fleet_availability.clock import FixedOffsetClock

    return FixedOffsetClock(OFFSET_MINUTES)


CLOCK = _clock()


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def local_dt(label: str) -> datetime:
    """Naive local datetime from a "mon 09:00" label."""
    day, hhmm = label.split()
    return datetime.combine(DAYS[day]["date"], time.fromisoformat(hhmm))


def t(label: str) -> int:
    """Instant (epoch ms) for a "mon 09:00" local label.

    >>> t("mon 09:00") == CLOCK.parse("2025-01-06T09:00")
    True
    """
    return CLOCK.from_local(local_dt(label))


def ts(label: str) -> str:
    """Naive timestamp string for a "mon 09:00" label: '2025-01-06T09:00'."""
    return local_dt(label).strftime("%Y-%m-%dT%H:%M")


def day_date(day: str) -> date:
    return DAYS[day]["date"]


def make_interval(pair: list[str]):
    """BusyInterval without bookings from ["mon 09:00", "mon 11:00"]."""
    from fleet_availability.types import BusyInterval

    return BusyInterval(t(pair[0]), t(pair[1]))


def make_intervals(pairs: list[list[str]]):
    return [make_interval(p) for p in pairs]


def make_resource(spec: dict):
    """Resource from a scenario dict with buffer minutes."""
    from fleet_availability.clock import minutes
    from fleet_availability.types import Resource

    return Resource(
        id=spec["id"],
        buffer_before=minutes(spec.get("buffer_before_minutes", 0)),
        buffer_after=minutes(spec.get("buffer_after_minutes", 0)),
        name=spec.get("name"),
    )


def make_reservations(entries: list[dict]):
    from fleet_availability.types import RawReservation

    return [
        RawReservation(
            resource_id=e["resource_id"],
            pickup_time=e["pickup_time"],
            return_time=e["return_time"],
            reservation_id=e.get("id"),
        )
        for e in entries
    ]


def make_policy(settings: dict | None = None):
    """AvailabilityPolicy from policy settings (reference offset by default)."""
    from fleet_availability.loaders import policy_from_dict

    data = {"utc_offset_minutes": OFFSET_MINUTES}
    data.update(settings or {})
    return policy_from_dict(data)


def merged_for(resource_spec: dict, reservation_entries: list[dict]):
    """Build and merge the busy intervals for one scenario resource."""
    from fleet_availability.intervals import build_intervals, merge_intervals

    resource = make_resource(resource_spec)
    reservations = make_reservations(reservation_entries)
    return merge_intervals(build_intervals(resource, reservations, CLOCK))


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def clock():
    return CLOCK


@pytest.fixture
def policy():
    """Reference policy: 4 hour minimum gap, 06:00 cutoff, 4 day horizon."""
    return make_policy(
        {"min_gap_minutes": 240, "early_cutoff_hour": 6, "horizon_days": 4}
    )


@pytest.fixture
def fleet():
    from fleet_availability.loaders import load_fleet_json

    return load_fleet_json(CONFIG_DIR / "fleet.json")


@pytest.fixture
def reservations():
    from fleet_availability.loaders import load_reservations_json

    return load_reservations_json(CONFIG_DIR / "reservations.json")
