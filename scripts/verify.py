#!/usr/bin/env python
"""Visual verification report for fleet-availability.

Run:  uv run python scripts/verify.py

Produces a formatted report showing:
  1. Reference data (zone, offset, day table)
  2. Day-tile scenarios  -- input/output tables
  3. Engine scenarios (booked now, next available)  -- input/output tables
  4. Fleet snapshot from data/fixtures/config  -- ASCII day grids + JSON payload
"""

from __future__ import annotations

import json
import sys
from datetime import date, datetime, time
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"
CONFIG = FIXTURES / "config"

sys.path.insert(0, str(ROOT / "src"))

from fleet_availability.clock import FixedOffsetClock, minutes
from fleet_availability.daygrid import classify_day
from fleet_availability.debug import show_fleet
from fleet_availability.engine import classify_fleet, classify_resource
from fleet_availability.intervals import build_intervals, merge_intervals
from fleet_availability.loaders import (
    load_fleet_json,
    load_policy_json,
    load_reservations_json,
    policy_from_dict,
)
from fleet_availability.report import fleet_to_dict, tile_to_dict
from fleet_availability.types import RawReservation, Resource


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_ref = _load(FIXTURES / "reference.json")
CLOCK = FixedOffsetClock(_ref["utc_offset_minutes"])
DAYS = {d["name"]: date.fromisoformat(d["date"]) for d in _ref["days"]}

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        print(fmt.format(*row))


def instant(label: str) -> int:
    """'mon 09:00' -> instant."""
    day, hhmm = label.split()
    return CLOCK.from_local(datetime.combine(DAYS[day], time.fromisoformat(hhmm)))


def resource_from(spec: dict) -> Resource:
    return Resource(
        spec["id"],
        minutes(spec.get("buffer_before_minutes", 0)),
        minutes(spec.get("buffer_after_minutes", 0)),
    )


def reservations_from(entries: list[dict]) -> list[RawReservation]:
    return [
        RawReservation(e["resource_id"], e["pickup_time"], e["return_time"], e.get("id"))
        for e in entries
    ]


def short(ts: str) -> str:
    """'2025-01-06T09:00' -> '01-06 09:00'."""
    return ts[5:].replace("T", " ")


def pass_fail(ok: bool) -> str:
    return "PASS" if ok else "FAIL"


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------
def section_reference():
    banner("1. Reference data")
    print(f"    Zone: {_ref['zone']}  (fixed offset {CLOCK.offset_minutes:+d} minutes)")
    heading("Days")
    rows = []
    for d in _ref["days"]:
        window = CLOCK.day_window(date.fromisoformat(d["date"]))
        rows.append([
            d["name"], d["date"], d["label"],
            CLOCK.isoformat(window.from_instant), str(window.from_instant),
        ])
    table(["name", "date", "label", "local midnight", "epoch ms"], rows)


def section_day_grid():
    banner("2. Day tiles")
    rows = []
    for spec in _load(SCENARIOS / "day_grid.json"):
        resource = resource_from(spec["resource"])
        merged = merge_intervals(
            build_intervals(resource, reservations_from(spec["reservations"]), CLOCK)
        )
        window = CLOCK.day_window(DAYS[spec["day"]])
        tile = classify_day(window, merged, spec["early_cutoff_hour"], CLOCK)
        out = tile_to_dict(window, tile, CLOCK)
        times = " ".join(
            f"{k}={out[k]}"
            for k in ("bookedFrom", "bookedUntil", "backTime", "freeTime")
            if k in out
        )
        bookings = ", ".join(
            f"{short(r['pickup_time'])}-{short(r['return_time'])}"
            for r in spec["reservations"]
        ) or "-"
        rows.append([
            spec["id"], spec["day"], bookings, out["status"], times,
            pass_fail(out["status"] == spec["expected"]["status"]),
        ])
    table(["scenario", "day", "reservations", "status", "times", ""], rows)


def section_engine():
    banner("3. Booked now / next available")
    rows = []
    for spec in _load(SCENARIOS / "engine.json"):
        policy = policy_from_dict(spec["policy"])
        now = instant(spec["now"])
        result = classify_resource(
            resource_from(spec["resource"]),
            reservations_from(spec["reservations"]),
            now,
            policy,
        )
        expected = spec["expected"]
        nxt = "now" if result.available_now else CLOCK.format_time(
            result.next_available, CLOCK.local_date(now)
        )
        exp_next = expected["next_available"]
        ok = (
            result.booked_now == expected["booked_now"]
            and (
                result.next_available is None if exp_next is None
                else result.next_available == instant(exp_next)
            )
        )
        days = " ".join(tile.status.value[0] for _, tile in result.days)
        rows.append([
            spec["id"], spec["now"], str(result.booked_now), nxt, days, pass_fail(ok),
        ])
    table(["scenario", "now", "booked", "next", "days", ""], rows)


def section_fleet():
    banner("4. Fleet snapshot")
    policy = load_policy_json(CONFIG / "policy.json")
    fleet = load_fleet_json(CONFIG / "fleet.json")
    reservations = load_reservations_json(CONFIG / "reservations.json")
    now = instant("mon 10:00")

    results = classify_fleet(fleet, reservations, now, policy)
    print()
    show_fleet(results, policy.clock)

    heading("Payload")
    names = {r.id: r.name for r in fleet if r.name}
    print(json.dumps(fleet_to_dict(results, policy, now, names), indent=2))


def main():
    section_reference()
    section_day_grid()
    section_engine()
    section_fleet()


if __name__ == "__main__":
    main()
