"""Data loading utilities for policy, fleet and reservation snapshots."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from fleet_availability.clock import FixedOffsetClock, minutes
from fleet_availability.engine import (
    DEFAULT_EARLY_CUTOFF_HOUR,
    DEFAULT_HORIZON_DAYS,
    DEFAULT_MIN_GAP,
    AvailabilityPolicy,
)
from fleet_availability.schema import (
    validate_policy,
    validate_reservations,
    validate_resources,
)
from fleet_availability.types import ConfigurationError, RawReservation, Resource

# Buffer applied on both sides when neither the resource nor the fleet
# defaults name one.
DEFAULT_BUFFER_MINUTES = 15


def _read_json(path: Path) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid JSON: {e}", source=path.name) from e


def policy_from_dict(data: dict[str, Any], source: str | None = None) -> AvailabilityPolicy:
    """Build an AvailabilityPolicy from a settings mapping.

    Raises ConfigurationError listing every problem found.
    """
    errors = validate_policy(data)
    if errors:
        raise ConfigurationError(errors, source=source)

    return AvailabilityPolicy(
        clock=FixedOffsetClock(data["utc_offset_minutes"]),
        min_gap=(
            minutes(data["min_gap_minutes"])
            if "min_gap_minutes" in data else DEFAULT_MIN_GAP
        ),
        early_cutoff_hour=data.get("early_cutoff_hour", DEFAULT_EARLY_CUTOFF_HOUR),
        horizon_days=data.get("horizon_days", DEFAULT_HORIZON_DAYS),
    )


def load_policy_json(path: str | Path) -> AvailabilityPolicy:
    """Load an AvailabilityPolicy from a JSON file.

    {
        "utc_offset_minutes": 600,
        "min_gap_minutes": 240,
        "early_cutoff_hour": 6,
        "horizon_days": 4
    }

    The policy may also sit under a "policy" key.
    Raises ConfigurationError if validation fails.
    """
    path = Path(path)
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("policy", data)
    return policy_from_dict(data, source=path.name)


def resources_from_list(
    entries: list[dict[str, Any]],
    default_before_minutes: int = DEFAULT_BUFFER_MINUTES,
    default_after_minutes: int = DEFAULT_BUFFER_MINUTES,
    source: str | None = None,
) -> list[Resource]:
    errors = validate_resources(entries)
    if errors:
        raise ConfigurationError(errors, source=source)

    return [
        Resource(
            id=entry["id"],
            buffer_before=minutes(
                entry.get("buffer_before_minutes", default_before_minutes)
            ),
            buffer_after=minutes(
                entry.get("buffer_after_minutes", default_after_minutes)
            ),
            name=entry.get("name"),
        )
        for entry in entries
    ]


def load_fleet_json(path: str | Path) -> list[Resource]:
    """Load the rentable resources from a JSON file.

    {
        "defaults": {"buffer_before_minutes": 15, "buffer_after_minutes": 15},
        "resources": [
            {"id": "CAR-1", "name": "Corolla", "buffer_after_minutes": 30},
            ...
        ]
    }
    """
    path = Path(path)
    data = _read_json(path)
    if not isinstance(data, dict) or "resources" not in data:
        raise ConfigurationError("missing 'resources'", source=path.name)

    defaults = data.get("defaults", {})
    if not isinstance(defaults, dict):
        raise ConfigurationError("'defaults' must be an object", source=path.name)
    errors = validate_resources([dict(defaults, id="defaults")])
    if errors:
        raise ConfigurationError(errors, source=path.name)

    return resources_from_list(
        data["resources"],
        default_before_minutes=defaults.get(
            "buffer_before_minutes", DEFAULT_BUFFER_MINUTES
        ),
        default_after_minutes=defaults.get(
            "buffer_after_minutes", DEFAULT_BUFFER_MINUTES
        ),
        source=path.name,
    )


def load_reservations_json(path: str | Path) -> list[RawReservation]:
    """Load a reservation snapshot from a JSON file.

    {"reservations": [{"id": "R1", "resource_id": "CAR-1",
                       "pickup_time": "2025-01-06T09:00",
                       "return_time": "2025-01-06T13:00"}, ...]}
    """
    path = Path(path)
    data = _read_json(path)
    entries = data.get("reservations") if isinstance(data, dict) else data

    errors = validate_reservations(entries)
    if errors:
        raise ConfigurationError(errors, source=path.name)

    return [
        RawReservation(
            resource_id=entry["resource_id"],
            pickup_time=entry["pickup_time"],
            return_time=entry["return_time"],
            reservation_id=entry.get("id"),
        )
        for entry in entries
    ]
