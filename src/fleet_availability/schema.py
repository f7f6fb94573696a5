"""Input validation for policy, fleet and reservation data."""

from __future__ import annotations

from typing import Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_policy(data: dict[str, Any]) -> list[str]:
    """Validate policy settings. Returns list of error messages (empty = valid).

    Checks:
    - utc_offset_minutes is present (never defaulted) and within ±14:00
    - min_gap_minutes is a non-negative integer
    - early_cutoff_hour is 0-23
    - horizon_days is at least 1
    """
    errors: list[str] = []
    if not isinstance(data, dict):
        return [f"policy must be an object, got {type(data).__name__}"]

    if "utc_offset_minutes" not in data or data["utc_offset_minutes"] is None:
        errors.append("Missing 'utc_offset_minutes'")
    else:
        offset = data["utc_offset_minutes"]
        if not _is_int(offset):
            errors.append(f"'utc_offset_minutes' must be an integer, got {offset!r}")
        elif abs(offset) > 14 * 60:
            errors.append(f"'utc_offset_minutes' out of range: {offset}")

    checks = (
        ("min_gap_minutes", 0, None),
        ("early_cutoff_hour", 0, 23),
        ("horizon_days", 1, None),
        ("default_buffer_before_minutes", 0, None),
        ("default_buffer_after_minutes", 0, None),
    )
    for key, low, high in checks:
        if key not in data:
            continue
        value = data[key]
        if not _is_int(value):
            errors.append(f"'{key}' must be an integer, got {value!r}")
        elif value < low or (high is not None and value > high):
            bound = f"{low}-{high}" if high is not None else f">= {low}"
            errors.append(f"'{key}' must be {bound}, got {value}")

    return errors


def validate_resources(entries: Any) -> list[str]:
    """Validate fleet entries. Returns list of error messages.

    Checks:
    - Each entry has a non-empty string 'id', unique across the fleet
    - Buffer minutes, when given, are non-negative integers
    """
    if not isinstance(entries, list):
        return ["'resources' must be a list"]

    errors: list[str] = []
    seen: set[str] = set()
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(f"Resource {i}: expected an object, got {entry!r}")
            continue

        resource_id = entry.get("id")
        if not isinstance(resource_id, str) or not resource_id:
            errors.append(f"Resource {i}: missing or empty 'id'")
        elif resource_id in seen:
            errors.append(f"Resource {i}: duplicate id {resource_id!r}")
        else:
            seen.add(resource_id)

        for field in ("buffer_before_minutes", "buffer_after_minutes"):
            if field in entry:
                value = entry[field]
                if not _is_int(value) or value < 0:
                    errors.append(
                        f"Resource {resource_id or i}: '{field}' must be a "
                        f"non-negative integer, got {value!r}"
                    )

    return errors


def validate_reservations(entries: Any) -> list[str]:
    """Validate reservation records structurally. Returns list of error messages.

    Timestamp formats are not checked here: a malformed timestamp drops only
    its own reservation when intervals are built.
    """
    if not isinstance(entries, list):
        return ["'reservations' must be a list"]

    errors: list[str] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(f"Reservation {i}: expected an object, got {entry!r}")
            continue
        for field in ("resource_id", "pickup_time", "return_time"):
            if field not in entry:
                errors.append(f"Reservation {i}: missing '{field}'")
            elif not isinstance(entry[field], str):
                errors.append(
                    f"Reservation {i}: '{field}' must be a string, "
                    f"got {entry[field]!r}"
                )

    return errors
