"""Tests for FixedOffsetClock: timestamp parsing and local-time conversion.

Test data loaded from: data/fixtures/scenarios/timestamps.json
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from conftest import CLOCK, DAYS, OFFSET_MINUTES, day_date, load_scenarios, t

_data = load_scenarios("timestamps")

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _utc_ms(iso: str) -> int:
    return (datetime.fromisoformat(iso) - _UNIX_EPOCH) // timedelta(milliseconds=1)


class TestParse:
    """Naive and offset-qualified timestamps to instants."""

    @pytest.mark.parametrize("spec", _data["valid"], ids=lambda s: s["id"])
    def test_valid(self, spec):
        assert CLOCK.parse(spec["ts"]) == _utc_ms(spec["expected_utc"]), spec["notes"]

    @pytest.mark.parametrize("spec", _data["invalid"], ids=lambda s: s["id"])
    def test_invalid(self, spec):
        from fleet_availability.types import ParseError

        with pytest.raises(ParseError) as exc_info:
            CLOCK.parse(spec["ts"])
        assert exc_info.value.raw_value == spec["ts"]

    def test_non_string_rejected(self):
        from fleet_availability.types import ParseError

        with pytest.raises(ParseError):
            CLOCK.parse(None)  # type: ignore[arg-type]

    def test_naive_depends_on_offset(self):
        """Same digits, different zone: instants differ by the offset gap."""
        from fleet_availability.clock import MINUTE, FixedOffsetClock

        perth = FixedOffsetClock(480)
        ts = "2025-01-06T09:00"
        assert perth.parse(ts) - CLOCK.parse(ts) == 120 * MINUTE

    def test_qualified_ignores_offset(self):
        from fleet_availability.clock import FixedOffsetClock

        ts = "2025-01-06T09:00:00+00:00"
        assert FixedOffsetClock(-300).parse(ts) == CLOCK.parse(ts)

    def test_module_function(self):
        from fleet_availability.clock import parse_timestamp

        assert parse_timestamp("2025-01-06T09:00", OFFSET_MINUTES) == t("mon 09:00")


class TestConfiguration:
    """The offset is required and never defaulted."""

    @pytest.mark.parametrize(
        "spec", _data["invalid_offsets"], ids=lambda s: s["id"]
    )
    def test_invalid_offset(self, spec):
        from fleet_availability.clock import FixedOffsetClock
        from fleet_availability.types import ConfigurationError

        with pytest.raises(ConfigurationError):
            FixedOffsetClock(spec["offset"])

    def test_module_function_requires_offset(self):
        from fleet_availability.clock import parse_timestamp
        from fleet_availability.types import ConfigurationError

        with pytest.raises(ConfigurationError):
            parse_timestamp("2025-01-06T09:00", None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("offset", [-720, 0, 330, 600, 840])
    def test_valid_offsets(self, offset):
        from fleet_availability.clock import FixedOffsetClock

        assert FixedOffsetClock(offset).offset_minutes == offset


class TestLocalConversion:

    def test_to_local_round_trip(self):
        instant = CLOCK.parse("2025-01-06T09:30")
        assert CLOCK.to_local(instant) == datetime(2025, 1, 6, 9, 30)
        assert CLOCK.from_local(datetime(2025, 1, 6, 9, 30)) == instant

    def test_from_local_rejects_aware(self):
        with pytest.raises(TypeError):
            CLOCK.from_local(datetime(2025, 1, 6, 9, 30, tzinfo=timezone.utc))

    def test_local_date_crosses_utc_midnight(self):
        """01:00 local on Tuesday is still Monday in UTC."""
        assert CLOCK.local_date(t("tue 01:00")) == day_date("tue")
        assert CLOCK.local_hour(t("tue 01:00")) == 1

    def test_day_window(self):
        from fleet_availability.clock import DAY

        window = CLOCK.day_window(day_date("mon"))
        assert window.local_date == day_date("mon")
        assert window.from_instant == t("mon 00:00")
        assert window.till_instant == t("tue 00:00")
        assert window.till_instant - window.from_instant == DAY

    def test_day_windows_start_today(self):
        windows = CLOCK.day_windows(t("mon 23:59"), 3)
        assert [w.local_date for w in windows] == [
            DAYS["mon"]["date"], DAYS["tue"]["date"], DAYS["wed"]["date"]
        ]
        for prev, nxt in zip(windows, windows[1:]):
            assert prev.till_instant == nxt.from_instant

    def test_format_hhmm(self):
        assert CLOCK.format_hhmm(t("mon 13:15")) == "13:15"

    def test_format_time_other_day(self):
        assert CLOCK.format_time(t("mon 13:15"), day_date("mon")) == "13:15"
        assert CLOCK.format_time(t("wed 10:00"), day_date("mon")) == "Wed 08 Jan 10:00"

    def test_isoformat(self):
        assert CLOCK.isoformat(t("mon 13:15")) == "2025-01-06T13:15:00+10:00"
