"""Tests for catlog.units - time units and conversion."""

import itertools

import pytest

from catlog.errors import UnsupportedUnitError
from catlog.units import TimeUnit, convert, nanos_per_unit, parse_unit


class TestNanosPerUnit:
    """Each unit maps to an exact integer count of nanoseconds."""

    def test_scale_factors(self):
        assert nanos_per_unit(TimeUnit.NANOSECONDS) == 1
        assert nanos_per_unit(TimeUnit.MILLISECONDS) == 1_000_000
        assert nanos_per_unit(TimeUnit.SECONDS) == 1_000_000_000
        assert nanos_per_unit(TimeUnit.MINUTES) == 60_000_000_000
        assert nanos_per_unit(TimeUnit.HOURS) == 3_600_000_000_000

    def test_factors_are_ints(self):
        for unit in TimeUnit:
            assert isinstance(nanos_per_unit(unit), int)

    def test_foreign_unit_rejected(self):
        with pytest.raises(UnsupportedUnitError):
            nanos_per_unit("seconds")


class TestConvert:
    """Test convert()."""

    @pytest.mark.parametrize("unit", list(TimeUnit))
    def test_identity_is_exact(self, unit):
        """Same-unit conversion returns the value untouched."""
        value = 0.1 + 0.2
        assert convert(value, unit, unit) is value

    def test_ms_to_seconds(self):
        assert convert(1500, TimeUnit.MILLISECONDS, TimeUnit.SECONDS) == 1.5

    def test_hours_to_minutes(self):
        assert convert(2, TimeUnit.HOURS, TimeUnit.MINUTES) == 120

    def test_ns_to_ms(self):
        assert convert(2_500_000, TimeUnit.NANOSECONDS, TimeUnit.MILLISECONDS) == 2.5

    @pytest.mark.parametrize("a,b", list(itertools.permutations(TimeUnit, 2)))
    def test_round_trip(self, a, b):
        """convert(convert(x, A, B), B, A) == x within tolerance."""
        x = 1234.5678
        assert convert(convert(x, a, b), b, a) == pytest.approx(x)

    def test_unsupported_unit(self):
        with pytest.raises(UnsupportedUnitError):
            convert(1.0, TimeUnit.SECONDS, None)


class TestParseUnit:
    """Test parse_unit() aliases."""

    @pytest.mark.parametrize("text,unit", [
        ("ns", TimeUnit.NANOSECONDS),
        ("ms", TimeUnit.MILLISECONDS),
        ("S", TimeUnit.SECONDS),
        ("min", TimeUnit.MINUTES),
        ("hours", TimeUnit.HOURS),
        ("MILLISECONDS", TimeUnit.MILLISECONDS),
    ])
    def test_aliases(self, text, unit):
        assert parse_unit(text) is unit

    def test_member_passthrough(self):
        assert parse_unit(TimeUnit.HOURS) is TimeUnit.HOURS

    def test_unknown(self):
        with pytest.raises(UnsupportedUnitError):
            parse_unit("fortnights")
