"""Tests for petragrid.decoders."""

import math
from datetime import datetime, timedelta

import pytest

from petragrid.decoders import LEGACY_EPOCH, decode_fixed_string, legacy_datetime
from petragrid.errors import InvalidDateTime


class TestDecodeFixedString:
    def test_cut_at_terminator(self):
        assert decode_fixed_string(b"AB00000000") == "AB"

    def test_no_terminator_uses_full_width(self):
        assert decode_fixed_string(b"ABCDEFGHIJ") == "ABCDEFGHIJ"

    def test_nul_padding_is_kept(self):
        # only ASCII '0' terminates by default
        assert decode_fixed_string(b"AB\x00\x00\x00") == "AB\x00\x00\x00"

    def test_digit_zero_truncates_text(self):
        assert decode_fixed_string(b"ZONE 10N\x00\x00") == "ZONE 1"

    def test_explicit_nul_terminator(self):
        assert decode_fixed_string(b"AB\x00\x00\x00", b"\x00") == "AB"

    def test_invalid_bytes_are_replaced(self):
        assert decode_fixed_string(b"A\xffB0") == "A\ufffdB"

    def test_empty_when_terminator_first(self):
        assert decode_fixed_string(b"0ABC") == ""

    def test_multibyte_terminator_rejected(self):
        with pytest.raises(ValueError):
            decode_fixed_string(b"AB", b"00")


class TestLegacyDatetime:
    def test_epoch(self):
        assert LEGACY_EPOCH == datetime(1899, 12, 30)
        assert legacy_datetime(0.0) == LEGACY_EPOCH

    def test_one_day(self):
        assert legacy_datetime(1.0) == datetime(1899, 12, 31)

    def test_noon(self):
        assert legacy_datetime(0.5) == datetime(1899, 12, 30, 12, 0)

    def test_recent_date(self):
        assert legacy_datetime(45000.5) == datetime(2023, 3, 15, 12, 0)

    def test_sub_second_precision(self):
        result = legacy_datetime(0.25 + 0.5 / 86400)
        assert result == datetime(1899, 12, 30, 6, 0, 0, 500000)

    def test_negative(self):
        assert legacy_datetime(-1.0) == LEGACY_EPOCH - timedelta(days=1)

    @pytest.mark.parametrize("days", [1e9, -1e9, math.inf, math.nan])
    def test_out_of_range(self, days):
        with pytest.raises(InvalidDateTime) as info:
            legacy_datetime(days)
        if not math.isnan(days):
            assert info.value.days == days
