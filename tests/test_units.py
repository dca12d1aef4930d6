from __future__ import annotations

import pytest

from jlp_monitor.units import rescale, shift_decimals


def test_shift_decimals_scale_up():
    assert shift_decimals(15, 3) == 15_000
    assert shift_decimals(7, 0) == 7


def test_shift_decimals_scale_down_floors():
    assert shift_decimals(1_999, -3) == 1
    assert shift_decimals(999, -3) == 0


def test_shift_decimals_rejects_negative_value():
    with pytest.raises(ValueError, match="must be non-negative"):
        shift_decimals(-1, 2)


def test_shift_decimals_handles_values_beyond_64_bits():
    value = 2**70
    assert shift_decimals(value, 20) == value * 10**20
    assert shift_decimals(value * 10**20, -20) == value


def test_rescale_same_decimals():
    assert rescale(123, 6, 6) == 123


def test_rescale_up_and_down():
    assert rescale(1, 6, 9) == 1_000
    assert rescale(123_456_789, 8, 6) == 1_234_567
