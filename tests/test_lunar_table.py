from __future__ import annotations

import pytest

from ccal.core.errors import OutOfRangeError
from ccal.core.lunar_table import (
    LUNAR_INFO,
    decode,
    leap_month,
    leap_month_days,
    month_days,
    year_total_days,
)


def test_table_covers_1900_to_2100():
    assert len(LUNAR_INFO) == 201


def test_decode_1900():
    info = decode(1900)
    assert info.month_lengths == (29, 30, 29, 29, 30, 29, 30, 30, 30, 30, 29, 30)
    assert info.leap_month == 8
    assert info.leap_month_length == 29
    assert year_total_days(1900) == 384


@pytest.mark.parametrize(
    "year, leap, leap_days",
    [
        (2017, 6, 30),
        (2020, 4, 29),
        (2023, 2, 29),
        (2033, 11, 29),
        (2024, 0, 0),
    ],
)
def test_known_leap_months(year: int, leap: int, leap_days: int):
    assert leap_month(year) == leap
    assert leap_month_days(year) == leap_days


def test_year_lengths_are_plausible_for_every_year():
    for year in range(1900, 2101):
        info = decode(year)
        assert all(n in (29, 30) for n in info.month_lengths)
        assert 0 <= info.leap_month <= 12
        if info.leap_month == 0:
            assert info.leap_month_length == 0
            assert 353 <= info.total_days <= 355
        else:
            assert info.leap_month_length in (29, 30)
            assert 383 <= info.total_days <= 385
        assert year_total_days(year) == sum(info.month_lengths) + info.leap_month_length


def test_length_of_leap_segment():
    info = decode(2023)
    assert info.length_of(2, is_leap=True) == 29
    assert info.length_of(2) == month_days(2023, 2)
    with pytest.raises(OutOfRangeError):
        info.length_of(3, is_leap=True)


@pytest.mark.parametrize("year", [1899, 2101])
def test_decode_out_of_range(year: int):
    with pytest.raises(OutOfRangeError):
        decode(year)


def test_month_days_rejects_bad_month():
    with pytest.raises(OutOfRangeError):
        month_days(2024, 13)
    with pytest.raises(OutOfRangeError):
        month_days(2024, 0)
