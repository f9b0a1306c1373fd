from __future__ import annotations

from datetime import date

import pytest

from ccal.core.errors import OutOfRangeError
from ccal.core.solarterms import (
    JIEQI_EXCEPTIONS,
    century_coefficient,
    leap_correction,
    term_date,
    term_index_of,
    term_month,
    term_of,
    terms_for_year,
)

# 2024 almanac days, 小寒..冬至
DAYS_2024 = [6, 20, 4, 19, 5, 20, 4, 19, 5, 20, 5, 21, 6, 22, 7, 22, 7, 22, 8, 23, 7, 22, 6, 21]


def test_minor_cold_2024_golden():
    assert term_date(2024, 0) == 6


def test_all_terms_2024():
    assert [term_date(2024, n) for n in range(24)] == DAYS_2024


@pytest.mark.parametrize(
    "year, n, day",
    [
        (1982, 0, 6),   # +1
        (2019, 0, 5),   # -1
        (2026, 3, 18),  # -1
        (2008, 9, 21),  # +1
        (2021, 23, 21), # -1
        (1918, 23, 21), # -1
        (2089, 19, 23),
        (2089, 20, 7),
    ],
)
def test_exception_years(year: int, n: int, day: int):
    assert JIEQI_EXCEPTIONS[n][year] != 0
    assert term_date(year, n) == day


def test_year_2000_keeps_20th_century_c_for_first_four_terms():
    c20 = {0: 6.11, 1: 20.84, 2: 4.6295, 3: 19.4599}
    for n, c in c20.items():
        assert century_coefficient(2000, n) == c
    assert century_coefficient(2000, 4) == 5.63
    assert century_coefficient(2001, 0) == 5.4055
    assert century_coefficient(1999, 23) == 22.6

    # formula output for the boundary year, preserved as-is
    assert [term_date(2000, n) for n in range(4)] == [7, 22, 5, 20]


def test_leap_correction_floor_for_year_00():
    assert leap_correction(2000, 0) == -1
    assert leap_correction(2000, 4) == 0
    assert leap_correction(2024, 2) == 5
    assert leap_correction(2024, 5) == 6


def test_term_month_mapping():
    assert [term_month(n) for n in (0, 1, 2, 22, 23)] == [1, 1, 2, 12, 12]


def test_term_of():
    assert term_of(2024, 2, 4) == "立春"
    assert term_of(2024, 2, 19) == "雨水"
    assert term_of(2024, 12, 21) == "冬至"
    assert term_of(2024, 2, 5) is None
    assert term_index_of(2024, 6, 21) == 11
    assert term_index_of(2024, 6, 20) is None


def test_each_month_has_exactly_two_term_days():
    for year in (1900, 1950, 2000, 2024, 2100):
        for month in range(1, 13):
            hits = [d for d in range(1, 32) if term_index_of(year, month, d) is not None]
            assert len(hits) == 2
            assert hits[0] < hits[1]


def test_terms_for_year_are_valid_dates_in_order():
    for year in range(1900, 2101):
        terms = terms_for_year(year)
        assert [n for n, _ in terms] == list(range(24))
        days = [d for _, d in terms]
        assert days == sorted(days)
        assert all(d.year == year for d in days)
    assert terms_for_year(2024)[2] == (2, date(2024, 2, 4))


@pytest.mark.parametrize("n", [-1, 24])
def test_bad_term_index(n: int):
    with pytest.raises(OutOfRangeError):
        term_date(2024, n)


@pytest.mark.parametrize("year", [1899, 2101])
def test_bad_year(year: int):
    with pytest.raises(OutOfRangeError):
        term_date(year, 0)
    with pytest.raises(OutOfRangeError):
        term_of(year, 1, 6)


def test_idempotent():
    assert [term_date(2033, n) for n in range(24)] == [term_date(2033, n) for n in range(24)]
