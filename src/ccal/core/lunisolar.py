# src/ccal/core/lunisolar.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from functools import lru_cache
from typing import Iterable, Iterator, List, Tuple

from ccal.features.config import (
    ganzhi_year_name,
    lunar_day_name,
    lunar_month_display_name,
    zodiac_name,
)

from .config import LunarTableConfig
from .errors import OutOfRangeError, require_in_range
from .lunar_table import LunarYearInfo, decode, year_total_days

log = logging.getLogger(__name__)

_TABLE = LunarTableConfig()


# ============================================================
# value objects
# ============================================================

@dataclass(frozen=True)
class LunarDate:
    """
    A date in the Chinese lunar calendar.

    year: lunar year number (the Gregorian year in which its 正月初一 falls)
    month: 1..12 (a leap month carries the number of the month it follows)
    day: 1..30
    is_leap: True if 闰月
    """
    year: int
    month: int
    day: int
    is_leap: bool = False

    @property
    def month_name(self) -> str:
        return lunar_month_display_name(self.month, self.is_leap)

    @property
    def day_name(self) -> str:
        return lunar_day_name(self.day)

    @property
    def ganzhi_year(self) -> str:
        return ganzhi_year_name(self.year)

    @property
    def zodiac(self) -> str:
        return zodiac_name(self.year)

    @property
    def label(self) -> str:
        prefix = "闰" if self.is_leap else ""
        return f"{prefix}{self.month:02d}/{self.day:02d}"

    def __str__(self) -> str:
        return f"{self.ganzhi_year}年{self.month_name}{self.day_name}"


@dataclass(frozen=True)
class LunarMonthSpan:
    """
    One lunar month segment: [start, start + days)
    """
    year: int
    month: int
    is_leap: bool
    days: int
    start: date

    @property
    def end(self) -> date:
        return self.start + timedelta(days=self.days)

    def contains(self, d: date) -> bool:
        return self.start <= d < self.end


# ============================================================
# month walk (explicit leap-month state machine)
# ============================================================

class LeapState(Enum):
    BEFORE_LEAP = "before_leap"
    INSIDE_LEAP = "inside_leap"
    AFTER_LEAP = "after_leap"


def month_segments(info: LunarYearInfo) -> Iterator[Tuple[int, bool, int]]:
    """
    Yield (month, is_leap, days) for every month of the lunar year in order.

    Years without a leap month start (and stay) in AFTER_LEAP. Otherwise:
      BEFORE_LEAP --(ordinal month == leap_month consumed)--> INSIDE_LEAP
      INSIDE_LEAP --(leap segment consumed)-----------------> AFTER_LEAP
    The leap segment always sits between its parent month and the next one.
    """
    state = LeapState.BEFORE_LEAP if info.has_leap else LeapState.AFTER_LEAP
    month = 1
    while month <= 12:
        if state is LeapState.INSIDE_LEAP:
            yield month, True, info.leap_month_length
            state = LeapState.AFTER_LEAP
            month += 1
            continue

        yield month, False, info.month_lengths[month - 1]
        if state is LeapState.BEFORE_LEAP and month == info.leap_month:
            state = LeapState.INSIDE_LEAP
        else:
            month += 1


def _locate_in_year(info: LunarYearInfo, offset: int) -> Tuple[int, bool, int]:
    """
    Find (month, is_leap, day) for a 0-based day offset inside the lunar year.
    Segments are half-open and consumed left to right.
    """
    for month, is_leap, days in month_segments(info):
        if offset < days:
            return month, is_leap, offset + 1
        offset -= days
    raise OutOfRangeError(f"offset beyond lunar year {info.year}")


@lru_cache(maxsize=256)
def _days_before_year(year: int) -> int:
    """Days from the epoch to 正月初一 of `year`."""
    y = require_in_range(year, _TABLE.min_year, _TABLE.max_year, "lunar year")
    return sum(year_total_days(k) for k in range(_TABLE.min_year, y))


# ============================================================
# public API
# ============================================================

def gregorian_to_lunar(d: date, *, config: LunarTableConfig = _TABLE) -> LunarDate:
    """
    Gregorian date -> lunar date (1900..2100).

    - offset = days since the epoch (1900-01-31 = lunar 1900-01-01)
    - skip whole lunar years while offset >= year length
    - walk the months of the remaining year (leap segment after its parent)
    """
    require_in_range(d.year, config.min_year, config.max_year, "gregorian year")

    offset = (d - config.epoch).days
    if offset < 0:
        raise OutOfRangeError(f"date precedes the lunar epoch {config.epoch.isoformat()}: {d.isoformat()}")

    lunar_year = config.min_year
    while offset >= year_total_days(lunar_year):
        offset -= year_total_days(lunar_year)
        lunar_year += 1

    month, is_leap, day = _locate_in_year(decode(lunar_year), offset)
    return LunarDate(year=lunar_year, month=month, day=day, is_leap=is_leap)


def to_lunar(year: int, month: int, day: int) -> LunarDate:
    """
    (year, month, day) -> LunarDate.

    An impossible Gregorian date (e.g. Feb 30) raises ValueError from datetime.date.
    """
    require_in_range(year, _TABLE.min_year, _TABLE.max_year, "gregorian year")
    return gregorian_to_lunar(date(int(year), int(month), int(day)))


def lunar_months_of_year(year: int) -> List[LunarMonthSpan]:
    """
    Ordered month segments of a lunar year (12 or 13 entries).
    """
    info = decode(year)
    start = _TABLE.epoch + timedelta(days=_days_before_year(year))
    out: List[LunarMonthSpan] = []
    for month, is_leap, days in month_segments(info):
        out.append(LunarMonthSpan(year=info.year, month=month, is_leap=is_leap, days=days, start=start))
        start = start + timedelta(days=days)
    return out


def lunar_to_gregorian(year: int, month: int, day: int, is_leap: bool = False) -> date:
    """
    Lunar (year, month, day, is_leap) -> Gregorian date.
    """
    info = decode(year)
    length = info.length_of(month, is_leap)
    d = int(day)
    if not (1 <= d <= length):
        leap = "闰" if is_leap else ""
        raise OutOfRangeError(f"lunar day out of range: {year}-{leap}{month}-{d} (month has {length} days)")

    offset = _days_before_year(year)
    for m, leap_seg, days in month_segments(info):
        if m == int(month) and leap_seg == bool(is_leap):
            return _TABLE.epoch + timedelta(days=offset + d - 1)
        offset += days
    raise OutOfRangeError(f"lunar month not found: {year}-{month} leap={is_leap}")


def lunar_dates_between(start: date, end: date) -> Iterable[Tuple[date, LunarDate]]:
    """
    将 [start, end) 逐日转换为农历。

    Only the first day is resolved from the epoch; the rest is stepped
    month by month, rolling into the next lunar year when needed.
    """
    if not (start < end):
        return
    last = end - timedelta(days=1)
    require_in_range(last.year, _TABLE.min_year, _TABLE.max_year, "gregorian year")

    first = gregorian_to_lunar(start)
    spans = lunar_months_of_year(first.year)
    i = next(k for k, sp in enumerate(spans) if sp.contains(start))
    day = (start - spans[i].start).days + 1
    log.debug("lunar_dates_between start=%s end=%s first=%s", start, end, first)

    d = start
    while d < end:
        if day > spans[i].days:
            day = 1
            i += 1
        if i >= len(spans):
            spans = lunar_months_of_year(spans[-1].year + 1)
            i = 0
        sp = spans[i]
        yield d, LunarDate(year=sp.year, month=sp.month, day=day, is_leap=sp.is_leap)
        d += timedelta(days=1)
        day += 1
