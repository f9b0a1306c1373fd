# src/ccal/core/grid.py
from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date
from typing import List, Tuple

from .config import GridConfig
from .errors import require_in_range


@dataclass(frozen=True)
class GridCell:
    year: int
    month: int
    day: int
    is_current_month: bool

    @property
    def date(self) -> date:
        return date(self.year, self.month, self.day)


def _prev_month(year: int, month: int) -> Tuple[int, int]:
    return (year - 1, 12) if month == 1 else (year, month - 1)


def _next_month(year: int, month: int) -> Tuple[int, int]:
    return (year + 1, 1) if month == 12 else (year, month + 1)


def sunday_weekday(d: date) -> int:
    """0=Sunday, 1=Monday, ..., 6=Saturday."""
    return d.isoweekday() % 7


def days_in_month(year: int, month: int) -> int:
    m = require_in_range(month, 1, 12, "month")
    return calendar.monthrange(int(year), m)[1]


def first_weekday(year: int, month: int) -> int:
    """
    Weekday of the 1st of the month, 0=Sunday .. 6=Saturday.
    """
    m = require_in_range(month, 1, 12, "month")
    return sunday_weekday(date(int(year), m, 1))


def build_grid(year: int, month: int, *, config: GridConfig = GridConfig()) -> List[GridCell]:
    """
    Calendar grid (6 rows x 7 columns, Sunday first):
    tail of the previous month + the whole month + head of the next month.
    """
    y, m = int(year), int(month)
    first = first_weekday(y, m)
    n_days = days_in_month(y, m)
    py, pm = _prev_month(y, m)
    ny, nm = _next_month(y, m)
    n_prev = days_in_month(py, pm)

    grid: List[GridCell] = []
    for i in range(config.cells):
        if i < first:
            grid.append(GridCell(py, pm, n_prev - first + i + 1, False))
        elif i - first < n_days:
            grid.append(GridCell(y, m, i - first + 1, True))
        else:
            grid.append(GridCell(ny, nm, i - first - n_days + 1, False))
    return grid


def day_of_year(year: int, month: int, day: int) -> int:
    return date(int(year), int(month), int(day)).timetuple().tm_yday


def week_number(year: int, month: int, day: int) -> int:
    """
    Week of the year; the week containing Jan 1 is week 1 and weeks start on Sunday.

      ceil((day_of_year + weekday(Jan 1)) / 7)
    """
    offset = sunday_weekday(date(int(year), 1, 1))
    return math.ceil((day_of_year(year, month, day) + offset) / 7)


def grid_week_numbers(year: int, month: int, *, config: GridConfig = GridConfig()) -> List[Tuple[int, int]]:
    """
    (year, week) label per grid row.

    Each row is labelled by its first current-month cell so that rows
    straddling a month/year edge stay with the displayed month; rows with no
    current-month cell fall back to their first cell.
    """
    grid = build_grid(year, month, config=config)
    out: List[Tuple[int, int]] = []
    for row in range(config.rows):
        cells = grid[row * config.cols:(row + 1) * config.cols]
        ref = next((c for c in cells if c.is_current_month), cells[0])
        out.append((ref.year, week_number(ref.year, ref.month, ref.day)))
    return out
