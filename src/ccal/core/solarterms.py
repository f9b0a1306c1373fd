# src/ccal/core/solarterms.py
from __future__ import annotations

import math
from datetime import date
from typing import Dict, List, Optional, Tuple

from ccal.features.config import JIEQI_NAMES

from .config import SolarTermConfig
from .errors import require_in_range


# ============================================================
# 寿星公式  day = [Y*D + C] - L
#   C per term: (20th century, 21st century)
# ============================================================

JIEQI_C: Tuple[Tuple[float, float], ...] = (
    (6.11,    5.4055),   # 小寒
    (20.84,  20.12),     # 大寒
    (4.6295,  3.87),     # 立春
    (19.4599, 18.73),    # 雨水
    (6.3826,  5.63),     # 惊蛰
    (21.4155, 20.646),   # 春分
    (5.59,    4.81),     # 清明
    (20.888, 20.1),      # 谷雨
    (6.318,   5.52),     # 立夏
    (21.86,  21.04),     # 小满
    (6.5,     5.678),    # 芒种
    (22.2,   21.37),     # 夏至
    (7.928,   7.108),    # 小暑
    (23.65,  22.83),     # 大暑
    (8.35,    7.5),      # 立秋
    (23.95,  23.13),     # 处暑
    (8.44,    7.646),    # 白露
    (23.822, 23.042),    # 秋分
    (9.098,   8.318),    # 寒露
    (24.218, 23.438),    # 霜降
    (8.218,   7.438),    # 立冬
    (23.08,  22.36),     # 小雪
    (7.9,     7.18),     # 大雪
    (22.6,   21.94),     # 冬至
)

# Known one-day drifts of the formula: term index -> {year: correction}
JIEQI_EXCEPTIONS: Dict[int, Dict[int, int]] = {
    0:  {1982: 1, 2019: -1},   # 小寒
    1:  {2000: 1, 2082: 1},    # 大寒
    3:  {2026: -1},            # 雨水
    5:  {2084: 1},             # 春分
    9:  {2008: 1},             # 小满
    11: {1928: 1},             # 夏至
    12: {1925: 1, 2016: 1},    # 小暑
    13: {1922: 1},             # 大暑
    14: {2002: 1},             # 立秋
    16: {1927: 1},             # 白露
    17: {1942: 1},             # 秋分
    19: {2089: 1},             # 霜降
    20: {2089: 1},             # 立冬
    21: {1978: 1},             # 小雪
    22: {1954: 1},             # 大雪
    23: {1918: -1, 2021: -1},  # 冬至
}


def _check_year(year: int, config: SolarTermConfig) -> int:
    return require_in_range(year, config.min_year, config.max_year, "year")


def _check_index(term_index: int) -> int:
    return require_in_range(term_index, 0, 23, "term_index")


def century_coefficient(year: int, term_index: int, *, config: SolarTermConfig = SolarTermConfig()) -> float:
    """
    C for (year, term_index).

    The boundary year keeps the 20th-century C for 小寒/大寒/立春/雨水
    (indices 0..3); every other term switches in the boundary year itself.
    """
    c20, c21 = JIEQI_C[term_index]
    boundary = config.century_boundary
    use21 = year > boundary or (year == boundary and term_index not in config.early_terms)
    return c21 if use21 else c20


def leap_correction(year: int, term_index: int, *, config: SolarTermConfig = SolarTermConfig()) -> int:
    """
    L = (Y-1)//4 for indices 0..3 (before Feb 29), Y//4 otherwise.
    Floor division: Y=0 gives -1 for the early terms.
    """
    y = year % 100
    if term_index in config.early_terms:
        return (y - 1) // 4
    return y // 4


def term_correction(year: int, term_index: int) -> int:
    return JIEQI_EXCEPTIONS.get(term_index, {}).get(year, 0)


def term_date(year: int, term_index: int, *, config: SolarTermConfig = SolarTermConfig()) -> int:
    """
    Day of month (Gregorian) on which term `term_index` falls in `year`.
    The month is term_month(term_index).
    """
    y_full = _check_year(year, config)
    n = _check_index(term_index)

    c = century_coefficient(y_full, n, config=config)
    y = y_full % 100
    jd = math.floor(y * config.d + c) - leap_correction(y_full, n, config=config)
    return jd + term_correction(y_full, n)


def term_month(term_index: int) -> int:
    return _check_index(term_index) // 2 + 1


def term_index_of(year: int, month: int, day: int, *, config: SolarTermConfig = SolarTermConfig()) -> Optional[int]:
    """
    Term index falling on (year, month, day), or None.
    """
    _check_year(year, config)
    m = require_in_range(month, 1, 12, "month")
    first = (m - 1) * 2
    for n in (first, first + 1):
        if int(day) == term_date(year, n, config=config):
            return n
    return None


def term_of(year: int, month: int, day: int, *, config: SolarTermConfig = SolarTermConfig()) -> Optional[str]:
    """
    Name of the solar term on (year, month, day), or None if it is not a term day.
    """
    n = term_index_of(year, month, day, config=config)
    return None if n is None else JIEQI_NAMES[n]


def terms_for_year(year: int, *, config: SolarTermConfig = SolarTermConfig()) -> List[Tuple[int, date]]:
    """
    All 24 terms of the year as (term_index, date), in calendar order.
    """
    _check_year(year, config)
    return [
        (n, date(int(year), term_month(n), term_date(year, n, config=config)))
        for n in range(24)
    ]
