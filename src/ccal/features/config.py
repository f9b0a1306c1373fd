from __future__ import annotations

"""
Feature-level configuration / constants.

- 二十四节气 (jieqi): index 0..23 => name / kind(节|中气) / Gregorian month
- 农历月名・日名: lunar month/day => label
- 干支纪年 (ganzhi): lunar year => stem + branch (+ zodiac)

Design goals:
- Keep every table immutable and indexable by a plain int.
- Reject invalid inputs with ValueError instead of wrapping around.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ccal.core.errors import OutOfRangeError

# ============================================================
# 二十四节气 (24 solar terms)
#   NOTE:
#     index n starts at 小寒 (solar longitude 285 deg), two per
#     Gregorian month:
#       month = n // 2 + 1
#     kind:
#       n even  -> 节   (sectional term, early in the month)
#       n odd   -> 中气 (principal term, late in the month)
# ============================================================

JIEQI_NAMES: Tuple[str, ...] = (
    "小寒", "大寒",  # 1月
    "立春", "雨水",  # 2月
    "惊蛰", "春分",  # 3月
    "清明", "谷雨",  # 4月
    "立夏", "小满",  # 5月
    "芒种", "夏至",  # 6月
    "小暑", "大暑",  # 7月
    "立秋", "处暑",  # 8月
    "白露", "秋分",  # 9月
    "寒露", "霜降",  # 10月
    "立冬", "小雪",  # 11月
    "大雪", "冬至",  # 12月
)

LUNAR_MONTH_NAME_BY_MONTH_NO: Dict[int, str] = {
    1:  "正月",
    2:  "二月",
    3:  "三月",
    4:  "四月",
    5:  "五月",
    6:  "六月",
    7:  "七月",
    8:  "八月",
    9:  "九月",
    10: "十月",
    11: "冬月",
    12: "腊月",
}

LUNAR_DAY_NAMES: Tuple[str, ...] = (
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
)

LEAP_PREFIX = "闰"


def jieqi_name(n: int) -> str:
    nn = int(n)
    if not (0 <= nn <= 23):
        raise OutOfRangeError(f"jieqi index out of range: {nn}")
    return JIEQI_NAMES[nn]


def jieqi_kind_from_n(n: int) -> str:
    """
    Return "节" if n is even, else "中气".
    """
    nn = int(n)
    if not (0 <= nn <= 23):
        raise OutOfRangeError(f"jieqi index out of range: {nn}")
    return "节" if (nn % 2 == 0) else "中气"


def jieqi_month_from_n(n: int) -> int:
    return int(n) // 2 + 1


@dataclass(frozen=True)
class JieqiInfo:
    """
    Structured info for a jieqi index.
    """
    n: int
    month: int
    kind: str
    name: str


def jieqi_info(n: int) -> JieqiInfo:
    return JieqiInfo(
        n=int(n),
        month=jieqi_month_from_n(n),
        kind=jieqi_kind_from_n(n),
        name=jieqi_name(n),
    )


def lunar_month_name_from_month_no(month_no: int) -> str:
    m = int(month_no)
    try:
        return LUNAR_MONTH_NAME_BY_MONTH_NO[m]
    except KeyError as e:
        raise OutOfRangeError(f"invalid lunar month_no: {month_no}") from e


def lunar_month_display_name(month_no: int, is_leap: bool) -> str:
    base = lunar_month_name_from_month_no(month_no)
    return f"{LEAP_PREFIX}{base}" if is_leap else base


def lunar_day_name(day: int) -> str:
    d = int(day)
    if not (1 <= d <= 30):
        raise OutOfRangeError(f"lunar_day out of range: {d}")
    return LUNAR_DAY_NAMES[d - 1]


# ============================================================
# 干支纪年 (sexagenary year)
#   stem   = (Y - 4) % 10
#   branch = (Y - 4) % 12
#   Year 4 CE is 甲子 (index 0 of the 60-year cycle).
# ============================================================

TIANGAN: Tuple[str, ...] = ("甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸")
DIZHI: Tuple[str, ...] = ("子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥")
SHENGXIAO: Tuple[str, ...] = ("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪")


def ganzhi_indices(lunar_year: int) -> Tuple[int, int]:
    """
    (stem, branch) indices of the lunar year.
    """
    y = int(lunar_year)
    return (y - 4) % 10, (y - 4) % 12


def ganzhi_cycle_index(lunar_year: int) -> int:
    """
    Position 0..59 in the sexagenary cycle (0 = 甲子).
    """
    return (int(lunar_year) - 4) % 60


def ganzhi_year_name(lunar_year: int) -> str:
    stem, branch = ganzhi_indices(lunar_year)
    return TIANGAN[stem] + DIZHI[branch]


def zodiac_name(lunar_year: int) -> str:
    _, branch = ganzhi_indices(lunar_year)
    return SHENGXIAO[branch]


def sexagenary_names() -> List[str]:
    """All 60 stem-branch names in cycle order."""
    return [TIANGAN[i % 10] + DIZHI[i % 12] for i in range(60)]
