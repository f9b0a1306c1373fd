from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, List, Optional, TypeVar

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from ccal.core.grid import grid_week_numbers, week_number
from ccal.core.lunisolar import LunarDate as CoreLunarDate
from ccal.core.lunisolar import gregorian_to_lunar
from ccal.core.solarterms import term_index_of
from ccal.features.config import jieqi_info
from ccal.features.day_cell import JIEQI_MODES, DayCell, annotate_grid
from ccal.features.jieqi import jieqi_events_for_year

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("ccal.api.public")

T = TypeVar("T")


# ============================================================
# Response Models
# ============================================================
class LunarDate(BaseModel):
    year: int
    month: int
    day: int
    is_leap: bool = Field(default=False, description="闰月则为 true")
    month_name: str
    day_name: str
    ganzhi_year: str
    zodiac: str
    label: str


class JieqiDay(BaseModel):
    n: int = Field(..., ge=0, le=23)
    name: str
    kind: str = Field(..., description="节 / 中气")
    date: date


class LunarResponse(BaseModel):
    date: date
    lunar: LunarDate


class JieqiYearResponse(BaseModel):
    year: int
    jieqi: List[JieqiDay]


class DayResponse(BaseModel):
    date: date
    lunar: LunarDate
    jieqi: Optional[JieqiDay] = None
    week: int


class CellResponse(BaseModel):
    date: date
    day: int
    is_current_month: bool
    lines: List[str] = Field(default_factory=list, description="格子内逐行显示的文字")
    lunar: Optional[LunarDate] = None
    jieqi: Optional[str] = None
    jieqi_background: Optional[str] = None


class WeekRow(BaseModel):
    year: int
    week: int


class MonthResponse(BaseModel):
    year: int
    month: int
    cells: List[CellResponse]
    weeks: List[WeekRow]


# ============================================================
# Helpers: parsing & conversion
# ============================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid date format: {s} (expected YYYY-MM-DD)") from e


def _parse_date_any(x: str | date) -> date:
    if isinstance(x, date):
        return x
    return _parse_iso_date(str(x))


def _lunar_model(l: CoreLunarDate) -> LunarDate:
    return LunarDate(
        year=l.year,
        month=l.month,
        day=l.day,
        is_leap=l.is_leap,
        month_name=l.month_name,
        day_name=l.day_name,
        ganzhi_year=l.ganzhi_year,
        zodiac=l.zodiac,
        label=l.label,
    )


def _jieqi_for_day(d: date) -> Optional[JieqiDay]:
    n = term_index_of(d.year, d.month, d.day)
    if n is None:
        return None
    info = jieqi_info(n)
    return JieqiDay(n=info.n, name=info.name, kind=info.kind, date=d)


def _cell_model(dc: DayCell) -> CellResponse:
    return CellResponse(
        date=dc.cell.date,
        day=dc.cell.day,
        is_current_month=dc.cell.is_current_month,
        lines=dc.lines,
        lunar=None if dc.lunar is None else _lunar_model(dc.lunar),
        jieqi=dc.jieqi,
        jieqi_background=dc.background,
    )


def _unprocessable(fn: Callable[[], T], what: str) -> T:
    """
    Run a domain call, turning input errors (OutOfRangeError is a ValueError)
    into HTTP 422.
    """
    try:
        return fn()
    except ValueError as e:
        log.warning("rejected %s: %s", what, e)
        raise HTTPException(status_code=422, detail=str(e)) from e


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def get_lunar(date_: str | date) -> LunarResponse:
    d = _parse_date_any(date_)
    return LunarResponse(date=d, lunar=_lunar_model(gregorian_to_lunar(d)))


def get_jieqi_year(year: int) -> JieqiYearResponse:
    events = jieqi_events_for_year(year)
    return JieqiYearResponse(
        year=int(year),
        jieqi=[JieqiDay(n=e.n, name=e.name, kind=e.kind, date=e.date) for e in events],
    )


def get_calendar_day(date_: str | date) -> DayResponse:
    d = _parse_date_any(date_)
    return DayResponse(
        date=d,
        lunar=_lunar_model(gregorian_to_lunar(d)),
        jieqi=_jieqi_for_day(d),
        week=week_number(d.year, d.month, d.day),
    )


def get_calendar_month(
    year: int,
    month: int,
    *,
    show_lunar: bool = True,
    show_jieqi: bool = True,
    jieqi_mode: str = "text",
) -> MonthResponse:
    cells = annotate_grid(
        year,
        month,
        show_lunar=show_lunar,
        show_jieqi=show_jieqi,
        jieqi_mode=jieqi_mode,  # type: ignore[arg-type]
    )
    weeks = [WeekRow(year=y, week=w) for y, w in grid_week_numbers(year, month)]
    return MonthResponse(
        year=int(year),
        month=int(month),
        cells=[_cell_model(c) for c in cells],
        weeks=weeks,
    )


# ============================================================
# Endpoints
# ============================================================
@router.get("/lunar", response_model=LunarResponse)
def get_lunar_endpoint(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
) -> LunarResponse:
    d = _parse_iso_date(date_str)
    return _unprocessable(lambda: get_lunar(d), f"/lunar date={d}")


@router.get("/jieqi", response_model=JieqiYearResponse)
def get_jieqi_endpoint(
    year: int = Query(..., description="Gregorian year (1900..2100)"),
) -> JieqiYearResponse:
    return _unprocessable(lambda: get_jieqi_year(year), f"/jieqi year={year}")


@router.get("/calendar/day", response_model=DayResponse)
def get_calendar_day_endpoint(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
    timing: bool = Query(False, description="输出 timing 日志（调试用）"),
) -> DayResponse:
    d = _parse_iso_date(date_str)

    t0 = time.perf_counter()
    res = _unprocessable(lambda: get_calendar_day(d), f"/calendar/day date={d}")
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /calendar/day date=%s total=%.3fs", d, t1 - t0)
    return res


@router.get("/calendar/month", response_model=MonthResponse)
def get_calendar_month_endpoint(
    year: int = Query(..., description="Gregorian year"),
    month: int = Query(..., ge=1, le=12),
    show_lunar: bool = Query(True),
    show_jieqi: bool = Query(True),
    jieqi_mode: str = Query("text", description=f"one of {JIEQI_MODES}"),
    timing: bool = Query(False, description="输出 timing 日志（调试用）"),
) -> MonthResponse:
    t0 = time.perf_counter()
    res = _unprocessable(
        lambda: get_calendar_month(
            year,
            month,
            show_lunar=show_lunar,
            show_jieqi=show_jieqi,
            jieqi_mode=jieqi_mode,
        ),
        f"/calendar/month year={year} month={month}",
    )
    t1 = time.perf_counter()

    if timing:
        log.warning("timing /calendar/month year=%s month=%s total=%.3fs", year, month, t1 - t0)
    return res