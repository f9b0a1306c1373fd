# src/ccal/features/day_cell.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

from ccal.core.errors import OutOfRangeError
from ccal.core.grid import GridCell, build_grid
from ccal.core.lunisolar import LunarDate, gregorian_to_lunar
from ccal.core.solarterms import term_of

log = logging.getLogger(__name__)

JieqiMode = Literal["text", "bg"]
JIEQI_MODES = ("text", "bg")


@dataclass(frozen=True)
class DayCell:
    """
    Content of one calendar-picker day cell.

    - lines[0] is always the solar day number
    - lunar day name follows when show_lunar is on
    - jieqi name is a text line in "text" mode, a background mark in "bg" mode
    """
    cell: GridCell
    lunar: Optional[LunarDate]
    jieqi: Optional[str]
    jieqi_mode: Optional[JieqiMode]

    @property
    def lines(self) -> List[str]:
        out = [str(self.cell.day)]
        if self.lunar is not None:
            out.append(self.lunar.day_name)
        if self.jieqi is not None and self.jieqi_mode == "text":
            out.append(self.jieqi)
        return out

    @property
    def background(self) -> Optional[str]:
        if self.jieqi_mode == "bg":
            return self.jieqi
        return None

    @property
    def is_multiline(self) -> bool:
        return len(self.lines) > 1


def _safe_lunar(cell: GridCell) -> Optional[LunarDate]:
    try:
        return gregorian_to_lunar(cell.date)
    except OutOfRangeError:
        log.debug("no lunar data for %s", cell.date)
        return None


def _safe_term(cell: GridCell) -> Optional[str]:
    try:
        return term_of(cell.year, cell.month, cell.day)
    except OutOfRangeError:
        log.debug("no jieqi data for %s", cell.date)
        return None


def annotate_cell(
    cell: GridCell,
    *,
    show_lunar: bool = True,
    show_jieqi: bool = True,
    jieqi_mode: JieqiMode = "text",
) -> DayCell:
    if jieqi_mode not in JIEQI_MODES:
        raise ValueError(f"jieqi_mode must be one of {JIEQI_MODES}: {jieqi_mode!r}")

    lunar = _safe_lunar(cell) if show_lunar else None
    jieqi = _safe_term(cell) if show_jieqi else None
    return DayCell(
        cell=cell,
        lunar=lunar,
        jieqi=jieqi,
        jieqi_mode=jieqi_mode if show_jieqi else None,
    )


def annotate_grid(
    year: int,
    month: int,
    *,
    show_lunar: bool = True,
    show_jieqi: bool = True,
    jieqi_mode: JieqiMode = "text",
) -> List[DayCell]:
    """
    42 annotated cells for the month view. Cells outside the 1900..2100
    coverage keep their solar day and carry no lunar/jieqi data.
    """
    return [
        annotate_cell(c, show_lunar=show_lunar, show_jieqi=show_jieqi, jieqi_mode=jieqi_mode)
        for c in build_grid(year, month)
    ]
