# src/ccal/features/jieqi.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List

from ccal.core.config import SolarTermConfig
from ccal.core.errors import OutOfRangeError
from ccal.core.solarterms import terms_for_year
from ccal.features.config import jieqi_info


@dataclass(frozen=True)
class JieqiEvent:
    """
    A single solar-term day.
    """
    n: int          # 0..23
    name: str
    kind: str       # "节" or "中气"
    date: date

    def to_dict(self) -> Dict:
        return {
            "n": self.n,
            "name": self.name,
            "kind": self.kind,
            "date": self.date.isoformat(),
        }


def jieqi_events_for_year(
    year: int,
    *,
    config: SolarTermConfig = SolarTermConfig(),
) -> List[JieqiEvent]:
    """
    二十四节气（按日期排序）。

    - core.solarterms.terms_for_year 返回 (n, date)
    - 由 features.config.jieqi_info 统一确定 name / kind
    """
    out: List[JieqiEvent] = []
    for n, d in terms_for_year(year, config=config):
        info = jieqi_info(n)
        out.append(JieqiEvent(n=info.n, name=info.name, kind=info.kind, date=d))
    out.sort(key=lambda e: e.date)
    return out


def jieqi_events_between(
    start: date,
    end: date,
    *,
    config: SolarTermConfig = SolarTermConfig(),
) -> List[JieqiEvent]:
    """
    Solar-term days in [start, end] (inclusive on both sides).
    """
    if end < start:
        raise OutOfRangeError("end must be >= start")

    out: List[JieqiEvent] = []
    for year in range(start.year, end.year + 1):
        for e in jieqi_events_for_year(year, config=config):
            if start <= e.date <= end:
                out.append(e)
    return out


@dataclass(frozen=True)
class JieqiMismatch:
    n: int
    name: str
    formula: date
    reference: date

    @property
    def delta_days(self) -> int:
        return (self.formula - self.reference).days


def jieqi_mismatches(
    year: int,
    reference: Dict[int, date],
    *,
    config: SolarTermConfig = SolarTermConfig(),
) -> List[JieqiMismatch]:
    """
    Compare formula days with reference days (n -> date), e.g. from an
    ephemeris. Indices missing from `reference` are ignored.
    """
    out: List[JieqiMismatch] = []
    for e in jieqi_events_for_year(year, config=config):
        ref = reference.get(e.n)
        if ref is not None and ref != e.date:
            out.append(JieqiMismatch(n=e.n, name=e.name, formula=e.date, reference=ref))
    return out
