from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo
import logging

from skyfield.api import Loader
from skyfield import almanac

log = logging.getLogger(__name__)

# 节气日以北京时间为准
BJT = ZoneInfo("Asia/Shanghai")

# skyfield's solar_terms index k means solar longitude 15*k (0 = 春分);
# jieqi index n starts at 小寒 (285 deg), so n = (k + 5) % 24
SKYFIELD_TO_JIEQI_SHIFT = 5


def jieqi_index_from_skyfield(k: int) -> int:
    return (int(k) + SKYFIELD_TO_JIEQI_SHIFT) % 24


# ----------------------------
# Ephemeris path resolution
# ----------------------------
def _project_data_dir() -> Path:
    return Path(__file__).resolve().parents[4] / "data"


def _default_ephemeris_path() -> Path:
    """
    Prefer de440s (longer coverage) if present; otherwise fall back to de421.
    """
    data_dir = _project_data_dir()
    p440s = data_dir / "de440s.bsp"
    p421 = data_dir / "de421.bsp"
    return p440s if p440s.exists() else p421


def _resolve_ephemeris_path(
    *,
    ephemeris_path: Optional[Path],
    ephemeris: Optional[Union[str, Path]],
) -> Path:
    """
    Resolution priority:
      1) ephemeris_path (Path) if provided
      2) ephemeris (str|Path): absolute path as is, otherwise under the data dir
      3) default: de440s if present else de421
    """
    if ephemeris_path is not None:
        return ephemeris_path

    if ephemeris is not None:
        p = ephemeris if isinstance(ephemeris, Path) else Path(ephemeris)
        if p.is_absolute():
            return p
        return _project_data_dir() / p

    return _default_ephemeris_path()


@dataclass(frozen=True)
class SkyfieldAlmanac:
    """
    Reference solar-term days from a JPL ephemeris (skyfield almanac).

    Only used to audit the closed-form formula; the calendar itself never
    depends on an ephemeris.
    """

    ephemeris_path: Optional[Path] = None
    ephemeris: Optional[Union[str, Path]] = None
    tz: ZoneInfo = BJT

    def __post_init__(self) -> None:
        resolved = _resolve_ephemeris_path(
            ephemeris_path=self.ephemeris_path,
            ephemeris=self.ephemeris,
        )
        object.__setattr__(self, "ephemeris_path", resolved)

        if not self.ephemeris_path.exists():
            raise FileNotFoundError(
                f"Ephemeris not found: {self.ephemeris_path}\n"
                f"Place de440s.bsp or de421.bsp under {_project_data_dir()}\n"
                "Or pass ephemeris='de440s.bsp' / ephemeris_path=Path(...)."
            )

        loader = Loader(str(self.ephemeris_path.parent))
        eph = loader(self.ephemeris_path.name)
        ts = loader.timescale()

        object.__setattr__(self, "_eph", eph)
        object.__setattr__(self, "_ts", ts)
        object.__setattr__(self, "_f", almanac.solar_terms(eph))

    def jieqi_instants(self, year: int) -> List[Tuple[int, datetime]]:
        """
        (n, local datetime) for every term crossing in the local calendar year.
        """
        t0 = self._ts.from_datetime(datetime(int(year), 1, 1, tzinfo=self.tz))
        t1 = self._ts.from_datetime(datetime(int(year) + 1, 1, 1, tzinfo=self.tz))
        times, events = almanac.find_discrete(t0, t1, self._f)

        out: List[Tuple[int, datetime]] = []
        for t, k in zip(times, events):
            local = t.utc_datetime().astimezone(self.tz)
            out.append((jieqi_index_from_skyfield(int(k)), local))
        log.debug("skyfield jieqi year=%s found=%d", year, len(out))
        return out

    def jieqi_days(self, year: int) -> Dict[int, date]:
        """
        n -> local (Beijing) date of the term in `year`.
        """
        return {n: t.date() for n, t in self.jieqi_instants(year)}
