# src/ccal/core/config.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Tuple


@dataclass(frozen=True)
class LunarTableConfig:
    """
    Coverage of the packed lunar year table.

    The epoch is lunar 1900-01-01 (正月初一), i.e. Gregorian 1900-01-31.
    """
    min_year: int = 1900
    max_year: int = 2100
    epoch: date = date(1900, 1, 31)


@dataclass(frozen=True)
class SolarTermConfig:
    """
    Constants of the shouxing formula: day = [Y*D + C] - L
    """
    min_year: int = 1900
    max_year: int = 2100
    d: float = 0.2422

    # years > century_boundary use 21st-century C values
    century_boundary: int = 2000
    # term indices (小寒..雨水) that keep 20th-century C in the boundary year
    # and use L = (Y-1)//4
    early_terms: Tuple[int, ...] = (0, 1, 2, 3)


@dataclass(frozen=True)
class GridConfig:
    rows: int = 6
    cols: int = 7

    @property
    def cells(self) -> int:
        return self.rows * self.cols

