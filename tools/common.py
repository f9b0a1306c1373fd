from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

EPHEMERIS_NAME_ENV = "CCAL_EPHEMERIS"
EPHEMERIS_PATH_ENV = "CCAL_EPHEMERIS_PATH"


def add_range_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", help="YYYY-MM-DD (single day)")
    parser.add_argument("--start", help="YYYY-MM-DD (inclusive)")
    parser.add_argument("--end", help="YYYY-MM-DD (inclusive)")
    parser.add_argument("--json", action="store_true")


def add_ephemeris_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--ephemeris", default="", help=f"file name under data/ (or ${EPHEMERIS_NAME_ENV}, default de440s.bsp)")
    parser.add_argument("--ephemeris-path", default="", help=f"explicit .bsp path (or ${EPHEMERIS_PATH_ENV})")


def date_range_from_args(args: argparse.Namespace) -> Optional[Tuple[date, date]]:
    """
    --start/--end wins over --date; None when neither is given.
    """
    if args.start and args.end:
        return date.fromisoformat(args.start), date.fromisoformat(args.end)
    if args.date:
        d = date.fromisoformat(args.date)
        return d, d
    return None


def year_range(s: str) -> Tuple[int, int]:
    """
    "2024" -> (2024, 2024), "2000-2010" -> (2000, 2010)
    """
    head, _, tail = s.strip().partition("-")
    y0 = int(head)
    return y0, int(tail) if tail else y0


def find_ephemeris(args: argparse.Namespace, data_dir: Path = Path("data")) -> Path:
    """
    Locate the .bsp file for --verify. Exits via skip() when it is missing.
    """
    explicit = args.ephemeris_path.strip() or os.environ.get(EPHEMERIS_PATH_ENV, "").strip()
    if explicit:
        p = Path(explicit).expanduser()
        if not p.exists():
            skip(f"ephemeris path not found: {p}")
        return p

    name = args.ephemeris.strip() or os.environ.get(EPHEMERIS_NAME_ENV, "").strip() or "de440s.bsp"
    p = data_dir / name
    if not p.exists():
        skip(f"no {p}; set {EPHEMERIS_PATH_ENV} or pass --ephemeris-path")
    return p


def dump_json(obj: object) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def skip(msg: str) -> None:
    print(f"SKIP: {msg}")
    sys.exit(0)
