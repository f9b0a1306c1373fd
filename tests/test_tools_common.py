from __future__ import annotations

import argparse
from datetime import date

import pytest

from tools.common import (
    EPHEMERIS_PATH_ENV,
    add_ephemeris_args,
    add_range_args,
    date_range_from_args,
    find_ephemeris,
    year_range,
)


def _range_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    add_range_args(p)
    return p


def test_range_args_only_expose_dates_and_json():
    args = _range_parser().parse_args([])
    assert sorted(vars(args)) == ["date", "end", "json", "start"]
    with pytest.raises(SystemExit):
        _range_parser().parse_args(["--verbose"])


def test_date_range_from_args():
    p = _range_parser()
    assert date_range_from_args(p.parse_args([])) is None
    assert date_range_from_args(p.parse_args(["--date", "2024-02-10"])) == (date(2024, 2, 10), date(2024, 2, 10))
    args = p.parse_args(["--date", "2024-02-10", "--start", "2024-01-01", "--end", "2024-01-31"])
    assert date_range_from_args(args) == (date(2024, 1, 1), date(2024, 1, 31))


@pytest.mark.parametrize("s, expected", [("2024", (2024, 2024)), (" 2000-2010 ", (2000, 2010))])
def test_year_range(s: str, expected):
    assert year_range(s) == expected


def test_find_ephemeris(tmp_path, monkeypatch):
    monkeypatch.delenv(EPHEMERIS_PATH_ENV, raising=False)
    monkeypatch.delenv("CCAL_EPHEMERIS", raising=False)
    p = argparse.ArgumentParser()
    add_ephemeris_args(p)

    bsp = tmp_path / "de440s.bsp"
    bsp.write_bytes(b"")
    assert find_ephemeris(p.parse_args([]), data_dir=tmp_path) == bsp

    monkeypatch.setenv(EPHEMERIS_PATH_ENV, str(bsp))
    assert find_ephemeris(p.parse_args([]), data_dir=tmp_path / "none") == bsp

    monkeypatch.delenv(EPHEMERIS_PATH_ENV)
    with pytest.raises(SystemExit) as exc:
        find_ephemeris(p.parse_args(["--ephemeris", "de421.bsp"]), data_dir=tmp_path)
    assert exc.value.code == 0
