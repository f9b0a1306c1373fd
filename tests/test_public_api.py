from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from ccal.api.app import app
from ccal.api.public import get_calendar_day, get_calendar_month, get_jieqi_year, get_lunar


@pytest.fixture(scope="module")
def client() -> TestClient:
    return TestClient(app)


def test_get_lunar_function():
    res = get_lunar("2024-02-10")
    assert res.date == date(2024, 2, 10)
    assert (res.lunar.year, res.lunar.month, res.lunar.day, res.lunar.is_leap) == (2024, 1, 1, False)
    assert res.lunar.ganzhi_year == "甲辰"


def test_get_calendar_day_function():
    res = get_calendar_day(date(2024, 2, 4))
    assert res.jieqi is not None and res.jieqi.name == "立春"
    assert res.lunar.day_name == "廿五"
    assert res.week == 6

    plain = get_calendar_day("2024-02-05")
    assert plain.jieqi is None


def test_get_calendar_month_function():
    res = get_calendar_month(2024, 2)
    assert len(res.cells) == 42
    assert len(res.weeks) == 6
    first = res.cells[4]
    assert first.date == date(2024, 2, 1) and first.is_current_month
    assert first.lines == ["1", "廿二"]


def test_get_jieqi_year_function():
    res = get_jieqi_year(2024)
    assert [j.name for j in res.jieqi][:3] == ["小寒", "大寒", "立春"]


def test_lunar_endpoint(client: TestClient):
    r = client.get("/api/v1/lunar", params={"date": "2023-03-22"})
    assert r.status_code == 200
    body = r.json()
    assert body["date"] == "2023-03-22"
    assert body["lunar"]["month"] == 2
    assert body["lunar"]["is_leap"] is True
    assert body["lunar"]["month_name"] == "闰二月"
    assert body["lunar"]["label"] == "闰02/01"


@pytest.mark.parametrize("d", ["1899-12-31", "2101-01-01", "2024-13-01", "not-a-date"])
def test_lunar_endpoint_rejects(client: TestClient, d: str):
    r = client.get("/api/v1/lunar", params={"date": d})
    assert r.status_code == 422


def test_jieqi_endpoint(client: TestClient):
    r = client.get("/api/v1/jieqi", params={"year": 2024})
    assert r.status_code == 200
    rows = r.json()["jieqi"]
    assert len(rows) == 24
    assert rows[0] == {"n": 0, "name": "小寒", "kind": "节", "date": "2024-01-06"}

    assert client.get("/api/v1/jieqi", params={"year": 2101}).status_code == 422


def test_calendar_day_endpoint(client: TestClient):
    r = client.get("/api/v1/calendar/day", params={"date": "2024-12-21", "timing": True})
    assert r.status_code == 200
    body = r.json()
    assert body["jieqi"]["name"] == "冬至"
    assert body["week"] == 51


def test_calendar_month_endpoint(client: TestClient):
    r = client.get(
        "/api/v1/calendar/month",
        params={"year": 2024, "month": 2, "jieqi_mode": "bg"},
    )
    assert r.status_code == 200
    body = r.json()
    assert len(body["cells"]) == 42
    lichun = next(c for c in body["cells"] if c["date"] == "2024-02-04")
    assert lichun["lines"] == ["4", "廿五"]
    assert lichun["jieqi_background"] == "立春"
    assert body["weeks"][0] == {"year": 2024, "week": 5}


@pytest.mark.parametrize(
    "params",
    [
        {"year": 2024, "month": 13},
        {"year": 2024, "month": 2, "jieqi_mode": "true"},
    ],
)
def test_calendar_month_endpoint_rejects(client: TestClient, params):
    r = client.get("/api/v1/calendar/month", params=params)
    assert r.status_code == 422
