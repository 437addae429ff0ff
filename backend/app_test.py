import pytest
from fastapi.testclient import TestClient

from app import app

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_aqi_value():
    r = client.get("/aqi", params={"pm25": "12.1"})
    assert r.status_code == 200
    js = r.json()
    assert js["pm25"] == 12.1
    assert js["aqi"] == {"value": 51, "category": "Moderate", "color": "#edc13b"}
    assert js["reason"] is None


def test_aqi_zero_is_good():
    js = client.get("/aqi", params={"pm25": "0"}).json()
    assert js["aqi"]["value"] == 0
    assert js["aqi"]["category"] == "Good"


@pytest.mark.parametrize(
    "params, reason",
    [
        ({}, "missing_input"),
        ({"pm25": ""}, "missing_input"),
        ({"pm25": "NaN"}, "missing_input"),
        ({"pm25": "abc"}, "missing_input"),
        ({"pm25": "-1"}, "out_of_domain"),
        ({"pm25": "500.5"}, "out_of_domain"),
    ],
)
def test_aqi_absent(params, reason):
    r = client.get("/aqi", params=params)
    assert r.status_code == 200
    js = r.json()
    assert js["aqi"] is None
    assert js["reason"] == reason


def test_breakpoints():
    rows = client.get("/aqi/breakpoints").json()
    assert len(rows) == 7
    assert rows[0] == {"index_low": 0, "index_high": 50, "conc_low": 0.0,
                       "conc_high": 12.0, "category": "Good"}
    assert rows[1]["index_low"] == 51
    assert rows[-1]["category"] == "Extremely Hazardous"


def test_summary():
    body = {
        "weather": {"current": {"temperature_2m": 30.5, "relative_humidity_2m": 40, "uv_index": 7.2}},
        "air_quality": {"hourly": {"time": ["a", "b"], "pm2_5": [5.0, 35.4], "pm10": [10.0, 20.0]}},
    }
    r = client.post("/summary", json=body)
    assert r.status_code == 200
    js = r.json()
    assert js["uv_level"] == "High"
    assert js["pollutants"]["pm2_5"] == 35.4
    assert js["aqi"]["aqi"]["value"] == 100
    assert js["display"]["aqi"] == "100 (Moderate)"
    assert js["display"]["temperature"] == "30.5 °C"
    assert js["display"]["pollutants"][1] == "PM10: 20.0 µg/m³"


def test_summary_without_air_quality():
    r = client.post("/summary", json={"weather": {}})
    assert r.status_code == 200
    js = r.json()
    assert js["pollutants"] is None
    assert js["aqi"]["aqi"] is None
    assert js["aqi"]["reason"] == "missing_input"
    assert js["display"]["aqi"] == "—"
    assert js["display"]["uv_index"] == "—"


def test_summary_rejects_bad_body():
    r = client.post("/summary", json={"weather": [1, 2]})
    assert r.status_code == 422


def test_aqi_non_finite_is_missing_input():
    js = client.get("/aqi", params={"pm25": "inf"}).json()
    assert js["pm25"] is None
    assert js["aqi"] is None
    assert js["reason"] == "missing_input"


def test_summary_oversized_pm25():
    body = {"air_quality": {"hourly": {"time": ["2025-10-04T00:00"], "pm2_5": [10**400]}}}
    r = client.post("/summary", json=body)
    assert r.status_code == 200
    js = r.json()
    assert js["aqi"]["aqi"] is None
    assert js["aqi"]["reason"] == "missing_input"
    assert js["hourly"][0]["aqi"] is None


def test_summary_non_dict_hourly():
    r = client.post("/summary", json={"air_quality": {"hourly": [1, 2, 3]}})
    assert r.status_code == 200
    js = r.json()
    assert js["pollutants"] is None
    assert js["hourly"] == []


def test_summary_hourly_series():
    body = {"air_quality": {"hourly": {
        "time": ["2025-10-04T00:00", "2025-10-04T01:00"],
        "pm2_5": [0.0, 12.1],
    }}}
    js = client.post("/summary", json=body).json()
    assert js["hourly"] == [
        {"datetime_utc": "2025-10-04T00:00:00Z", "pm2_5": 0.0, "aqi": 0, "category": "Good"},
        {"datetime_utc": "2025-10-04T01:00:00Z", "pm2_5": 12.1, "aqi": 51, "category": "Moderate"},
    ]
