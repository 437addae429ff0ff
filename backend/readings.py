from __future__ import annotations
from typing import Any, Dict, List, Optional

import pandas as pd
from pydantic import BaseModel

from aqi import AQICategory, compute_aqi, parse_concentration

POLLUTANTS: List[str] = [
    "pm2_5",
    "pm10",
    "carbon_monoxide",
    "nitrogen_dioxide",
    "sulphur_dioxide",
    "ozone",
]

class PollutantSample(BaseModel):
    time: str | None = None
    pm2_5: float | None = None
    pm10: float | None = None
    carbon_monoxide: float | None = None
    nitrogen_dioxide: float | None = None
    sulphur_dioxide: float | None = None
    ozone: float | None = None

class WeatherSnapshot(BaseModel):
    time: str | None = None
    temperature_2m: float | None = None
    relative_humidity_2m: float | None = None
    uv_index: float | None = None

class HourlyAQIPoint(BaseModel):
    datetime_utc: str
    pm2_5: float | None = None
    aqi: int | None = None
    category: AQICategory | None = None

def _require_dict(js: Any) -> Dict[str, Any]:
    if not isinstance(js, dict):
        raise TypeError(f"expected a JSON object, got {type(js).__name__}")
    return js

def _hourly_block(js: dict) -> Dict[str, Any]:
    hourly = _require_dict(js).get("hourly")
    return hourly if isinstance(hourly, dict) else {}

def _series(hourly: Dict[str, Any], key: str) -> list:
    s = hourly.get(key)
    return s if isinstance(s, list) else []

def hourly_to_df(js: dict) -> pd.DataFrame:
    hourly = _hourly_block(js)
    times = _series(hourly, "time")
    cols = ["datetime_utc"] + POLLUTANTS
    if not times:
        return pd.DataFrame(columns=cols)
    df = pd.DataFrame({"datetime_utc": pd.to_datetime(pd.Series(times, dtype="object"), utc=True, errors="coerce")})
    for p in POLLUTANTS:
        series = _series(hourly, p)[: len(times)]
        values = [parse_concentration(v) for v in series] + [None] * (len(times) - len(series))
        df[p] = pd.Series(values, dtype="float64")
    df = df.dropna(subset=["datetime_utc"])
    return df.sort_values("datetime_utc").reset_index(drop=True)

def hourly_aqi(js: dict) -> List[HourlyAQIPoint]:
    df = hourly_to_df(js)
    rows: List[HourlyAQIPoint] = []
    for _, r in df.iterrows():
        pm25 = parse_concentration(r["pm2_5"])
        res = compute_aqi(pm25)
        rows.append(HourlyAQIPoint(
            datetime_utc=r["datetime_utc"].strftime("%Y-%m-%dT%H:%M:%SZ"),
            pm2_5=pm25,
            aqi=res.value if res else None,
            category=res.category if res else None,
        ))
    return rows

def latest_pollutants(js: dict) -> Optional[PollutantSample]:
    hourly = _hourly_block(js)
    if not hourly:
        return None
    times = _series(hourly, "time")
    idx = len(times) - 1 if times else 0
    def g(key):
        series = _series(hourly, key)
        return parse_concentration(series[idx]) if idx < len(series) else None
    t = times[idx] if times else None
    return PollutantSample(
        time=t if isinstance(t, str) else None,
        **{p: g(p) for p in POLLUTANTS},
    )

def current_weather(js: dict) -> WeatherSnapshot:
    cur = _require_dict(js).get("current")
    if not isinstance(cur, dict):
        cur = {}
    t = cur.get("time")
    return WeatherSnapshot(
        time=t if isinstance(t, str) else None,
        temperature_2m=parse_concentration(cur.get("temperature_2m")),
        relative_humidity_2m=parse_concentration(cur.get("relative_humidity_2m")),
        uv_index=parse_concentration(cur.get("uv_index")),
    )
