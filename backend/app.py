from __future__ import annotations
from pathlib import Path
from dotenv import load_dotenv
load_dotenv(dotenv_path=Path(__file__).parent / ".env")

from typing import List, Dict, Any, Optional
import logging
import os

from fastapi import FastAPI, Query, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from aqi import (
    AQICategory,
    PM25_BREAKPOINTS,
    aqi_color,
    compute_aqi,
    diagnose_pm25,
    parse_concentration,
)
from display import describe_aqi, format_value, pollutant_lines, uv_level
from readings import (
    HourlyAQIPoint,
    PollutantSample,
    WeatherSnapshot,
    current_weather,
    hourly_aqi,
    latest_pollutants,
)

SERVICE_NAME = "sunsafe-aqi-api"
SERVICE_VERSION = "0.6.0"

LOG_LEVEL = os.getenv("SUNSAFE_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "SUNSAFE_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000",
    ).split(",")
    if o.strip()
]

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
_LOGGER = logging.getLogger(__name__)

app = FastAPI(title="SunSafe AQI API", version=SERVICE_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

class AQIValue(BaseModel):
    value: int
    category: AQICategory
    color: str

class AQIPayload(BaseModel):
    pm25: float | None = None
    aqi: AQIValue | None = None
    reason: str | None = None

class BreakpointRow(BaseModel):
    index_low: int
    index_high: int
    conc_low: float
    conc_high: float
    category: AQICategory

class SummaryRequest(BaseModel):
    weather: Dict[str, Any] = Field(default_factory=dict)
    air_quality: Dict[str, Any] | None = None

class DisplayLines(BaseModel):
    temperature: str
    humidity: str
    uv_index: str
    aqi: str
    pollutants: List[str]

class SummaryPayload(BaseModel):
    weather: WeatherSnapshot
    uv_level: str | None = None
    pollutants: PollutantSample | None = None
    hourly: List[HourlyAQIPoint] = Field(default_factory=list)
    aqi: AQIPayload
    display: DisplayLines

def _aqi_payload(raw: Any) -> AQIPayload:
    res = compute_aqi(raw)
    reason = diagnose_pm25(raw)
    pm25 = parse_concentration(raw)
    if res is None:
        return AQIPayload(pm25=pm25, aqi=None, reason=reason.value if reason else None)
    return AQIPayload(
        pm25=pm25,
        aqi=AQIValue(value=res.value, category=res.category, color=aqi_color(res.value)),
    )

def _breakpoint_rows() -> List[BreakpointRow]:
    rows: List[BreakpointRow] = []
    index_low = 0
    for bp in PM25_BREAKPOINTS:
        rows.append(BreakpointRow(
            index_low=index_low,
            index_high=bp.index_high,
            conc_low=bp.conc_low,
            conc_high=bp.conc_high,
            category=bp.category,
        ))
        index_low = bp.index_high + 1
    return rows

@app.get("/health")
def health():
    return {"ok": True, "service": SERVICE_NAME, "version": SERVICE_VERSION}

@app.get("/aqi", response_model=AQIPayload)
def aqi(pm25: Optional[str] = Query(None)):
    # kept as a string so blank and non-numeric values report missing_input instead of 422
    payload = _aqi_payload(pm25)
    if payload.aqi is None:
        _LOGGER.info("/aqi pm25=%r -> no index (%s)", pm25, payload.reason)
    return payload

@app.get("/aqi/breakpoints", response_model=List[BreakpointRow])
def breakpoints():
    return _breakpoint_rows()

@app.post("/summary", response_model=SummaryPayload)
def summary(req: SummaryRequest):
    try:
        wx = current_weather(req.weather)
        sample = latest_pollutants(req.air_quality) if req.air_quality else None
        pm25 = sample.pm2_5 if sample else None
        return SummaryPayload(
            weather=wx,
            uv_level=uv_level(wx.uv_index),
            pollutants=sample,
            hourly=hourly_aqi(req.air_quality) if req.air_quality else [],
            aqi=_aqi_payload(pm25),
            display=DisplayLines(
                temperature=format_value(wx.temperature_2m, " °C"),
                humidity=format_value(wx.relative_humidity_2m, " %"),
                uv_index=format_value(wx.uv_index),
                aqi=describe_aqi(pm25),
                pollutants=pollutant_lines(sample),
            ),
        )
    except HTTPException:
        raise
    except Exception as e:
        _LOGGER.exception("/summary failed: %s: %s", type(e).__name__, e)
        raise HTTPException(status_code=500, detail="Could not build summary.")
