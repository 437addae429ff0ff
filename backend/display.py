from __future__ import annotations
import math
from typing import Any, List, Optional

from aqi import compute_aqi
from readings import PollutantSample

MISSING = "—"

# (label, field) in the order the client lists them
POLLUTANT_LABELS = [
    ("PM2.5", "pm2_5"),
    ("PM10", "pm10"),
    ("CO", "carbon_monoxide"),
    ("NO₂", "nitrogen_dioxide"),
    ("SO₂", "sulphur_dioxide"),
    ("O₃", "ozone"),
]
POLLUTANT_UNITS = " µg/m³"

def _is_missing(val: Any) -> bool:
    if val is None or val == "":
        return True
    return isinstance(val, float) and math.isnan(val)

def format_value(val: Any, units: str = "") -> str:
    return MISSING if _is_missing(val) else f"{val}{units}"

def describe_aqi(pm25: Any) -> str:
    res = compute_aqi(pm25)
    if res is None:
        return MISSING
    return f"{res.value} ({res.category.value})"

def uv_level(uv: Any) -> Optional[str]:
    if _is_missing(uv):
        return None
    try:
        v = float(uv)
    except (TypeError, ValueError):
        return None
    if v < 3:
        return "Low"
    if v < 6:
        return "Moderate"
    if v < 8:
        return "High"
    if v < 11:
        return "Very High"
    return "Extreme"

def pollutant_lines(sample: PollutantSample | None) -> List[str]:
    return [
        f"{label}: {format_value(getattr(sample, field) if sample else None, POLLUTANT_UNITS)}"
        for label, field in POLLUTANT_LABELS
    ]
