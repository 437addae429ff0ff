"""US EPA Air Quality Index for PM2.5 (µg/m³).

The index is a piecewise-linear map from a concentration onto 0-500 using the
EPA breakpoint table. Values the table does not cover are reported as absent,
never clamped.
"""
from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Any, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict

_LOGGER = logging.getLogger(__name__)

class AQICategory(str, Enum):
    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY_FOR_SENSITIVE_GROUPS = "Unhealthy for Sensitive Groups"
    UNHEALTHY = "Unhealthy"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"
    EXTREMELY_HAZARDOUS = "Extremely Hazardous"

class AQIUnavailable(str, Enum):
    """Why no index could be produced."""
    MISSING_INPUT = "missing_input"
    OUT_OF_DOMAIN = "out_of_domain"

class Breakpoint(NamedTuple):
    index_high: int
    conc_low: float
    conc_high: float
    category: AQICategory

class AQIResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int
    category: AQICategory

PM25_BREAKPOINTS: Tuple[Breakpoint, ...] = (
    Breakpoint(50, 0.0, 12.0, AQICategory.GOOD),
    Breakpoint(100, 12.1, 35.4, AQICategory.MODERATE),
    Breakpoint(150, 35.5, 55.4, AQICategory.UNHEALTHY_FOR_SENSITIVE_GROUPS),
    Breakpoint(200, 55.5, 150.4, AQICategory.UNHEALTHY),
    Breakpoint(300, 150.5, 250.4, AQICategory.VERY_UNHEALTHY),
    Breakpoint(400, 250.5, 350.4, AQICategory.HAZARDOUS),
    Breakpoint(500, 350.5, 500.4, AQICategory.EXTREMELY_HAZARDOUS),
)

# (upper index bound, hex color), checked in order
AQI_COLORS: Tuple[Tuple[int, str], ...] = (
    (50, "#227d34"),
    (100, "#edc13b"),
    (150, "#ea7417"),
    (200, "#c81b19"),
    (300, "#7e179a"),
)
AQI_COLOR_MAX = "#5a2210"

def parse_concentration(raw: Any) -> Optional[float]:
    """Read a raw sample as a finite float, or None when there is no usable number.

    None, empty or blank strings, booleans, NaN, infinities, ints too large for
    a float and anything float() rejects all come back as None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(value):
        return None
    return value

def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def _find_band(c: float) -> Optional[Tuple[int, Breakpoint]]:
    # first match wins; index_low of a band is one above the previous band's top
    index_low = 0
    for bp in PM25_BREAKPOINTS:
        if bp.conc_low <= c <= bp.conc_high:
            return index_low, bp
        index_low = bp.index_high + 1
    return None

def compute_aqi(pm25: Any) -> Optional[AQIResult]:
    """Convert a PM2.5 concentration to an AQI value and category.

    Returns None when the input is missing, not a finite number, or outside the
    table (negative, above 500.4, or between two bands). Never raises.
    """
    c = parse_concentration(pm25)
    if c is None:
        _LOGGER.debug("no AQI: missing or non-numeric input %r", pm25)
        return None
    match = _find_band(c)
    if match is None:
        _LOGGER.debug("no AQI: %s µg/m³ is outside the breakpoint table", c)
        return None
    index_low, bp = match
    slope = (bp.index_high - index_low) / (bp.conc_high - bp.conc_low)
    value = _round_half_up(slope * (c - bp.conc_low) + index_low)
    return AQIResult(value=value, category=bp.category)

def diagnose_pm25(pm25: Any) -> Optional[AQIUnavailable]:
    c = parse_concentration(pm25)
    if c is None:
        return AQIUnavailable.MISSING_INPUT
    if _find_band(c) is None:
        return AQIUnavailable.OUT_OF_DOMAIN
    return None

def aqi_color(aqi: int) -> str:
    for upper, color in AQI_COLORS:
        if aqi <= upper:
            return color
    return AQI_COLOR_MAX
