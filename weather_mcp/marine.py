"""
Marine conditions from the Open-Meteo Marine API.

Open-Meteo returns hourly and daily data column-oriented: a ``time`` list
plus one list per requested variable, aligned by index. The forecast is
transposed into one row per timestamp; a variable list that is missing or
shorter than ``time`` contributes ``None`` for the indices it lacks.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, Sequence

import httpx

from . import units
from .fetch import fetch_json
from .models import (
    MarineConditionsResult,
    MarineDailyForecast,
    MarineForecastResult,
    MarineHourlyForecast,
)

logger = logging.getLogger("weather-mcp.marine")

MARINE_PATH = "v1/marine"

MAX_FORECAST_DAYS = 7

# Errors a malformed upstream document can raise while it is normalized
MALFORMED_ERRORS = (AttributeError, KeyError, OverflowError, TypeError, ValueError)

CURRENT_VARIABLES = (
    "wave_height",
    "wave_direction",
    "wave_period",
    "wave_peak_period",
    "wind_wave_height",
    "wind_wave_direction",
    "wind_wave_period",
    "wind_wave_peak_period",
    "swell_wave_height",
    "swell_wave_direction",
    "swell_wave_period",
    "swell_wave_peak_period",
    "secondary_swell_wave_height",
    "secondary_swell_wave_direction",
    "secondary_swell_wave_period",
    "tertiary_swell_wave_height",
    "tertiary_swell_wave_direction",
    "tertiary_swell_wave_period",
    "sea_level_height_msl",
    "sea_surface_temperature",
    "ocean_current_velocity",
    "ocean_current_direction",
)

HOURLY_VARIABLES = (
    "wave_height",
    "wave_direction",
    "wave_period",
    "wind_wave_height",
    "wind_wave_direction",
    "wind_wave_period",
    "swell_wave_height",
    "swell_wave_direction",
    "swell_wave_period",
    "sea_surface_temperature",
    "ocean_current_velocity",
    "ocean_current_direction",
)

DAILY_VARIABLES = (
    "wave_height_max",
    "wave_direction_dominant",
    "wave_period_max",
    "wind_wave_height_max",
    "wind_wave_direction_dominant",
    "wind_wave_period_max",
    "swell_wave_height_max",
    "swell_wave_direction_dominant",
    "swell_wave_period_max",
)


def value_at(values: Optional[Sequence[Any]], index: int) -> Optional[Any]:
    if values is None or index < 0 or index >= len(values):
        return None
    return values[index]


def transpose(block: Optional[Dict[str, Any]], variables: Sequence[str]) -> Iterator[Dict[str, Any]]:
    """
    Yield one row per entry of ``block["time"]``.

    Each row maps ``"time"`` and every name in ``variables`` to the value at
    the same index, or None when that column is absent or too short. An
    absent block or time axis yields no rows.
    """
    if not isinstance(block, dict):
        return
    times = block.get("time")
    if not isinstance(times, list):
        return
    for index, time in enumerate(times):
        row = {"time": time}
        for name in variables:
            row[name] = value_at(block.get(name), index)
        yield row


def parse_time(value: Optional[str]) -> datetime:
    """Parse an Open-Meteo local timestamp, falling back to the current UTC time."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (TypeError, ValueError):
            logger.debug("Unparseable marine timestamp: %r", value)
    return datetime.now(timezone.utc)


def format_location(latitude: float, longitude: float) -> str:
    return f"{latitude:.4f}, {longitude:.4f}"


def normalize_current(
    data: Dict[str, Any], current: Dict[str, Any], latitude: float, longitude: float
) -> MarineConditionsResult:
    c = current.get
    return MarineConditionsResult(
        location=format_location(latitude, longitude),
        latitude=data.get("latitude"),
        longitude=data.get("longitude"),
        observation_time=parse_time(c("time")),
        timezone=data.get("timezone"),

        wave_height_meters=c("wave_height"),
        wave_height_feet=units.meters_to_feet(c("wave_height")),
        wave_direction_degrees=c("wave_direction"),
        wave_direction_cardinal=units.degrees_to_cardinal(c("wave_direction")),
        wave_period_seconds=c("wave_period"),
        wave_peak_period_seconds=c("wave_peak_period"),

        wind_wave_height_meters=c("wind_wave_height"),
        wind_wave_height_feet=units.meters_to_feet(c("wind_wave_height")),
        wind_wave_direction_degrees=c("wind_wave_direction"),
        wind_wave_direction_cardinal=units.degrees_to_cardinal(c("wind_wave_direction")),
        wind_wave_period_seconds=c("wind_wave_period"),
        wind_wave_peak_period_seconds=c("wind_wave_peak_period"),

        swell_wave_height_meters=c("swell_wave_height"),
        swell_wave_height_feet=units.meters_to_feet(c("swell_wave_height")),
        swell_wave_direction_degrees=c("swell_wave_direction"),
        swell_wave_direction_cardinal=units.degrees_to_cardinal(c("swell_wave_direction")),
        swell_wave_period_seconds=c("swell_wave_period"),
        swell_wave_peak_period_seconds=c("swell_wave_peak_period"),

        secondary_swell_height_meters=c("secondary_swell_wave_height"),
        secondary_swell_direction_degrees=c("secondary_swell_wave_direction"),
        secondary_swell_period_seconds=c("secondary_swell_wave_period"),

        tertiary_swell_height_meters=c("tertiary_swell_wave_height"),
        tertiary_swell_direction_degrees=c("tertiary_swell_wave_direction"),
        tertiary_swell_period_seconds=c("tertiary_swell_wave_period"),

        sea_level_height_meters=c("sea_level_height_msl"),
        sea_surface_temperature_c=c("sea_surface_temperature"),
        sea_surface_temperature_f=units.celsius_to_fahrenheit(c("sea_surface_temperature")),

        ocean_current_velocity_kmh=c("ocean_current_velocity"),
        ocean_current_velocity_knots=units.kmh_to_knots(c("ocean_current_velocity")),
        ocean_current_direction_degrees=c("ocean_current_direction"),
        ocean_current_direction_cardinal=units.degrees_to_cardinal(c("ocean_current_direction")),
    )


def hourly_entry(row: Dict[str, Any]) -> MarineHourlyForecast:
    return MarineHourlyForecast(
        time=parse_time(row["time"]),
        wave_height_meters=row["wave_height"],
        wave_height_feet=units.meters_to_feet(row["wave_height"]),
        wave_direction_degrees=row["wave_direction"],
        wave_direction_cardinal=units.degrees_to_cardinal(row["wave_direction"]),
        wave_period_seconds=row["wave_period"],
        wind_wave_height_meters=row["wind_wave_height"],
        swell_wave_height_meters=row["swell_wave_height"],
        sea_surface_temperature_c=row["sea_surface_temperature"],
        sea_surface_temperature_f=units.celsius_to_fahrenheit(row["sea_surface_temperature"]),
        ocean_current_velocity_kmh=row["ocean_current_velocity"],
        ocean_current_velocity_knots=units.kmh_to_knots(row["ocean_current_velocity"]),
        ocean_current_direction_degrees=row["ocean_current_direction"],
    )


def daily_entry(row: Dict[str, Any]) -> MarineDailyForecast:
    return MarineDailyForecast(
        date=parse_time(row["time"]),
        wave_height_max_meters=row["wave_height_max"],
        wave_height_max_feet=units.meters_to_feet(row["wave_height_max"]),
        wave_direction_dominant_degrees=row["wave_direction_dominant"],
        wave_direction_dominant_cardinal=units.degrees_to_cardinal(row["wave_direction_dominant"]),
        wave_period_max_seconds=row["wave_period_max"],
        wind_wave_height_max_meters=row["wind_wave_height_max"],
        swell_wave_height_max_meters=row["swell_wave_height_max"],
    )


def normalize_forecast(data: Dict[str, Any], latitude: float, longitude: float) -> MarineForecastResult:
    return MarineForecastResult(
        location=format_location(latitude, longitude),
        latitude=data.get("latitude"),
        longitude=data.get("longitude"),
        generated_at=datetime.now(timezone.utc),
        timezone=data.get("timezone"),
        hourly_forecast=[hourly_entry(row) for row in transpose(data.get("hourly"), HOURLY_VARIABLES)],
        daily_forecast=[daily_entry(row) for row in transpose(data.get("daily"), DAILY_VARIABLES)],
    )


class OpenMeteoMarineService:
    """Current marine conditions and marine forecasts for a coordinate pair."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def get_current_conditions(
        self, latitude: float, longitude: float
    ) -> Optional[MarineConditionsResult]:
        """
        Fetch every current marine variable in one request.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees

        Returns:
            Current marine conditions, or None if the provider returned no
            ``current`` block (typically an inland location)
        """
        # Every current variable in a single request
        data = await fetch_json(
            self._client,
            MARINE_PATH,
            operation="marine_current",
            params={
                "latitude": f"{latitude:.4f}",
                "longitude": f"{longitude:.4f}",
                "current": ",".join(CURRENT_VARIABLES),
                "timezone": "auto",
            },
        )
        if data is None:
            return None

        # Inland points come back without a current block
        current = data.get("current")
        if not isinstance(current, dict) or not current:
            logger.warning(
                "marine_current: no current data found for coordinates: %s, %s", latitude, longitude
            )
            return None

        try:
            return normalize_current(data, current, latitude, longitude)
        except MALFORMED_ERRORS:
            logger.exception("marine_current: malformed response for %s, %s", latitude, longitude)
            return None

    async def get_forecast(
        self, latitude: float, longitude: float, forecast_days: int = MAX_FORECAST_DAYS
    ) -> Optional[MarineForecastResult]:
        """
        Fetch hourly and daily marine forecasts.

        ``forecast_days`` is passed through unchanged; callers clamp it.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            forecast_days: Number of forecast days to request

        Returns:
            Hourly and daily entries in provider order, or None on failure
        """
        # Hourly and daily blocks share one request and one time zone
        data = await fetch_json(
            self._client,
            MARINE_PATH,
            operation="marine_forecast",
            params={
                "latitude": f"{latitude:.4f}",
                "longitude": f"{longitude:.4f}",
                "hourly": ",".join(HOURLY_VARIABLES),
                "daily": ",".join(DAILY_VARIABLES),
                "forecast_days": forecast_days,
                "timezone": "auto",
            },
        )
        if data is None:
            return None

        try:
            return normalize_forecast(data, latitude, longitude)
        except MALFORMED_ERRORS:
            logger.exception("marine_forecast: malformed response for %s, %s", latitude, longitude)
            return None
