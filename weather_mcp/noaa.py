"""
NOAA / National Weather Service chains.

Every operation starts from the ``/points/{lat},{lon}`` metadata for the
coordinates and follows the URLs it references:

- current conditions: point -> observation stations -> latest observation
- forecast:           point -> forecast
- radar info:         point -> radar station detail (best effort)

Stages run strictly in sequence and the chain stops at the first stage that
yields nothing. Point metadata is fetched fresh for each operation.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from . import units
from .fetch import fetch_json
from .models import (
    CurrentConditionsResult,
    ForecastPeriodResult,
    ForecastResult,
    RadarInfoResult,
)

logger = logging.getLogger("weather-mcp.noaa")

RADAR_IMAGE_URL = "https://radar.weather.gov/ridge/standard/{station}_0.gif"
RADAR_LOOP_URL = "https://radar.weather.gov/ridge/standard/{station}_loop.gif"

UNKNOWN = "Unknown"

# Errors a malformed upstream document can raise while it is normalized
MALFORMED_ERRORS = (AttributeError, KeyError, OverflowError, TypeError, ValueError)


def _object(value: Any) -> Dict[str, Any]:
    """Return ``value`` when it is a JSON object, else an empty one."""
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> Optional[str]:
    """Return ``value`` when it is a non-empty string, else None."""
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class PointMetadata:
    """Grid descriptor for a coordinate pair and the resources it links to."""
    grid_id: Optional[str]
    grid_x: Optional[int]
    grid_y: Optional[int]
    forecast_url: Optional[str]
    observation_stations_url: Optional[str]
    radar_station: Optional[str]
    city: Optional[str]
    state: Optional[str]

    @property
    def relative_location(self) -> str:
        return f"{self.city or ''}, {self.state or ''}"

    @classmethod
    def from_json(cls, properties: Dict[str, Any]) -> "PointMetadata":
        relative = _object(_object(properties.get("relativeLocation")).get("properties"))
        return cls(
            grid_id=properties.get("gridId"),
            grid_x=properties.get("gridX"),
            grid_y=properties.get("gridY"),
            # empty strings count as absent
            forecast_url=_text(properties.get("forecast")),
            observation_stations_url=_text(properties.get("observationStations")),
            radar_station=_text(properties.get("radarStation")),
            city=_text(relative.get("city")),
            state=_text(relative.get("state")),
        )


@dataclass(frozen=True)
class Measurement:
    """A NOAA quantitative value: ``value`` is None when the sensor reported nothing."""
    value: Optional[float] = None
    unit_code: Optional[str] = None
    quality_control: Optional[str] = None

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "Measurement":
        if not data:
            return cls()
        value = data.get("value")
        return cls(
            value=float(value) if value is not None else None,
            unit_code=data.get("unitCode"),
            quality_control=data.get("qualityControl"),
        )


def _measure(properties: Dict[str, Any], name: str) -> Optional[float]:
    return Measurement.from_json(properties.get(name)).value


def feels_like(
    temperature: Optional[float],
    wind_chill: Optional[float],
    heat_index: Optional[float],
) -> Optional[float]:
    """Wind chill wins over heat index, which wins over the raw temperature."""
    if wind_chill is not None:
        return wind_chill
    if heat_index is not None:
        return heat_index
    return temperature


def format_wind_speed(meters_per_second: Optional[float]) -> Optional[str]:
    mph = units.meters_per_second_to_mph(meters_per_second)
    if mph is None:
        return None
    return f"{mph:.1f} mph"


def normalize_observation(properties: Dict[str, Any], location: str) -> CurrentConditionsResult:
    """Convert a NOAA observation (metric SI values) into a current-conditions result."""
    temperature = _measure(properties, "temperature")
    apparent = feels_like(
        temperature,
        _measure(properties, "windChill"),
        _measure(properties, "heatIndex"),
    )
    dewpoint = _measure(properties, "dewpoint")

    return CurrentConditionsResult(
        location=location,
        observation_time=properties.get("timestamp"),
        description=properties.get("textDescription"),
        temperature_c=temperature,
        temperature_f=units.celsius_to_fahrenheit(temperature),
        feels_like_c=apparent,
        feels_like_f=units.celsius_to_fahrenheit(apparent),
        humidity=_measure(properties, "relativeHumidity"),
        dewpoint_c=dewpoint,
        dewpoint_f=units.celsius_to_fahrenheit(dewpoint),
        wind_speed=format_wind_speed(_measure(properties, "windSpeed")),
        wind_direction=units.degrees_to_cardinal(_measure(properties, "windDirection")),
        wind_gust_mph=units.meters_per_second_to_mph(_measure(properties, "windGust")),
        barometric_pressure_in_hg=units.pascals_to_inhg(_measure(properties, "barometricPressure")),
        visibility_miles=units.meters_to_miles(_measure(properties, "visibility")),
        icon_url=properties.get("icon"),
    )


def _percentage(data: Optional[Dict[str, Any]]) -> Optional[int]:
    value = Measurement.from_json(data).value
    return int(value) if value is not None else None


def normalize_period(period: Dict[str, Any]) -> ForecastPeriodResult:
    return ForecastPeriodResult(
        name=period.get("name"),
        start_time=period.get("startTime"),
        end_time=period.get("endTime"),
        is_daytime=period.get("isDaytime"),
        temperature=period.get("temperature"),
        temperature_unit=period.get("temperatureUnit"),
        precipitation_chance=_percentage(period.get("probabilityOfPrecipitation")),
        humidity=_percentage(period.get("relativeHumidity")),
        wind_speed=period.get("windSpeed"),
        wind_direction=period.get("windDirection"),
        short_forecast=period.get("shortForecast"),
        detailed_forecast=period.get("detailedForecast"),
        icon_url=period.get("icon"),
    )


def normalize_forecast(properties: Dict[str, Any], location: str) -> ForecastResult:
    # provider order is kept as-is
    periods = [normalize_period(p) for p in properties.get("periods") or []]
    return ForecastResult(
        location=location,
        generated_at=properties.get("generatedAt"),
        periods=periods,
    )


def build_radar_info(
    station_id: str,
    station: Optional[Dict[str, Any]],
    location: str,
) -> RadarInfoResult:
    """
    Build radar info from the station identifier and its optional detail record.

    Without the detail record the station identifier doubles as its name and
    status/mode are reported as "Unknown". GeoJSON coordinates are ordered
    (longitude, latitude).
    """
    station = station or {}
    properties = station.get("properties") or {}
    rda = (properties.get("rda") or {}).get("properties") or {}
    coordinates: List[float] = (station.get("geometry") or {}).get("coordinates") or []

    return RadarInfoResult(
        location=location,
        nearest_radar_station=station_id,
        radar_station_name=properties.get("name") or station_id,
        radar_status=rda.get("operabilityStatus") or UNKNOWN,
        radar_mode=rda.get("mode") or UNKNOWN,
        radar_latitude=coordinates[1] if len(coordinates) > 1 else None,
        radar_longitude=coordinates[0] if len(coordinates) > 0 else None,
        radar_image_url=RADAR_IMAGE_URL.format(station=station_id),
        radar_loop_url=RADAR_LOOP_URL.format(station=station_id),
    )


class NoaaWeatherService:
    """Current conditions, forecast and radar info from api.weather.gov."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def get_current_conditions(
        self, latitude: float, longitude: float
    ) -> Optional[CurrentConditionsResult]:
        """
        Fetch the latest observation from the nearest observation station.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees

        Returns:
            Normalized current conditions, or None if any stage failed
        """
        # Step 1: Resolve the coordinates to a grid point
        point = await self.fetch_point(latitude, longitude, "current_conditions")
        if point is None:
            return None

        if point.observation_stations_url is None:
            logger.warning(
                "current_conditions: no observation stations URL for %s, %s", latitude, longitude
            )
            return None

        # Step 2: NOAA lists stations nearest first, so the first one is used
        station_id = await self.fetch_first_station_id(point.observation_stations_url)
        if station_id is None:
            return None

        # Step 3: Latest observation from that station
        observation = await self.fetch_latest_observation(station_id)
        if observation is None:
            return None

        try:
            return normalize_observation(observation, point.relative_location)
        except MALFORMED_ERRORS:
            logger.exception(
                "current_conditions: malformed observation from %s for %s, %s",
                station_id,
                latitude,
                longitude,
            )
            return None

    async def get_forecast(self, latitude: float, longitude: float) -> Optional[ForecastResult]:
        """
        Fetch the 7-day (twelve-hour period) forecast for the point's grid cell.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees

        Returns:
            Forecast periods in provider order, or None if any stage failed
        """
        # Step 1: The point metadata carries the grid cell's forecast URL
        point = await self.fetch_point(latitude, longitude, "forecast")
        if point is None:
            return None

        if point.forecast_url is None:
            logger.warning("forecast: no forecast URL for %s, %s", latitude, longitude)
            return None

        # Step 2: Follow it as given; it is absolute and already grid-specific
        data = await fetch_json(self._client, point.forecast_url, operation="forecast")
        if data is None:
            return None

        properties = _object(data.get("properties"))
        if not properties:
            logger.warning("forecast: no forecast data for %s, %s", latitude, longitude)
            return None

        try:
            return normalize_forecast(properties, point.relative_location)
        except MALFORMED_ERRORS:
            logger.exception("forecast: malformed forecast for %s, %s", latitude, longitude)
            return None

    async def get_radar_info(self, latitude: float, longitude: float) -> Optional[RadarInfoResult]:
        """
        Find the nearest radar station and build its imagery URLs.

        The station detail lookup is optional; when it fails the result is
        still returned with reduced detail.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees

        Returns:
            Radar info, or None if the point lookup failed or named no station
        """
        point = await self.fetch_point(latitude, longitude, "radar_info")
        if point is None:
            return None

        station_id = point.radar_station
        if station_id is None:
            logger.warning("radar_info: no radar station for %s, %s", latitude, longitude)
            return None

        # Detail is nice to have, so its failures are only logged at debug level
        station = await fetch_json(
            self._client,
            f"radar/stations/{station_id}",
            operation="radar_station",
            failure_level=logging.DEBUG,
        )
        if station is None:
            logger.debug("radar_info: station details unavailable for %s", station_id)

        try:
            return build_radar_info(station_id, station, point.relative_location)
        except MALFORMED_ERRORS:
            logger.debug("radar_info: unusable station details for %s", station_id, exc_info=True)
            return build_radar_info(station_id, None, point.relative_location)

    async def fetch_point(
        self, latitude: float, longitude: float, operation: str
    ) -> Optional[PointMetadata]:
        # NOAA expects at most four decimals and redirects otherwise
        data = await fetch_json(
            self._client, f"points/{latitude:.4f},{longitude:.4f}", operation=operation
        )
        if data is None:
            return None

        properties = _object(data.get("properties"))
        if not properties:
            logger.warning(
                "%s: no points data found for coordinates: %s, %s", operation, latitude, longitude
            )
            return None
        return PointMetadata.from_json(properties)

    async def fetch_first_station_id(self, stations_url: str) -> Optional[str]:
        data = await fetch_json(self._client, stations_url, operation="observation_stations")
        if data is None:
            return None

        features = data.get("features")
        if not isinstance(features, list) or not features:
            logger.warning("observation_stations: no stations listed at %s", stations_url)
            return None

        first = _object(features[0])
        station_id = _text(_object(first.get("properties")).get("stationIdentifier"))
        if station_id is None:
            logger.warning("observation_stations: first station has no identifier at %s", stations_url)
            return None
        return station_id

    async def fetch_latest_observation(self, station_id: str) -> Optional[Dict[str, Any]]:
        data = await fetch_json(
            self._client,
            f"stations/{station_id}/observations/latest",
            operation="latest_observation",
        )
        if data is None:
            return None

        properties = _object(data.get("properties"))
        if not properties:
            logger.warning("latest_observation: no observation data for station %s", station_id)
            return None
        return properties
