"""
Data model for resolved locations and the normalized tool results.

``GeoLocation`` is an immutable value produced once per geocoding call. The
result models are pydantic models whose attributes are snake_case in Python
and PascalCase on the wire, which is the shape existing MCP clients read.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal


@dataclass(frozen=True)
class GeoLocation:
    """
    Geographic location resolved from a place name or postal code.

    Attributes:
        city: Place name returned by the geocoder
        state: First-level administrative region (US state), can be None
        country: Country name
        latitude: Latitude in decimal degrees, within [-90, 90]
        longitude: Longitude in decimal degrees, within [-180, 180]
        timezone: IANA timezone name, can be None
    """
    city: Optional[str]
    state: Optional[str]
    country: Optional[str]
    latitude: float
    longitude: float
    timezone: Optional[str] = None

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"longitude out of range: {self.longitude}")

    @property
    def display_name(self) -> str:
        # absent parts render as empty strings, never as "None"
        city = self.city or ""
        country = self.country or ""
        if not self.state or not self.state.strip():
            return f"{city}, {country}"
        return f"{city}, {self.state}, {country}"


class ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    def to_json(self) -> Dict[str, Any]:
        """Dump with wire (PascalCase) keys and ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)


class CurrentConditionsResult(ResultModel):
    location: Optional[str] = None
    observation_time: Optional[datetime] = None
    description: Optional[str] = None
    temperature_f: Optional[float] = None
    temperature_c: Optional[float] = None
    feels_like_f: Optional[float] = None
    feels_like_c: Optional[float] = None
    humidity: Optional[float] = None
    dewpoint_f: Optional[float] = None
    dewpoint_c: Optional[float] = None
    # Rendered as "X.X mph"; the gust below stays numeric
    wind_speed: Optional[str] = None
    wind_direction: Optional[str] = None
    wind_gust_mph: Optional[float] = None
    barometric_pressure_in_hg: Optional[float] = None
    visibility_miles: Optional[float] = None
    icon_url: Optional[str] = None


class ForecastPeriodResult(ResultModel):
    name: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_daytime: Optional[bool] = None
    temperature: Optional[int] = None
    temperature_unit: Optional[str] = None
    precipitation_chance: Optional[int] = None
    humidity: Optional[int] = None
    wind_speed: Optional[str] = None
    wind_direction: Optional[str] = None
    short_forecast: Optional[str] = None
    detailed_forecast: Optional[str] = None
    icon_url: Optional[str] = None


class ForecastResult(ResultModel):
    location: Optional[str] = None
    generated_at: Optional[datetime] = None
    periods: List[ForecastPeriodResult] = []


class RadarInfoResult(ResultModel):
    location: Optional[str] = None
    nearest_radar_station: Optional[str] = None
    radar_station_name: Optional[str] = None
    radar_status: Optional[str] = None
    radar_mode: Optional[str] = None
    radar_latitude: Optional[float] = None
    radar_longitude: Optional[float] = None
    radar_image_url: Optional[str] = None
    radar_loop_url: Optional[str] = None


class MarineConditionsResult(ResultModel):
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    observation_time: Optional[datetime] = None
    timezone: Optional[str] = None

    wave_height_meters: Optional[float] = None
    wave_height_feet: Optional[float] = None
    wave_direction_degrees: Optional[float] = None
    wave_direction_cardinal: Optional[str] = None
    wave_period_seconds: Optional[float] = None
    wave_peak_period_seconds: Optional[float] = None

    wind_wave_height_meters: Optional[float] = None
    wind_wave_height_feet: Optional[float] = None
    wind_wave_direction_degrees: Optional[float] = None
    wind_wave_direction_cardinal: Optional[str] = None
    wind_wave_period_seconds: Optional[float] = None
    wind_wave_peak_period_seconds: Optional[float] = None

    swell_wave_height_meters: Optional[float] = None
    swell_wave_height_feet: Optional[float] = None
    swell_wave_direction_degrees: Optional[float] = None
    swell_wave_direction_cardinal: Optional[str] = None
    swell_wave_period_seconds: Optional[float] = None
    swell_wave_peak_period_seconds: Optional[float] = None

    secondary_swell_height_meters: Optional[float] = None
    secondary_swell_direction_degrees: Optional[float] = None
    secondary_swell_period_seconds: Optional[float] = None

    tertiary_swell_height_meters: Optional[float] = None
    tertiary_swell_direction_degrees: Optional[float] = None
    tertiary_swell_period_seconds: Optional[float] = None

    sea_level_height_meters: Optional[float] = None
    sea_surface_temperature_c: Optional[float] = None
    sea_surface_temperature_f: Optional[float] = None

    ocean_current_velocity_kmh: Optional[float] = None
    ocean_current_velocity_knots: Optional[float] = None
    ocean_current_direction_degrees: Optional[float] = None
    ocean_current_direction_cardinal: Optional[str] = None


class MarineHourlyForecast(ResultModel):
    time: datetime
    wave_height_meters: Optional[float] = None
    wave_height_feet: Optional[float] = None
    wave_direction_degrees: Optional[float] = None
    wave_direction_cardinal: Optional[str] = None
    wave_period_seconds: Optional[float] = None
    wind_wave_height_meters: Optional[float] = None
    swell_wave_height_meters: Optional[float] = None
    sea_surface_temperature_c: Optional[float] = None
    sea_surface_temperature_f: Optional[float] = None
    ocean_current_velocity_kmh: Optional[float] = None
    ocean_current_velocity_knots: Optional[float] = None
    ocean_current_direction_degrees: Optional[float] = None


class MarineDailyForecast(ResultModel):
    date: datetime
    wave_height_max_meters: Optional[float] = None
    wave_height_max_feet: Optional[float] = None
    wave_direction_dominant_degrees: Optional[float] = None
    wave_direction_dominant_cardinal: Optional[str] = None
    wave_period_max_seconds: Optional[float] = None
    wind_wave_height_max_meters: Optional[float] = None
    swell_wave_height_max_meters: Optional[float] = None


class MarineForecastResult(ResultModel):
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    generated_at: Optional[datetime] = None
    timezone: Optional[str] = None
    hourly_forecast: List[MarineHourlyForecast] = []
    daily_forecast: List[MarineDailyForecast] = []
