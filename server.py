"""
Weather MCP Server - A Model Context Protocol server for weather and marine data.

This module exposes the weather_mcp services as MCP tools:
1. NOAA (api.weather.gov) current conditions, 7-day forecast and radar info
2. Open-Meteo Marine current conditions, forecasts and a wave summary

Locations can be a city name or a US ZIP code; they are resolved to
coordinates with the Open-Meteo Geocoding API. Every tool also has a variant
that takes latitude/longitude directly. No API keys are required.
"""

# Standard library imports for CLI parsing, logging, and type hints
import argparse
import logging
from typing import Any, Dict, Optional, Sequence

# Third-party imports
from mcp.server.fastmcp import FastMCP  # MCP SDK for building protocol-compliant servers

from weather_mcp.clients import geocoding_client, marine_client, noaa_client
from weather_mcp.config import get_settings
from weather_mcp.geocoding import GeocodingResolver
from weather_mcp.marine import MAX_FORECAST_DAYS, OpenMeteoMarineService
from weather_mcp.models import GeoLocation, MarineConditionsResult
from weather_mcp.noaa import NoaaWeatherService


logger = logging.getLogger("weather-mcp")

# Initialize the MCP server instance
# - json_response=True ensures all responses are JSON-serializable
mcp = FastMCP("Weather MCP Server", json_response=True)

MARINE_LOCATION_SUGGESTION = "Try a coastal location or use coordinates directly in the water."
MARINE_COORDINATES_SUGGESTION = (
    "Marine data may not be available at this location. Try coordinates over the ocean."
)


def clamp_forecast_days(forecast_days: int) -> int:
    """Keep the requested marine forecast length within 1..7 days."""
    return max(1, min(MAX_FORECAST_DAYS, forecast_days))


def _error(message: str, suggestion: Optional[str] = None) -> Dict[str, Any]:
    payload = {"error": message}
    if suggestion:
        payload["suggestion"] = suggestion
    return payload


def _coordinates_error(latitude: float, longitude: float) -> Optional[Dict[str, Any]]:
    if -90 <= latitude <= 90 and -180 <= longitude <= 180:
        return None
    return _error(f"Invalid coordinates: {latitude}, {longitude}")


async def _resolve(location: str) -> Optional[GeoLocation]:
    async with geocoding_client() as client:
        return await GeocodingResolver(client).resolve(location)


@mcp.tool()
async def get_current_conditions(location: str) -> Dict[str, Any]:
    """Get current weather conditions for a location.

    Returns temperature, humidity, wind, pressure, and other current
    conditions from NOAA.

    Args:
        location: A city name (e.g. 'Destin' or 'New York') or a US ZIP
            code (e.g. '32541').
    """
    # Step 1: Convert the location to coordinates
    geo = await _resolve(location)
    if geo is None:
        return _error(f"Could not find location: {location}")

    # Step 2: point -> stations -> latest observation
    async with noaa_client() as client:
        conditions = await NoaaWeatherService(client).get_current_conditions(
            geo.latitude, geo.longitude
        )
    if conditions is None:
        return _error(f"Could not retrieve weather conditions for {location}")

    # Prefer the geocoded name over NOAA's relative location
    conditions.location = geo.display_name
    return conditions.to_json()


@mcp.tool()
async def get_forecast(location: str) -> Dict[str, Any]:
    """Get the 7-day weather forecast for a location.

    Returns forecast periods including temperature, precipitation chance,
    wind, and conditions from NOAA.

    Args:
        location: A city name (e.g. 'Seattle') or a US ZIP code (e.g. '98101').
    """
    geo = await _resolve(location)
    if geo is None:
        return _error(f"Could not find location: {location}")

    async with noaa_client() as client:
        forecast = await NoaaWeatherService(client).get_forecast(geo.latitude, geo.longitude)
    if forecast is None:
        return _error(f"Could not retrieve forecast for {location}")

    forecast.location = geo.display_name
    return forecast.to_json()


@mcp.tool()
async def get_radar_info(location: str) -> Dict[str, Any]:
    """Get radar information for a location.

    Includes the nearest radar station details and radar image URLs from NOAA.

    Args:
        location: A city name (e.g. 'Miami, FL') or a US ZIP code (e.g. '33101').
    """
    geo = await _resolve(location)
    if geo is None:
        return _error(f"Could not find location: {location}")

    async with noaa_client() as client:
        radar = await NoaaWeatherService(client).get_radar_info(geo.latitude, geo.longitude)
    if radar is None:
        return _error(f"Could not retrieve radar info for {location}")

    radar.location = geo.display_name
    return radar.to_json()


@mcp.tool()
async def get_conditions_by_coordinates(latitude: float, longitude: float) -> Dict[str, Any]:
    """Get current weather conditions for latitude/longitude coordinates from NOAA.

    Args:
        latitude: Latitude coordinate (e.g. 30.3935).
        longitude: Longitude coordinate (e.g. -86.4958).
    """
    invalid = _coordinates_error(latitude, longitude)
    if invalid:
        return invalid

    async with noaa_client() as client:
        conditions = await NoaaWeatherService(client).get_current_conditions(latitude, longitude)
    if conditions is None:
        return _error(
            f"Could not retrieve weather conditions for coordinates: {latitude}, {longitude}"
        )
    return conditions.to_json()


@mcp.tool()
async def get_forecast_by_coordinates(latitude: float, longitude: float) -> Dict[str, Any]:
    """Get the 7-day weather forecast for latitude/longitude coordinates from NOAA.

    Args:
        latitude: Latitude coordinate (e.g. 30.3935).
        longitude: Longitude coordinate (e.g. -86.4958).
    """
    invalid = _coordinates_error(latitude, longitude)
    if invalid:
        return invalid

    async with noaa_client() as client:
        forecast = await NoaaWeatherService(client).get_forecast(latitude, longitude)
    if forecast is None:
        return _error(f"Could not retrieve forecast for coordinates: {latitude}, {longitude}")
    return forecast.to_json()


@mcp.tool()
async def get_current_marine_conditions(location: str) -> Dict[str, Any]:
    """Get current marine conditions for a coastal location.

    Includes wave height, direction and period, swell, sea surface
    temperature, sea level and ocean currents from Open-Meteo.

    Args:
        location: A coastal city name (e.g. 'Miami Beach', 'Santa Monica').
    """
    geo = await _resolve(location)
    if geo is None:
        return _error(f"Could not find location: {location}")

    async with marine_client() as client:
        conditions = await OpenMeteoMarineService(client).get_current_conditions(
            geo.latitude, geo.longitude
        )
    if conditions is None:
        return _error(
            f"Could not retrieve marine conditions for {location}. "
            "Note: Marine data is only available for ocean/sea locations.",
            MARINE_LOCATION_SUGGESTION,
        )

    conditions.location = geo.display_name
    return conditions.to_json()


@mcp.tool()
async def get_marine_forecast(location: str, forecast_days: int = 7) -> Dict[str, Any]:
    """Get the hourly and daily marine forecast for a coastal location.

    Covers wave, swell, and ocean current predictions for up to 7 days.

    Args:
        location: A coastal city name (e.g. 'San Diego', 'Key West').
        forecast_days: Number of forecast days (1-7, default 7).
    """
    forecast_days = clamp_forecast_days(forecast_days)

    geo = await _resolve(location)
    if geo is None:
        return _error(f"Could not find location: {location}")

    async with marine_client() as client:
        forecast = await OpenMeteoMarineService(client).get_forecast(
            geo.latitude, geo.longitude, forecast_days
        )
    if forecast is None:
        return _error(
            f"Could not retrieve marine forecast for {location}. "
            "Note: Marine data is only available for ocean/sea locations.",
            MARINE_LOCATION_SUGGESTION,
        )

    forecast.location = geo.display_name
    return forecast.to_json()


@mcp.tool()
async def get_marine_conditions_by_coordinates(latitude: float, longitude: float) -> Dict[str, Any]:
    """Get current marine conditions for latitude/longitude coordinates.

    Best for offshore or specific ocean locations.

    Args:
        latitude: Latitude coordinate (e.g. 30.3935).
        longitude: Longitude coordinate (e.g. -86.4958).
    """
    invalid = _coordinates_error(latitude, longitude)
    if invalid:
        return invalid

    async with marine_client() as client:
        conditions = await OpenMeteoMarineService(client).get_current_conditions(
            latitude, longitude
        )
    if conditions is None:
        return _error(
            f"Could not retrieve marine conditions for coordinates: {latitude}, {longitude}",
            MARINE_COORDINATES_SUGGESTION,
        )
    return conditions.to_json()


@mcp.tool()
async def get_marine_forecast_by_coordinates(
    latitude: float, longitude: float, forecast_days: int = 7
) -> Dict[str, Any]:
    """Get the hourly and daily marine forecast for latitude/longitude coordinates.

    Args:
        latitude: Latitude coordinate (e.g. 30.3935).
        longitude: Longitude coordinate (e.g. -86.4958).
        forecast_days: Number of forecast days (1-7, default 7).
    """
    forecast_days = clamp_forecast_days(forecast_days)

    invalid = _coordinates_error(latitude, longitude)
    if invalid:
        return invalid

    async with marine_client() as client:
        forecast = await OpenMeteoMarineService(client).get_forecast(
            latitude, longitude, forecast_days
        )
    if forecast is None:
        return _error(
            f"Could not retrieve marine forecast for coordinates: {latitude}, {longitude}",
            MARINE_COORDINATES_SUGGESTION,
        )
    return forecast.to_json()


def _height(meters: Optional[float], feet: Optional[float]) -> str:
    if meters is None:
        return "N/A"
    return f"{meters:.1f}m ({feet:.1f}ft)"


def _direction(cardinal: Optional[str], degrees: Optional[float]) -> str:
    if degrees is None:
        return "N/A"
    return f"{cardinal} ({degrees:g}°)"


def _fmt(value: Optional[float], suffix: str) -> str:
    return "N/A" if value is None else f"{value:.1f}{suffix}"


def summarize_waves(location: str, conditions: MarineConditionsResult) -> Dict[str, Any]:
    """Render current marine conditions as short human-readable strings."""
    c = conditions
    sea_temperature = "N/A"
    if c.sea_surface_temperature_c is not None:
        sea_temperature = (
            f"{c.sea_surface_temperature_c:.1f}°C ({c.sea_surface_temperature_f:.1f}°F)"
        )
    return {
        "Location": location,
        "ObservationTime": c.observation_time.isoformat() if c.observation_time else None,
        "Waves": {
            "Height": _height(c.wave_height_meters, c.wave_height_feet),
            "Direction": _direction(c.wave_direction_cardinal, c.wave_direction_degrees),
            "Period": _fmt(c.wave_period_seconds, " seconds"),
        },
        "Swell": {
            "Height": _height(c.swell_wave_height_meters, c.swell_wave_height_feet),
            "Direction": _direction(c.swell_wave_direction_cardinal, c.swell_wave_direction_degrees),
            "Period": _fmt(c.swell_wave_period_seconds, " seconds"),
        },
        "WindWaves": {
            "Height": _height(c.wind_wave_height_meters, c.wind_wave_height_feet),
            "Direction": c.wind_wave_direction_cardinal or "N/A",
        },
        "SeaTemperature": sea_temperature,
        "OceanCurrent": {
            "Speed": _fmt(c.ocean_current_velocity_knots, " knots"),
            "Direction": c.ocean_current_direction_cardinal or "N/A",
        },
    }


@mcp.tool()
async def get_wave_conditions_summary(location: str) -> Dict[str, Any]:
    """Get a summary of wave conditions for surfing, boating, or fishing.

    Returns wave heights, periods, and directions in an easy-to-read format.

    Args:
        location: A coastal location (e.g. 'Huntington Beach', 'Outer Banks').
    """
    geo = await _resolve(location)
    if geo is None:
        return _error(f"Could not find location: {location}")

    async with marine_client() as client:
        conditions = await OpenMeteoMarineService(client).get_current_conditions(
            geo.latitude, geo.longitude
        )
    if conditions is None:
        return _error(
            f"Could not retrieve wave conditions for {location}",
            "Try a coastal location closer to the ocean.",
        )

    return summarize_waves(geo.display_name, conditions)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Start the MCP server.

    stdio is the default transport, used when the server is launched as a
    child process by an MCP client. stdout is then reserved for protocol
    messages, so logging goes to stderr (the logging default).
    """
    parser = argparse.ArgumentParser(description="Run the Weather MCP server.")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol to use (default: stdio).",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host for HTTP transports.")
    parser.add_argument("--port", type=int, default=8000, help="Port for HTTP transports.")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    if args.transport != "stdio":
        mcp.settings.host = args.host
        mcp.settings.port = args.port

    logger.info("Starting MCP server (%s)", args.transport)
    mcp.run(transport=args.transport)


# Standard Python idiom: execute main() only when run as a script
if __name__ == "__main__":
    main()
