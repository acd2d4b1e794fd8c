from typing import Any, Callable, Dict, List, Union

import httpx
import pytest

NOAA_BASE = "https://api.weather.gov/"
MARINE_BASE = "https://marine-api.open-meteo.com/"
GEOCODING_BASE = "https://geocoding-api.open-meteo.com/"

Route = Union[Dict[str, Any], httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeProvider:
    """Serves canned JSON by URL path and records every request it sees."""

    def __init__(self, routes: Dict[str, Route]) -> None:
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"title": "Not Found"})
        if callable(route):
            return route(request)
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    def client(self, base_url: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=base_url, transport=httpx.MockTransport(self.handler))

    @property
    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]


def connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def read_timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


def geocoding_result(name, admin1, country, latitude, longitude, postcodes=None, timezone="America/Chicago"):
    result = {
        "id": 1,
        "name": name,
        "latitude": latitude,
        "longitude": longitude,
        "country": country,
        "admin1": admin1,
        "timezone": timezone,
    }
    if postcodes is not None:
        result["postcodes"] = postcodes
    return result


def points_payload(
    forecast=NOAA_BASE + "gridpoints/TAE/42,30/forecast",
    stations=NOAA_BASE + "gridpoints/TAE/42,30/stations",
    radar="KEVX",
):
    return {
        "properties": {
            "gridId": "TAE",
            "gridX": 42,
            "gridY": 30,
            "forecast": forecast,
            "observationStations": stations,
            "radarStation": radar,
            "relativeLocation": {"properties": {"city": "Destin", "state": "FL"}},
        }
    }


def stations_payload(*station_ids):
    return {"features": [{"properties": {"stationIdentifier": s, "name": s}} for s in station_ids]}


def measurement(value, unit="wmoUnit:degC"):
    return {"unitCode": unit, "value": value, "qualityControl": "V"}


def observation_payload(**overrides):
    properties = {
        "timestamp": "2024-07-01T14:53:00+00:00",
        "textDescription": "Partly Cloudy",
        "icon": "https://api.weather.gov/icons/land/day/sct?size=medium",
        "temperature": measurement(30.0),
        "dewpoint": measurement(24.0),
        "windDirection": measurement(180.0, "wmoUnit:degree_(angle)"),
        "windSpeed": measurement(5.0, "wmoUnit:km_h-1"),
        "windGust": measurement(None, "wmoUnit:km_h-1"),
        "barometricPressure": measurement(101600.0, "wmoUnit:Pa"),
        "visibility": measurement(16090.0, "wmoUnit:m"),
        "relativeHumidity": measurement(70.5, "wmoUnit:percent"),
        "windChill": measurement(None),
        "heatIndex": measurement(35.0),
    }
    properties.update(overrides)
    return {"properties": properties}


def forecast_payload(periods):
    return {"properties": {"generatedAt": "2024-07-01T15:00:00+00:00", "periods": periods}}


def forecast_period(number, name, is_daytime=True, precipitation=20, humidity=None):
    return {
        "number": number,
        "name": name,
        "startTime": "2024-07-01T06:00:00-05:00",
        "endTime": "2024-07-01T18:00:00-05:00",
        "isDaytime": is_daytime,
        "temperature": 91,
        "temperatureUnit": "F",
        "probabilityOfPrecipitation": {"unitCode": "wmoUnit:percent", "value": precipitation},
        "relativeHumidity": {"unitCode": "wmoUnit:percent", "value": humidity},
        "windSpeed": "5 to 10 mph",
        "windDirection": "SW",
        "icon": "https://api.weather.gov/icons/land/day/tsra,20",
        "shortForecast": "Chance Showers And Thunderstorms",
        "detailedForecast": "A chance of showers and thunderstorms. Mostly sunny.",
    }


def radar_station_payload():
    return {
        "geometry": {"type": "Point", "coordinates": [-85.9214, 30.5644]},
        "properties": {
            "id": "KEVX",
            "name": "Eglin AFB",
            "stationType": "WSR-88D",
            "rda": {"properties": {"mode": "Operational", "operabilityStatus": "RDA - On-line"}},
        },
    }


def marine_current_payload(**overrides):
    current = {
        "time": "2024-07-01T14:00",
        "interval": 900,
        "wave_height": 1.2,
        "wave_direction": 225.0,
        "wave_period": 6.5,
        "wave_peak_period": 7.1,
        "wind_wave_height": 0.4,
        "wind_wave_direction": 200.0,
        "wind_wave_period": 3.0,
        "wind_wave_peak_period": 3.4,
        "swell_wave_height": 1.0,
        "swell_wave_direction": 135.0,
        "swell_wave_period": 8.0,
        "swell_wave_peak_period": 9.0,
        "secondary_swell_wave_height": 0.3,
        "secondary_swell_wave_direction": 90.0,
        "secondary_swell_wave_period": 11.0,
        "tertiary_swell_wave_height": None,
        "tertiary_swell_wave_direction": None,
        "tertiary_swell_wave_period": None,
        "sea_level_height_msl": 0.15,
        "sea_surface_temperature": 29.5,
        "ocean_current_velocity": 1.8,
        "ocean_current_direction": 270.0,
    }
    current.update(overrides)
    return {
        "latitude": 30.375,
        "longitude": -86.5,
        "timezone": "America/Chicago",
        "current": current,
    }


@pytest.fixture
def geocoder_destin():
    return FakeProvider(
        {
            "/v1/search": {
                "results": [
                    geocoding_result("Destin", "Florida", "United States", 30.39353, -86.49578, ["32540", "32541"]),
                ]
            }
        }
    )
