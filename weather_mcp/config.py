"""Runtime configuration, read from ``WEATHER_MCP_*`` environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Upstream endpoints and HTTP behaviour for the weather services."""

    noaa_base_url: str = Field(
        default="https://api.weather.gov/", description="NOAA / NWS API root"
    )
    marine_base_url: str = Field(
        default="https://marine-api.open-meteo.com/", description="Open-Meteo Marine API root"
    )
    geocoding_base_url: str = Field(
        default="https://geocoding-api.open-meteo.com/",
        description="Open-Meteo Geocoding API root",
    )

    # NOAA rejects requests without an identifying User-Agent
    user_agent: str = Field(default="(WeatherAI MCP Server, weather@example.com)")
    http_timeout: float = Field(default=15.0, description="Per-request timeout in seconds")

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_MCP_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
