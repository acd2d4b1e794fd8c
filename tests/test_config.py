import os
from unittest.mock import patch

import httpx
import pytest

from weather_mcp.clients import geocoding_client, marine_client, noaa_client
from weather_mcp.config import Settings


class TestSettings:
    def test_defaults(self):
        """Default endpoints point at the public APIs."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.noaa_base_url == "https://api.weather.gov/"
        assert settings.marine_base_url == "https://marine-api.open-meteo.com/"
        assert settings.geocoding_base_url == "https://geocoding-api.open-meteo.com/"
        assert settings.http_timeout == 15.0
        assert settings.log_level == "INFO"

    def test_env_override(self):
        """Test partial override from environment."""
        env = {"WEATHER_MCP_HTTP_TIMEOUT": "2.5", "WEATHER_MCP_NOAA_BASE_URL": "http://noaa.test/"}
        with patch.dict(os.environ, env):
            settings = Settings(_env_file=None)
        assert settings.http_timeout == 2.5
        assert settings.noaa_base_url == "http://noaa.test/"
        # Others remain default
        assert settings.marine_base_url == "https://marine-api.open-meteo.com/"


@pytest.mark.asyncio
class TestClients:
    async def test_noaa_client_sends_identifying_headers(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        settings = Settings(_env_file=None, user_agent="(test, test@example.com)")
        async with noaa_client(settings, transport=httpx.MockTransport(handler)) as client:
            await client.get("points/1.0000,2.0000")

        assert str(seen[0].url) == "https://api.weather.gov/points/1.0000,2.0000"
        assert seen[0].headers["User-Agent"] == "(test, test@example.com)"
        assert seen[0].headers["Accept"] == "application/geo+json"

    async def test_base_urls_and_timeout(self):
        settings = Settings(_env_file=None, http_timeout=3.0)
        async with marine_client(settings) as marine, geocoding_client(settings) as geo:
            assert str(marine.base_url) == "https://marine-api.open-meteo.com/"
            assert str(geo.base_url) == "https://geocoding-api.open-meteo.com/"
            assert marine.timeout.read == 3.0
