"""
Location resolution using the Open-Meteo Geocoding API.

A location string is either a US ZIP code (``12345`` or ``12345-6789``) or a
free-text place name. ZIP codes are looked up with several candidates so the
one whose postcode list confirms the code can be preferred; place names use
the single best match.

The resolver never raises: blank input, empty result lists, network errors
and malformed payloads are logged and reported as ``None``.
"""

import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from .fetch import fetch_json
from .models import GeoLocation

logger = logging.getLogger("weather-mcp.geocoding")

US_ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")

SEARCH_PATH = "v1/search"

# Postal lookups are ambiguous, so ask for several candidates
ZIP_CODE_CANDIDATES = 5


def is_zip_code(location: str) -> bool:
    return US_ZIP_CODE_PATTERN.match(location.strip()) is not None


def _candidates(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Result objects from a search response; anything else in the list is skipped."""
    results = data.get("results")
    if not isinstance(results, list):
        return []
    return [r for r in results if isinstance(r, dict)]


def _to_geo_location(result: Dict[str, Any]) -> GeoLocation:
    return GeoLocation(
        city=result.get("name"),
        state=result.get("admin1"),
        country=result.get("country"),
        latitude=float(result["latitude"]),
        longitude=float(result["longitude"]),
        timezone=result.get("timezone"),
    )


def select_zip_candidate(results: List[Dict[str, Any]], zip5: str) -> Dict[str, Any]:
    """
    Pick the candidate whose postcode list contains ``zip5``.

    Falls back to the first candidate when none of them confirms the code, so
    a postal lookup never fails just because the provider omitted postcodes.
    """
    for result in results:
        postcodes = result.get("postcodes")
        if isinstance(postcodes, list) and zip5 in postcodes:
            return result
    return results[0]


class GeocodingResolver:
    """Resolves place names and ZIP codes to a ``GeoLocation``."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def resolve(self, location: str) -> Optional[GeoLocation]:
        """
        Resolve a city name or US ZIP code to coordinates.

        Args:
            location: Free-text place name (e.g. "Destin") or ZIP code (e.g. "32541")

        Returns:
            The resolved location, or None if it could not be geocoded
        """
        location = (location or "").strip()
        if not location:
            logger.warning("Empty location provided for geocoding")
            return None

        # ZIP codes need the multi-candidate lookup
        if is_zip_code(location):
            return await self.resolve_zip_code(location)

        data = await fetch_json(
            self._client,
            SEARCH_PATH,
            operation="geocode",
            params={"name": location, "count": 1, "language": "en", "format": "json"},
        )
        if data is None:
            return None

        results = _candidates(data)
        if not results:
            logger.warning("No geocoding results found for location: %s", location)
            return None

        return self._build(results[0], location)

    async def resolve_zip_code(self, zip_code: str) -> Optional[GeoLocation]:
        """
        Resolve a US ZIP code, ignoring any +4 suffix.

        Args:
            zip_code: ``12345`` or ``12345-6789``

        Returns:
            The candidate confirming the ZIP code, else the first candidate,
            or None when the provider returned nothing
        """
        zip_code = (zip_code or "").strip()
        if not zip_code:
            logger.warning("Empty zip code provided for geocoding")
            return None

        # Only the five-digit part is searched
        zip5 = zip_code.split("-")[0]
        data = await fetch_json(
            self._client,
            SEARCH_PATH,
            operation="geocode_zip",
            params={
                "name": zip5,
                "count": ZIP_CODE_CANDIDATES,
                "language": "en",
                "format": "json",
            },
        )
        if data is None:
            return None

        results = _candidates(data)
        if not results:
            logger.warning("No geocoding results found for zip code: %s", zip_code)
            return None

        # Prefer the candidate that lists the ZIP code among its postcodes
        return self._build(select_zip_candidate(results, zip5), zip_code)

    @staticmethod
    def _build(result: Dict[str, Any], query: str) -> Optional[GeoLocation]:
        try:
            return _to_geo_location(result)
        except (AttributeError, KeyError, OverflowError, TypeError, ValueError):
            logger.exception("Unexpected geocoding response for location: %s", query)
            return None
