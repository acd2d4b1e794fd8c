"""
Unit and direction conversions shared by the NOAA and marine services.

Every converter accepts ``None`` and returns ``None`` so that an absent
upstream measurement stays absent in the output instead of becoming zero.
"""

import math
from typing import Optional

# 16-point compass rose, clockwise from north in 22.5 degree steps
CARDINAL_DIRECTIONS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

METERS_PER_SECOND_TO_MPH = 2.237
PASCALS_TO_INHG = 0.00029530
METERS_TO_MILES = 0.000621371
METERS_TO_FEET = 3.28084
KMH_TO_KNOTS = 0.539957


def celsius_to_fahrenheit(celsius: Optional[float]) -> Optional[float]:
    if celsius is None:
        return None
    return celsius * 9 / 5 + 32


def meters_per_second_to_mph(meters_per_second: Optional[float]) -> Optional[float]:
    if meters_per_second is None:
        return None
    return meters_per_second * METERS_PER_SECOND_TO_MPH


def pascals_to_inhg(pascals: Optional[float]) -> Optional[float]:
    if pascals is None:
        return None
    return pascals * PASCALS_TO_INHG


def meters_to_miles(meters: Optional[float]) -> Optional[float]:
    if meters is None:
        return None
    return meters * METERS_TO_MILES


def meters_to_feet(meters: Optional[float]) -> Optional[float]:
    if meters is None:
        return None
    return meters * METERS_TO_FEET


def kmh_to_knots(kmh: Optional[float]) -> Optional[float]:
    if kmh is None:
        return None
    return kmh * KMH_TO_KNOTS


def degrees_to_cardinal(degrees: Optional[float]) -> Optional[str]:
    """
    Map a bearing in degrees onto the 16-point compass rose.

    The index is ``round(degrees / 22.5) mod 16``, so 0 and 360 both map to
    "N". Python's ``%`` keeps negative bearings on the rose as well.

    Args:
        degrees: Bearing in degrees, or None when the provider sent no value

    Returns:
        Compass point such as "NNE", or None when degrees is None or not finite
    """
    # JSON decoders accept Infinity and NaN, which have no bearing
    if degrees is None or not math.isfinite(degrees):
        return None
    index = int(round(degrees / 22.5)) % 16
    return CARDINAL_DIRECTIONS[index]
