"""NOAA weather and Open-Meteo marine services behind an MCP tool server."""

__version__ = "1.0.0"
