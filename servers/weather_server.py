"""
Weather MCP server

Stdio tool server backed by the Meteostat API on RapidAPI. Launch it through
the chat client:

    toolchat servers/weather_server.py

The client forwards METEOSTAT_RAPID_API_KEY into this process's environment.
"""
import json
import os
from typing import Any, Dict

import httpx
from mcp.server.fastmcp import FastMCP

METEOSTAT_HOST = "meteostat.p.rapidapi.com"
METEOSTAT_URL = f"https://{METEOSTAT_HOST}"
REQUEST_TIMEOUT = 30.0

# Create an MCP server for weather data
mcp = FastMCP("WeatherServer")


async def _meteostat_get(path: str, params: Dict[str, Any]) -> str:
    api_key = os.environ.get("METEOSTAT_RAPID_API_KEY", "")
    if not api_key:
        return "Error: METEOSTAT_RAPID_API_KEY is not set for the weather server"

    headers = {"x-rapidapi-key": api_key, "x-rapidapi-host": METEOSTAT_HOST}

    try:
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
            response = await client.get(f"{METEOSTAT_URL}{path}", params=params, headers=headers)
            response.raise_for_status()
    except httpx.HTTPError as e:
        return f"Error: Meteostat request failed: {str(e)}"

    return json.dumps(response.json().get("data", []), indent=2)


@mcp.tool()
async def get_weather_stations(latitude: float, longitude: float, limit: int = 5) -> str:
    """
    Find the weather stations closest to a location.

    Args:
        latitude: Latitude of the location
        longitude: Longitude of the location
        limit: Maximum number of stations to return

    Returns:
        JSON list of stations with their ids, names and distances
    """
    return await _meteostat_get(
        "/stations/nearby", {"lat": latitude, "lon": longitude, "limit": limit}
    )


@mcp.tool()
async def get_daily_weather(station: str, start: str, end: str) -> str:
    """
    Daily weather observations recorded by a station.

    Args:
        station: Meteostat station id (see get_weather_stations)
        start: First day, formatted YYYY-MM-DD
        end: Last day, formatted YYYY-MM-DD

    Returns:
        JSON list of daily records (temperatures, precipitation, wind)
    """
    return await _meteostat_get(
        "/stations/daily", {"station": station, "start": start, "end": end}
    )


if __name__ == "__main__":
    mcp.run()
