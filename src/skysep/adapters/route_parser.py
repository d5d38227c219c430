"""Route string parser for lat/lon waypoint tokens such as ``45.0N/75.0W``"""

import re
from typing import List

from ..exceptions import RouteParseError
from ..schemas.flight_schemas import Waypoint


LAT_PATTERN = re.compile(r'^([0-9]+(?:\.[0-9]+)?)([NS])$', re.IGNORECASE)
LON_PATTERN = re.compile(r'^([0-9]+(?:\.[0-9]+)?)([EW])$', re.IGNORECASE)


def parse_coord_token(token: str) -> Waypoint:
    """
    Parse a single ``<lat><N|S>/<lon><E|W>`` token

    Raises:
        RouteParseError: if the token is empty, lacks exactly one ``/``,
            or either half is not a number followed by a hemisphere letter
    """
    trimmed = token.strip()
    if not trimmed:
        raise RouteParseError("Empty coordinate token", token)

    parts = trimmed.split('/')
    if len(parts) != 2:
        raise RouteParseError(f"Invalid waypoint token: {token}", token)

    lat_raw, lon_raw = parts
    lat_match = LAT_PATTERN.match(lat_raw)
    lon_match = LON_PATTERN.match(lon_raw)

    if not lat_match or not lon_match:
        raise RouteParseError(f"Invalid coordinate components: {token}", token)

    try:
        lat_value = float(lat_match.group(1))
        lon_value = float(lon_match.group(1))
    except ValueError:
        raise RouteParseError(f"Failed to parse numeric coordinate values: {token}", token)

    lat_sign = -1 if lat_match.group(2).upper() == 'S' else 1
    lon_sign = -1 if lon_match.group(2).upper() == 'W' else 1

    return Waypoint(lat=lat_value * lat_sign, lon=lon_value * lon_sign)


def parse_route_string(route: str) -> List[Waypoint]:
    """Parse a whitespace-separated route into ordered waypoints"""
    return [parse_coord_token(token) for token in route.split()]
