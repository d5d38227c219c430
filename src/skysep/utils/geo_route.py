"""Great-circle geometry utilities for separation checks"""

import math

from ..schemas.flight_schemas import Waypoint


EARTH_RADIUS_KM = 6371.0
KM_PER_NM = 1.852


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def haversine_km(a: Waypoint, b: Waypoint) -> float:
    """Calculate great circle distance between two points in kilometres"""
    d_lat = to_radians(b.lat - a.lat)
    d_lon = to_radians(b.lon - a.lon)

    lat1 = to_radians(a.lat)
    lat2 = to_radians(b.lat)

    sin_lat = math.sin(d_lat / 2)
    sin_lon = math.sin(d_lon / 2)

    h = sin_lat * sin_lat + math.cos(lat1) * math.cos(lat2) * sin_lon * sin_lon
    # Rounding can push h just outside [0, 1] for antipodal points
    h = min(max(h, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def haversine_nm(a: Waypoint, b: Waypoint) -> float:
    """Calculate great circle distance between two points in nautical miles"""
    return km_to_nm(haversine_km(a, b))


def horizontal_separation_nm(a: Waypoint, b: Waypoint) -> float:
    return haversine_nm(a, b)


def vertical_separation_ft(alt_ft_a: float, alt_ft_b: float) -> float:
    return abs(alt_ft_a - alt_ft_b)


def km_to_nm(km: float) -> float:
    return km / KM_PER_NM


def nm_to_km(nm: float) -> float:
    return nm * KM_PER_NM


def great_circle_bearing(a: Waypoint, b: Waypoint) -> float:
    """Calculate initial bearing from point a to point b in degrees"""
    lat1_rad = to_radians(a.lat)
    lat2_rad = to_radians(b.lat)
    dlon = to_radians(b.lon - a.lon)

    y = math.sin(dlon) * math.cos(lat2_rad)
    x = (math.cos(lat1_rad) * math.sin(lat2_rad) -
         math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon))

    bearing = math.degrees(math.atan2(y, x))

    # Normalize to 0-360 degrees
    return (bearing + 360) % 360
