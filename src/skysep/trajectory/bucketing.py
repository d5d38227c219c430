"""Spatio-temporal grid bucketing of trajectory points"""

import math
from typing import Dict, Iterator, List, Optional, Tuple

from ..schemas.flight_schemas import CELL_SIZE_DEG, TrajectoryPoint
from ..utils.geo_route import EARTH_RADIUS_KM, KM_PER_NM


BucketKey = Tuple[float, int, int]  # (t_sec, lat cell, lon cell)

LON_CELLS = int(round(360 / CELL_SIZE_DEG))

# Great-circle arc length of one degree
NM_PER_DEG = math.radians(1.0) * EARTH_RADIUS_KM / KM_PER_NM

# Relative slack so float round-off never shrinks a reach
REACH_SLACK = 1e-9


def get_cell_index(value: float) -> int:
    return math.floor(value / CELL_SIZE_DEG)


def normalize_lon_cell(lon_index: int) -> int:
    """Wrap a longitude cell index so that cells on either side of the antimeridian touch"""
    half = LON_CELLS // 2
    return ((lon_index + half) % LON_CELLS) - half


def get_cell(lat: float, lon: float) -> Tuple[int, int]:
    return get_cell_index(lat), normalize_lon_cell(get_cell_index(lon))


def get_bucket_key(point: TrajectoryPoint) -> BucketKey:
    lat_index, lon_index = get_cell(point.lat, point.lon)
    return point.t_sec, lat_index, lon_index


def build_bucket_map(points: List[TrajectoryPoint]) -> Dict[BucketKey, List[TrajectoryPoint]]:
    """Group points by (time tick, grid cell), preserving input order within a bucket"""
    bucket_map: Dict[BucketKey, List[TrajectoryPoint]] = {}
    for point in points:
        bucket_map.setdefault(get_bucket_key(point), []).append(point)
    return bucket_map


def neighbor_cells(cell: Tuple[int, int], lat_reach: int = 1,
                   lon_reach: int = 1) -> Iterator[Tuple[int, int]]:
    """Yield the block of cells within the given reach of ``cell`` (longitude wraps)"""
    lat_index, lon_index = cell
    for d_lat in range(-lat_reach, lat_reach + 1):
        for d_lon in range(-lon_reach, lon_reach + 1):
            yield lat_index + d_lat, normalize_lon_cell(lon_index + d_lon)


def cell_reach(cell: Tuple[int, int], threshold_nm: float) -> Optional[Tuple[int, int]]:
    """
    Number of cells to search either side of ``cell`` for points within ``threshold_nm``

    Returns ``(lat_reach, lon_reach)``, or None when the longitude reach
    wraps the whole globe (near the poles or for very large thresholds),
    in which case every point must be compared.

    Latitude: a great-circle arc of d nm never spans more than d / 60.04
    degrees of latitude. Longitude: with both latitudes at most ``edge``
    from the equator, ``sin(d/2R) >= cos(edge) * sin(dlon/2)``, so
    ``dlon <= 2 * asin(sin(d/2R) / cos(edge))``.
    """
    lat_index, _ = cell
    threshold_nm = threshold_nm * (1 + REACH_SLACK)

    lat_reach = max(1, math.ceil(threshold_nm / (NM_PER_DEG * CELL_SIZE_DEG)))

    lat_low = (lat_index - lat_reach) * CELL_SIZE_DEG
    lat_high = (lat_index + 1 + lat_reach) * CELL_SIZE_DEG
    edge_lat = min(90.0, max(abs(lat_low), abs(lat_high)))
    cos_edge = math.cos(math.radians(edge_lat))

    half_arc = threshold_nm * KM_PER_NM / EARTH_RADIUS_KM / 2
    if half_arc >= math.pi / 2:
        return None

    ratio = math.sin(half_arc) / cos_edge if cos_edge > 0 else math.inf
    if ratio >= 1:
        return None

    dlon_deg = math.degrees(2 * math.asin(ratio))
    lon_reach = max(1, math.ceil(dlon_deg / CELL_SIZE_DEG))
    if 2 * lon_reach + 1 >= LON_CELLS:
        return None

    return lat_reach, lon_reach
