"""Discretize flight segments into step-aligned trajectory points"""

import math
from typing import List, Tuple

from ..schemas.flight_schemas import (
    DEFAULT_COARSE_STEP_SEC, Flight, Segment, TrajectoryPoint
)


def interpolate_segment(segment: Segment, target_time: float) -> Tuple[float, float]:
    """Linear lat/lon interpolation along a segment, clamped to its endpoints"""
    if segment.t_end <= segment.t_start:
        return segment.from_point.lat, segment.from_point.lon

    alpha = (target_time - segment.t_start) / (segment.t_end - segment.t_start)
    alpha = min(max(alpha, 0.0), 1.0)

    lat = segment.from_point.lat + (segment.to_point.lat - segment.from_point.lat) * alpha
    lon = segment.from_point.lon + (segment.to_point.lon - segment.from_point.lon) * alpha
    return lat, lon


def sample_segment(flight_id: str, segment: Segment, step_sec: int) -> List[TrajectoryPoint]:
    """Emit one point per multiple of ``step_sec`` inside ``[t_start, t_end]``"""
    if step_sec <= 0:
        raise ValueError(f"Sampling step must be positive, got {step_sec}")

    if segment.t_end <= segment.t_start:
        return []

    samples = []
    bucket_start = math.ceil(segment.t_start / step_sec)
    bucket_end = math.floor(segment.t_end / step_sec)

    for bucket in range(bucket_start, bucket_end + 1):
        t_sec = bucket * step_sec
        lat, lon = interpolate_segment(segment, t_sec)
        samples.append(TrajectoryPoint(
            flight_id=flight_id,
            t_sec=t_sec,
            lat=lat,
            lon=lon,
            alt_ft=segment.altitude_ft,
            segment_index=segment.index
        ))

    return samples


def sample_flight(flight: Flight, step_sec: int = DEFAULT_COARSE_STEP_SEC) -> List[TrajectoryPoint]:
    points = []
    for segment in flight.segments:
        points.extend(sample_segment(flight.id, segment, step_sec))
    return points


def sample_flights(flights: List[Flight],
                   step_sec: int = DEFAULT_COARSE_STEP_SEC) -> List[TrajectoryPoint]:
    points = []
    for flight in flights:
        points.extend(sample_flight(flight, step_sec))
    return points
