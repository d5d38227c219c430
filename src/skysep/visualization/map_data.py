"""Project flights and conflicts into a display-ready map bundle"""

import math
from collections import Counter
from typing import List, Optional

from ..schemas.flight_schemas import Conflict, ConflictSample, Flight
from ..utils.geo_route import great_circle_bearing
from .config import DEFAULT_MAP_CONFIG, MapProjectionConfig
from .models import (
    ConflictMarker, MapViewState, TemporalExtent, TimelineBucket,
    TrajectoryMapData, TrajectoryMapPath
)


def build_trajectory_paths(flights: List[Flight]) -> List[TrajectoryMapPath]:
    paths = []
    for flight in flights:
        coordinates = []
        for index, segment in enumerate(flight.segments):
            if index == 0:
                coordinates.append((segment.from_point.lon, segment.from_point.lat))
            coordinates.append((segment.to_point.lon, segment.to_point.lat))

        heading_deg = None
        if flight.segments:
            first = flight.segments[0]
            heading_deg = great_circle_bearing(first.from_point, first.to_point)

        paths.append(TrajectoryMapPath(
            id=flight.id,
            callsign=flight.callsign,
            passengers=flight.passengers,
            is_cargo=flight.is_cargo,
            coordinates=coordinates,
            heading_deg=heading_deg
        ))
    return paths


def build_conflict_markers(conflicts: List[Conflict],
                           conflict_samples: List[ConflictSample]) -> List[ConflictMarker]:
    """One marker per sample; falls back to one per conflict when no samples are given"""
    if conflict_samples:
        return [
            ConflictMarker(
                id=f"{sample.flight_a}-{sample.flight_b}-{sample.t_sec}-{index}",
                flights=(sample.flight_a, sample.flight_b),
                coordinate=(sample.lon, sample.lat),
                t_sec=sample.t_sec,
                minute=math.floor(sample.t_sec / 60),
                horizontal_nm=sample.horizontal_nm,
                vertical_ft=sample.vertical_ft
            )
            for index, sample in enumerate(conflict_samples)
        ]

    return [
        ConflictMarker(
            id=conflict.id or f"conflict-{index}",
            flights=(conflict.flight_a, conflict.flight_b),
            coordinate=(conflict.representative_lon, conflict.representative_lat),
            t_sec=conflict.t_start,
            minute=math.floor(conflict.t_start / 60),
            horizontal_nm=conflict.min_horizontal_nm,
            vertical_ft=conflict.min_vertical_ft
        )
        for index, conflict in enumerate(conflicts)
    ]


def compute_timeline(markers: List[ConflictMarker]) -> List[TimelineBucket]:
    counts = Counter(marker.minute for marker in markers)
    return [TimelineBucket(minute=minute, count=count)
            for minute, count in sorted(counts.items())]


def compute_temporal_extent(markers: List[ConflictMarker]) -> Optional[TemporalExtent]:
    if not markers:
        return None
    times = [marker.t_sec for marker in markers]
    return TemporalExtent(min=min(times), max=max(times))


def compute_view_state(paths: List[TrajectoryMapPath], markers: List[ConflictMarker],
                       config: MapProjectionConfig = DEFAULT_MAP_CONFIG) -> MapViewState:
    """Centre on the bounding box of all coordinates and pick a zoom from its span"""
    coordinates = [c for path in paths for c in path.coordinates]
    coordinates.extend(marker.coordinate for marker in markers)

    if not coordinates:
        return MapViewState(
            longitude=config.default_longitude,
            latitude=config.default_latitude,
            zoom=config.default_zoom
        )

    lons = [lon for lon, _ in coordinates]
    lats = [lat for _, lat in coordinates]
    min_lon, max_lon = min(lons), max(lons)
    min_lat, max_lat = min(lats), max(lats)

    span = max(
        max(config.min_span_deg, max_lon - min_lon),
        max(config.min_span_deg, max_lat - min_lat)
    )

    zoom = config.max_zoom
    for threshold, band_zoom in config.zoom_bands:
        if span > threshold:
            zoom = band_zoom
            break

    return MapViewState(
        longitude=(min_lon + max_lon) / 2,
        latitude=(min_lat + max_lat) / 2,
        zoom=zoom
    )


def build_trajectory_map_data(flights: Optional[List[Flight]] = None,
                              conflicts: Optional[List[Conflict]] = None,
                              conflict_samples: Optional[List[ConflictSample]] = None,
                              config: MapProjectionConfig = DEFAULT_MAP_CONFIG) -> TrajectoryMapData:
    paths = build_trajectory_paths(flights or [])
    markers = build_conflict_markers(conflicts or [], conflict_samples or [])
    timeline = compute_timeline(markers)

    return TrajectoryMapData(
        paths=paths,
        conflict_markers=markers,
        timeline=timeline,
        timeline_max=max((bucket.count for bucket in timeline), default=0),
        view_state=compute_view_state(paths, markers, config),
        temporal_extent=compute_temporal_extent(markers)
    )
