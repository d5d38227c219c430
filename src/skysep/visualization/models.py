"""Data models for the map/summary display bundle."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple


Coordinate = Tuple[float, float]  # (lon, lat)


@dataclass
class TrajectoryMapPath:
    """Polyline of one flight's route"""
    id: str
    callsign: str
    passengers: int
    is_cargo: bool
    coordinates: List[Coordinate] = field(default_factory=list)
    heading_deg: Optional[float] = None  # initial great-circle bearing of the first leg

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'callsign': self.callsign,
            'passengers': self.passengers,
            'isCargo': self.is_cargo,
            'coordinates': [list(c) for c in self.coordinates],
            'headingDeg': self.heading_deg
        }


@dataclass
class ConflictMarker:
    """Map marker for a conflict sample (or a whole conflict)"""
    id: str
    flights: Tuple[str, str]
    coordinate: Coordinate
    t_sec: float
    minute: int
    horizontal_nm: float
    vertical_ft: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'flights': list(self.flights),
            'coordinate': list(self.coordinate),
            'tSec': self.t_sec,
            'minute': self.minute,
            'horizontalNm': self.horizontal_nm,
            'verticalFt': self.vertical_ft
        }


@dataclass
class TimelineBucket:
    minute: int
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {'minute': self.minute, 'count': self.count}


@dataclass
class MapViewState:
    """Suggested viewport"""
    longitude: float
    latitude: float
    zoom: float
    pitch: float = 0.0
    bearing: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'longitude': self.longitude,
            'latitude': self.latitude,
            'zoom': self.zoom,
            'pitch': self.pitch,
            'bearing': self.bearing
        }


@dataclass
class TemporalExtent:
    min: float
    max: float

    def to_dict(self) -> Dict[str, Any]:
        return {'min': self.min, 'max': self.max}


@dataclass
class TrajectoryMapData:
    """Display bundle derived from flights and conflicts"""
    paths: List[TrajectoryMapPath] = field(default_factory=list)
    conflict_markers: List[ConflictMarker] = field(default_factory=list)
    timeline: List[TimelineBucket] = field(default_factory=list)
    timeline_max: int = 0
    view_state: Optional[MapViewState] = None
    temporal_extent: Optional[TemporalExtent] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'paths': [p.to_dict() for p in self.paths],
            'conflictMarkers': [m.to_dict() for m in self.conflict_markers],
            'timeline': [b.to_dict() for b in self.timeline],
            'timelineMax': self.timeline_max,
            'viewState': self.view_state.to_dict() if self.view_state else None,
            'temporalExtent': self.temporal_extent.to_dict() if self.temporal_extent else None
        }
