"""Domain schemas for flight trajectories, conflicts and resolutions"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any


# Separation minima
HORIZONTAL_THRESHOLD_NM = 5
VERTICAL_THRESHOLD_FT = 2000

# Sampling steps (seconds)
DEFAULT_COARSE_STEP_SEC = 60
DEFAULT_FINE_STEP_SEC = 15

# Spatial grid cell size for bucketing (degrees)
CELL_SIZE_DEG = 1


@dataclass(frozen=True)
class Waypoint:
    """Geographic point in decimal degrees"""
    lat: float
    lon: float

    def to_dict(self) -> Dict[str, Any]:
        return {'lat': self.lat, 'lon': self.lon}


@dataclass(frozen=True)
class Segment:
    """One great-circle leg between two consecutive route waypoints"""
    flight_id: str
    index: int
    from_point: Waypoint
    to_point: Waypoint
    t_start: float  # epoch seconds
    t_end: float    # epoch seconds, >= t_start
    altitude_ft: float
    distance_nm: float

    @property
    def duration_sec(self) -> float:
        return self.t_end - self.t_start

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flightId': self.flight_id,
            'index': self.index,
            'from': self.from_point.to_dict(),
            'to': self.to_point.to_dict(),
            'tStart': self.t_start,
            'tEnd': self.t_end,
            'altitudeFt': self.altitude_ft,
            'distanceNm': self.distance_nm
        }


@dataclass(frozen=True)
class Flight:
    """Flight built from a validated raw record"""
    id: str
    callsign: str
    plane_type: str
    departure_airport: str
    arrival_airport: str
    departure_time: int
    cruise_speed_kt: float
    cruise_altitude_ft: int
    passengers: int
    is_cargo: bool
    segments: List[Segment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'callsign': self.callsign,
            'planeType': self.plane_type,
            'departureAirport': self.departure_airport,
            'arrivalAirport': self.arrival_airport,
            'departureTime': self.departure_time,
            'cruiseSpeedKt': self.cruise_speed_kt,
            'cruiseAltitudeFt': self.cruise_altitude_ft,
            'passengers': self.passengers,
            'isCargo': self.is_cargo,
            'segments': [segment.to_dict() for segment in self.segments]
        }


@dataclass(frozen=True)
class TrajectoryPoint:
    """Sampled flight position at a step-aligned tick"""
    flight_id: str
    t_sec: float
    lat: float
    lon: float
    alt_ft: float
    segment_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flightId': self.flight_id,
            'tSec': self.t_sec,
            'lat': self.lat,
            'lon': self.lon,
            'altFt': self.alt_ft,
            'segmentIndex': self.segment_index
        }


@dataclass(frozen=True)
class ConflictSample:
    """Close approach between two different flights at one sampled tick.

    ``flight_a < flight_b`` lexicographically; ``alt_ft_a``/``alt_ft_b``
    follow that ordering.
    """
    flight_a: str
    flight_b: str
    t_sec: float
    lat: float  # midpoint
    lon: float  # midpoint
    alt_ft_a: float
    alt_ft_b: float
    horizontal_nm: float
    vertical_ft: float

    @property
    def pair_key(self) -> str:
        return f"{self.flight_a}:{self.flight_b}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flightA': self.flight_a,
            'flightB': self.flight_b,
            'tSec': self.t_sec,
            'lat': self.lat,
            'lon': self.lon,
            'altFtA': self.alt_ft_a,
            'altFtB': self.alt_ft_b,
            'horizontalNm': self.horizontal_nm,
            'verticalFt': self.vertical_ft
        }


@dataclass(frozen=True)
class Conflict:
    """All conflict samples of one flight pair, aggregated over time"""
    id: str
    flight_a: str
    flight_b: str
    t_start: float
    t_end: float
    min_horizontal_nm: float
    min_vertical_ft: float
    representative_lat: float
    representative_lon: float
    samples: List[ConflictSample] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'flightA': self.flight_a,
            'flightB': self.flight_b,
            'tStart': self.t_start,
            'tEnd': self.t_end,
            'minHorizontalNm': self.min_horizontal_nm,
            'minVerticalFt': self.min_vertical_ft,
            'representativeLat': self.representative_lat,
            'representativeLon': self.representative_lon,
            'samples': [sample.to_dict() for sample in self.samples]
        }


class CandidateStatus(Enum):
    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"  # reserved, not produced by the scorer


@dataclass(frozen=True)
class ResolutionCandidate:
    """Single-variable adjustment to one flight of a conflict pair"""
    id: str
    conflict_id: str
    flight_a: str
    flight_b: str
    flight_id: str  # the adjusted flight
    delta_time_sec: int
    delta_altitude_ft: int
    delta_speed_kt: int
    estimated_horizontal_gain_nm: float
    estimated_vertical_gain_ft: float
    cost: float
    resolves_conflict: bool
    status: CandidateStatus = CandidateStatus.PENDING
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'conflictId': self.conflict_id,
            'flights': [self.flight_a, self.flight_b],
            'flightId': self.flight_id,
            'deltaTimeSec': self.delta_time_sec,
            'deltaAltitudeFt': self.delta_altitude_ft,
            'deltaSpeedKt': self.delta_speed_kt,
            'estimatedHorizontalGainNm': self.estimated_horizontal_gain_nm,
            'estimatedVerticalGainFt': self.estimated_vertical_gain_ft,
            'cost': self.cost,
            'resolvesConflict': self.resolves_conflict,
            'status': self.status.value,
            'notes': self.notes
        }


@dataclass(frozen=True)
class AnalysisSummary:
    """Aggregate counts for one analysis run"""
    flights: int = 0
    segments: int = 0
    samples: int = 0
    average_segments_per_flight: float = 0.0
    average_samples_per_flight: float = 0.0
    conflicts: int = 0
    conflict_samples: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'flights': self.flights,
            'segments': self.segments,
            'samples': self.samples,
            'averageSegmentsPerFlight': self.average_segments_per_flight,
            'averageSamplesPerFlight': self.average_samples_per_flight,
            'conflicts': self.conflicts,
            'conflictSamples': self.conflict_samples
        }


@dataclass(frozen=True)
class RejectedFlight:
    """Flight left out of an analysis run because its route did not parse"""
    flight_id: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {'flightId': self.flight_id, 'reason': self.reason}
