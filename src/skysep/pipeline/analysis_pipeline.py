"""Trajectory Analysis Pipeline"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Import analysis components
from ..detection.detector import ConflictDetector
from ..exceptions import RouteParseError
from ..metrics.calculator import MetricsCalculator
from ..resolution.scorer import ResolutionScorer
from ..schemas.flight_schemas import (
    DEFAULT_FINE_STEP_SEC, HORIZONTAL_THRESHOLD_NM, VERTICAL_THRESHOLD_FT,
    AnalysisSummary, Conflict, ConflictSample, Flight, RejectedFlight,
    ResolutionCandidate
)
from ..schemas.raw_flight import RawFlight
from ..trajectory.sampling import sample_flights
from ..trajectory.segments import build_flight_from_raw
from ..visualization.map_data import build_trajectory_map_data
from ..visualization.models import TrajectoryMapData


ROUTE_ERROR_POLICIES = ('skip', 'fail')


@dataclass
class PipelineConfig:
    """Analysis pipeline configuration"""
    sample_step_seconds: int = DEFAULT_FINE_STEP_SEC
    horizontal_threshold_nm: float = float(HORIZONTAL_THRESHOLD_NM)
    vertical_threshold_ft: float = float(VERTICAL_THRESHOLD_FT)
    use_spatial_grid: bool = False
    route_error_policy: str = 'skip'  # skip: drop the flight and report it; fail: abort the run
    include_map_data: bool = True

    def __post_init__(self):
        if self.sample_step_seconds <= 0:
            raise ValueError("sample_step_seconds must be positive")
        if self.horizontal_threshold_nm <= 0 or self.vertical_threshold_ft <= 0:
            raise ValueError("Separation thresholds must be positive")
        if self.route_error_policy not in ROUTE_ERROR_POLICIES:
            raise ValueError(
                f"route_error_policy must be one of {ROUTE_ERROR_POLICIES}, "
                f"got {self.route_error_policy!r}"
            )


@dataclass
class AnalysisResult:
    """Complete result of one analysis run"""
    flights: List[Flight] = field(default_factory=list)
    conflicts: List[Conflict] = field(default_factory=list)
    conflict_samples: List[ConflictSample] = field(default_factory=list)
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)
    map_data: Optional[TrajectoryMapData] = None
    rejected_flights: List[RejectedFlight] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'flights': [f.to_dict() for f in self.flights],
            'conflicts': [c.to_dict() for c in self.conflicts],
            'conflictSamples': [s.to_dict() for s in self.conflict_samples],
            'summary': self.summary.to_dict(),
            'mapData': self.map_data.to_dict() if self.map_data else None,
            'rejectedFlights': [r.to_dict() for r in self.rejected_flights]
        }


@dataclass
class ScoreResult:
    """Ranked resolution candidates for a set of conflicts"""
    candidates: List[ResolutionCandidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'candidates': [c.to_dict() for c in self.candidates]}


class AnalysisPipeline:
    """Raw flights -> segments -> samples -> conflict samples -> conflicts.

    Holds configuration only; every run is independent and deterministic.
    """

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.logger = logging.getLogger(__name__)

        self.conflict_detector = ConflictDetector(
            horizontal_threshold_nm=self.config.horizontal_threshold_nm,
            vertical_threshold_ft=self.config.vertical_threshold_ft,
            use_spatial_grid=self.config.use_spatial_grid
        )
        self.resolution_scorer = ResolutionScorer(
            horizontal_threshold_nm=self.config.horizontal_threshold_nm,
            vertical_threshold_ft=self.config.vertical_threshold_ft
        )
        self.metrics_calculator = MetricsCalculator()

    def analyze(self, raw_flights: List[RawFlight]) -> AnalysisResult:
        """Run detection over a validated batch of raw flights"""
        self.logger.info(f"Analyzing {len(raw_flights)} flights "
                         f"(step={self.config.sample_step_seconds}s)")

        flights, rejected = self._build_flights(raw_flights)

        samples = sample_flights(flights, self.config.sample_step_seconds)
        self.logger.debug(f"Sampled {len(samples)} trajectory points")

        conflict_samples = self.conflict_detector.detect_conflict_samples(samples)
        conflicts = self.conflict_detector.build_conflicts(conflict_samples)

        summary = self.metrics_calculator.calculate_summary(
            flights, samples, conflict_samples, conflicts
        )

        map_data = None
        if self.config.include_map_data:
            map_data = build_trajectory_map_data(flights, conflicts, conflict_samples)

        stats = self.metrics_calculator.calculate_separation_stats(conflicts)
        self.logger.info(
            f"Analysis complete: {summary.flights} flights, {summary.segments} segments, "
            f"{summary.conflicts} conflicts ({summary.conflict_samples} samples), "
            f"{len(rejected)} rejected"
        )
        if conflicts:
            self.logger.info(f"Closest approach {stats['min_horizontal_nm']:.2f} nm, "
                             f"mean conflict duration {stats['avg_duration_sec']:.0f}s")

        return AnalysisResult(
            flights=flights,
            conflicts=conflicts,
            conflict_samples=conflict_samples,
            summary=summary,
            map_data=map_data,
            rejected_flights=rejected
        )

    def score_resolutions(self, conflicts: List[Conflict]) -> ScoreResult:
        """Rank delay/altitude/speed candidates across all conflicts"""
        candidates = self.resolution_scorer.score(conflicts)
        resolving = sum(1 for c in candidates if c.resolves_conflict)
        self.logger.info(f"Scored {len(candidates)} resolution candidates "
                         f"({resolving} resolving) for {len(conflicts)} conflicts")
        return ScoreResult(candidates=candidates)

    def _build_flights(self, raw_flights: List[RawFlight]):
        flights = []
        rejected = []

        for raw in raw_flights:
            try:
                flight = build_flight_from_raw(raw)
            except RouteParseError as e:
                if self.config.route_error_policy == 'fail':
                    raise
                self.logger.warning(f"Skipping flight {raw.acid}: {e}")
                rejected.append(RejectedFlight(flight_id=raw.acid, reason=str(e)))
                continue

            if not flight.segments:
                self.logger.debug(f"Flight {flight.id} has no geometry (inert)")
            flights.append(flight)

        return flights, rejected
