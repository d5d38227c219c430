"""Calculate analysis summary metrics"""

from collections import Counter
from typing import List

import numpy as np

from ..schemas.flight_schemas import (
    AnalysisSummary, Conflict, ConflictSample, Flight, TrajectoryPoint
)


class MetricsCalculator:
    """Derive the aggregate counts reported alongside an analysis run"""

    def calculate_summary(self, flights: List[Flight], samples: List[TrajectoryPoint],
                          conflict_samples: List[ConflictSample],
                          conflicts: List[Conflict]) -> AnalysisSummary:
        if not flights:
            return AnalysisSummary()

        segment_counts = [len(flight.segments) for flight in flights]
        samples_per_flight = Counter(point.flight_id for point in samples)
        sample_counts = [samples_per_flight.get(flight.id, 0) for flight in flights]

        return AnalysisSummary(
            flights=len(flights),
            segments=int(np.sum(segment_counts)),
            samples=len(samples),
            average_segments_per_flight=float(np.mean(segment_counts)),
            average_samples_per_flight=float(np.mean(sample_counts)),
            conflicts=len(conflicts),
            conflict_samples=len(conflict_samples)
        )

    def calculate_separation_stats(self, conflicts: List[Conflict]) -> dict:
        """Separation statistics across conflicts, for run logs and reports"""
        if not conflicts:
            return {
                'min_horizontal_nm': None,
                'avg_min_horizontal_nm': None,
                'min_vertical_ft': None,
                'avg_duration_sec': 0.0
            }

        horizontal = np.array([c.min_horizontal_nm for c in conflicts])
        vertical = np.array([c.min_vertical_ft for c in conflicts])
        durations = np.array([c.t_end - c.t_start for c in conflicts])

        return {
            'min_horizontal_nm': float(horizontal.min()),
            'avg_min_horizontal_nm': float(horizontal.mean()),
            'min_vertical_ft': float(vertical.min()),
            'avg_duration_sec': float(durations.mean())
        }
