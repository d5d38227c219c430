"""Tests for summary metrics"""

import pytest

from skysep.metrics.calculator import MetricsCalculator
from skysep.schemas.flight_schemas import AnalysisSummary, Conflict
from skysep.trajectory.sampling import sample_flights
from skysep.trajectory.segments import build_flight_from_raw


class TestCalculateSummary:
    """Test run summary counts"""

    def test_no_flights(self):
        summary = MetricsCalculator().calculate_summary([], [], [], [])
        assert summary == AnalysisSummary()
        assert summary.to_dict() == {
            "flights": 0, "segments": 0, "samples": 0,
            "averageSegmentsPerFlight": 0, "averageSamplesPerFlight": 0,
            "conflicts": 0, "conflictSamples": 0
        }

    def test_counts_and_averages(self, raw_flight_factory):
        flights = [
            build_flight_from_raw(raw_flight_factory("AC1", route="45.0N/75.0W 46.0N/74.0W 47.0N/73.0W")),
            build_flight_from_raw(raw_flight_factory("AC2", route="45.0N/75.0W")),
        ]
        samples = sample_flights(flights, 60)
        summary = MetricsCalculator().calculate_summary(flights, samples, [], [])

        assert summary.flights == 2
        assert summary.segments == 2
        assert summary.samples == len(samples)
        assert summary.average_segments_per_flight == pytest.approx(1.0)
        assert summary.average_samples_per_flight == pytest.approx(len(samples) / 2)
        assert isinstance(summary.segments, int)


class TestSeparationStats:
    """Test separation statistics"""

    def test_no_conflicts(self):
        stats = MetricsCalculator().calculate_separation_stats([])
        assert stats["min_horizontal_nm"] is None
        assert stats["avg_duration_sec"] == 0.0

    def test_stats(self):
        conflicts = [
            Conflict(id="A-B-0", flight_a="A", flight_b="B", t_start=0, t_end=120,
                     min_horizontal_nm=2.0, min_vertical_ft=500,
                     representative_lat=0.0, representative_lon=0.0, samples=[]),
            Conflict(id="C-D-1", flight_a="C", flight_b="D", t_start=60, t_end=120,
                     min_horizontal_nm=4.0, min_vertical_ft=0,
                     representative_lat=0.0, representative_lon=0.0, samples=[]),
        ]
        stats = MetricsCalculator().calculate_separation_stats(conflicts)
        assert stats["min_horizontal_nm"] == 2.0
        assert stats["avg_min_horizontal_nm"] == pytest.approx(3.0)
        assert stats["min_vertical_ft"] == 0.0
        assert stats["avg_duration_sec"] == pytest.approx(90.0)
