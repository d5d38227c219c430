"""Tests for trajectory sampling"""

import pytest

from skysep.schemas.flight_schemas import Segment, Waypoint
from skysep.trajectory.sampling import (
    interpolate_segment, sample_flight, sample_flights, sample_segment
)
from skysep.trajectory.segments import build_flight_from_raw


def make_segment(t_start=10.0, t_end=130.0, index=0):
    return Segment(
        flight_id="AC1",
        index=index,
        from_point=Waypoint(0.0, 0.0),
        to_point=Waypoint(1.0, 2.0),
        t_start=t_start,
        t_end=t_end,
        altitude_ft=30000,
        distance_nm=120.0
    )


class TestInterpolation:
    """Test linear interpolation along a segment"""

    def test_midpoint(self):
        segment = make_segment(0.0, 100.0)
        assert interpolate_segment(segment, 50.0) == pytest.approx((0.5, 1.0))

    def test_clamped_before_and_after(self):
        segment = make_segment(0.0, 100.0)
        assert interpolate_segment(segment, -20.0) == (0.0, 0.0)
        assert interpolate_segment(segment, 500.0) == (1.0, 2.0)

    def test_zero_duration_returns_start(self):
        segment = make_segment(50.0, 50.0)
        assert interpolate_segment(segment, 50.0) == (0.0, 0.0)


class TestSampleSegment:
    """Test step-aligned sampling"""

    def test_ticks_are_step_multiples_within_window(self):
        points = sample_segment("AC1", make_segment(10.0, 130.0), 60)
        assert [p.t_sec for p in points] == [60, 120]
        assert points[0].lat == pytest.approx(50.0 / 120.0)
        assert points[0].lon == pytest.approx(2 * 50.0 / 120.0)
        assert all(p.alt_ft == 30000 for p in points)
        assert all(p.flight_id == "AC1" for p in points)

    def test_endpoints_on_ticks_are_inclusive(self):
        points = sample_segment("AC1", make_segment(0.0, 120.0), 60)
        assert [p.t_sec for p in points] == [0, 60, 120]
        assert (points[-1].lat, points[-1].lon) == pytest.approx((1.0, 2.0))

    def test_window_between_ticks_is_empty(self):
        assert sample_segment("AC1", make_segment(61.0, 119.0), 60) == []

    def test_zero_duration_segment_is_empty(self):
        assert sample_segment("AC1", make_segment(60.0, 60.0), 60) == []

    @pytest.mark.parametrize("step", [0, -15])
    def test_non_positive_step_raises(self, step):
        with pytest.raises(ValueError):
            sample_segment("AC1", make_segment(), step)

    def test_segment_index_carried(self):
        points = sample_segment("AC1", make_segment(index=3), 60)
        assert {p.segment_index for p in points} == {3}


class TestSampleFlights:
    """Test whole-flight sampling"""

    def test_flight_samples_in_segment_order(self, raw_flight_factory):
        raw = raw_flight_factory(route="45.0N/75.0W 46.0N/74.0W 47.0N/73.0W")
        flight = build_flight_from_raw(raw)
        points = sample_flight(flight, 60)

        times = [p.t_sec for p in points]
        assert times == sorted(times)
        assert all(t % 60 == 0 for t in times)
        assert {p.segment_index for p in points} == {0, 1}

    def test_inert_flight_has_no_samples(self, raw_flight_factory):
        flight = build_flight_from_raw(raw_flight_factory(route="45.0N/75.0W"))
        assert sample_flight(flight, 15) == []

    def test_flights_concatenated_in_input_order(self, crossing_pair):
        flights = [build_flight_from_raw(raw) for raw in crossing_pair]
        points = sample_flights(flights, 15)
        assert [p.flight_id for p in points] == ["AAA1"] * 3 + ["BBB2"] * 3
        assert [p.t_sec for p in points[:3]] == [105, 120, 135]
