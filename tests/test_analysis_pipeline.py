"""Tests for the end-to-end analysis pipeline"""

import json

import pytest

from skysep.exceptions import RouteParseError
from skysep.pipeline.analysis_pipeline import AnalysisPipeline, PipelineConfig


class TestPipelineConfig:
    """Test pipeline configuration validation"""

    def test_defaults(self):
        config = PipelineConfig()
        assert config.sample_step_seconds == 15
        assert config.horizontal_threshold_nm == 5.0
        assert config.vertical_threshold_ft == 2000.0
        assert config.use_spatial_grid is False
        assert config.route_error_policy == "skip"

    @pytest.mark.parametrize("kwargs", [
        {"sample_step_seconds": 0},
        {"horizontal_threshold_nm": 0},
        {"vertical_threshold_ft": -1},
        {"route_error_policy": "ignore"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            PipelineConfig(**kwargs)


class TestAnalyze:
    """Test analyze runs"""

    def test_empty_input(self):
        result = AnalysisPipeline().analyze([])
        data = result.to_dict()

        assert data["flights"] == []
        assert data["conflicts"] == []
        assert data["conflictSamples"] == []
        assert data["rejectedFlights"] == []
        assert data["summary"] == {
            "flights": 0, "segments": 0, "samples": 0,
            "averageSegmentsPerFlight": 0, "averageSamplesPerFlight": 0,
            "conflicts": 0, "conflictSamples": 0
        }

    def test_parallel_pair_at_coarse_step(self, crossing_pair):
        pipeline = AnalysisPipeline(PipelineConfig(sample_step_seconds=60))
        result = pipeline.analyze(crossing_pair)

        assert len(result.conflict_samples) == 1
        assert len(result.conflicts) == 1
        conflict = result.conflicts[0]
        assert conflict.id == "AAA1-BBB2-0"
        assert conflict.min_horizontal_nm == pytest.approx(2.0, abs=0.01)
        assert conflict.t_start == conflict.t_end == 120

        summary = result.summary
        assert summary.flights == 2
        assert summary.segments == 2
        assert summary.samples == 2
        assert summary.average_samples_per_flight == pytest.approx(1.0)
        assert summary.conflicts == 1
        assert summary.conflict_samples == 1

    def test_vertical_offset_pair(self, raw_flight_factory):
        flights = [
            raw_flight_factory("AAA1", route="0.0N/0.0E 0.0N/0.1E", altitude=30000,
                               departure_time=100),
            raw_flight_factory("BBB2", route="0.033333N/0.0E 0.033333N/0.1E", altitude=33000,
                               departure_time=100),
        ]
        result = AnalysisPipeline(PipelineConfig(sample_step_seconds=60)).analyze(flights)
        assert result.conflicts == []
        assert result.conflict_samples == []

    def test_head_on_pair(self, head_on_pair):
        result = AnalysisPipeline().analyze(head_on_pair)

        assert [c.id for c in result.conflicts] == ["ALF1-ZED9-0"]
        assert len(result.conflict_samples) == 2
        assert [f.id for f in result.flights] == ["ZED9", "ALF1"]

        markers = result.map_data.conflict_markers
        assert [m.t_sec for m in markers] == [360, 375]
        assert result.map_data.timeline_max == 2

    def test_bad_route_skipped_and_reported(self, raw_flight_factory, crossing_pair):
        batch = crossing_pair + [raw_flight_factory("BAD1", route="45.0X/75.0W 46.0N/74.0W")]
        result = AnalysisPipeline(PipelineConfig(sample_step_seconds=60)).analyze(batch)

        assert [f.id for f in result.flights] == ["AAA1", "BBB2"]
        assert len(result.rejected_flights) == 1
        assert result.rejected_flights[0].flight_id == "BAD1"
        assert "45.0X/75.0W" in result.rejected_flights[0].reason
        assert len(result.conflicts) == 1

    def test_bad_route_fails_run(self, raw_flight_factory, crossing_pair):
        batch = crossing_pair + [raw_flight_factory("BAD1", route="45.0X/75.0W 46.0N/74.0W")]
        pipeline = AnalysisPipeline(PipelineConfig(route_error_policy="fail"))
        with pytest.raises(RouteParseError):
            pipeline.analyze(batch)

    def test_inert_flight_counted(self, raw_flight_factory):
        result = AnalysisPipeline().analyze([raw_flight_factory(route="45.0N/75.0W")])
        assert result.summary.flights == 1
        assert result.summary.segments == 0
        assert result.summary.samples == 0
        assert result.flights[0].segments == []

    def test_spatial_grid_gives_same_result(self, head_on_pair, crossing_pair):
        batch = head_on_pair + crossing_pair
        full = AnalysisPipeline().analyze(batch)
        grid = AnalysisPipeline(PipelineConfig(use_spatial_grid=True)).analyze(batch)
        assert json.dumps(grid.to_dict()) == json.dumps(full.to_dict())

    def test_repeat_runs_are_identical(self, head_on_pair, crossing_pair):
        pipeline = AnalysisPipeline()
        batch = head_on_pair + crossing_pair
        first = json.dumps(pipeline.analyze(batch).to_dict())
        second = json.dumps(pipeline.analyze(batch).to_dict())
        assert first == second

    def test_map_data_optional(self, crossing_pair):
        result = AnalysisPipeline(PipelineConfig(include_map_data=False)).analyze(crossing_pair)
        assert result.map_data is None
        assert result.to_dict()["mapData"] is None


class TestScoreResolutions:
    """Test resolution scoring through the pipeline"""

    def test_head_on_candidates(self, head_on_pair):
        pipeline = AnalysisPipeline()
        result = pipeline.analyze(head_on_pair)
        scored = pipeline.score_resolutions(result.conflicts)

        kinds = [c.id.split("-")[-2] for c in scored.candidates]
        assert kinds == ["delay", "altitude", "speed"]
        assert [c.cost for c in scored.candidates] == [11.0, 11.25, 11.5]
        assert scored.candidates[0].flight_id == "ALF1"
        assert scored.candidates[1].flight_id == "ZED9"
        assert scored.to_dict()["candidates"][0]["conflictId"] == "ALF1-ZED9-0"

    def test_no_conflicts(self):
        assert AnalysisPipeline().score_resolutions([]).candidates == []
