"""Loss-of-separation detection over sampled trajectories"""

import logging
from typing import Dict, Iterator, List, Tuple

from ..schemas.flight_schemas import (
    HORIZONTAL_THRESHOLD_NM, VERTICAL_THRESHOLD_FT,
    Conflict, ConflictSample, TrajectoryPoint, Waypoint
)
from ..trajectory.bucketing import cell_reach, get_cell, neighbor_cells
from ..utils.geo_route import horizontal_separation_nm, vertical_separation_ft


logger = logging.getLogger(__name__)


class ConflictDetector:
    """Time-bucketed pairwise conflict detection and per-pair aggregation.

    A conflict sample requires BOTH horizontal <= ``horizontal_threshold_nm``
    AND vertical <= ``vertical_threshold_ft`` at the same sampled tick.
    """

    def __init__(self, horizontal_threshold_nm: float = HORIZONTAL_THRESHOLD_NM,
                 vertical_threshold_ft: float = VERTICAL_THRESHOLD_FT,
                 use_spatial_grid: bool = False):
        self.horizontal_threshold_nm = horizontal_threshold_nm
        self.vertical_threshold_ft = vertical_threshold_ft
        self.use_spatial_grid = use_spatial_grid

    def detect_conflict_samples(self, points: List[TrajectoryPoint]) -> List[ConflictSample]:
        """Find every cross-flight point pair within both separation minima"""
        buckets = self._create_time_buckets(points)
        samples = []

        for bucket in buckets.values():
            if len(bucket) < 2:
                continue

            if self.use_spatial_grid:
                pairs = self._grid_pairs(bucket)
            else:
                pairs = self._all_pairs(bucket)

            for i, j in pairs:
                sample = self._check_pair(bucket[i], bucket[j])
                if sample is not None:
                    samples.append(sample)

        logger.debug(f"Scanned {len(buckets)} time buckets, found {len(samples)} conflict samples")
        return samples

    def build_conflicts(self, samples: List[ConflictSample]) -> List[Conflict]:
        """
        Aggregate conflict samples into one Conflict per flight pair

        Groups keep first-seen order; the representative sample is the one
        with the smallest horizontal separation, then smallest vertical,
        then earliest in time order.
        """
        if not samples:
            return []

        groups: Dict[Tuple[str, str], List[ConflictSample]] = {}
        for sample in samples:
            groups.setdefault((sample.flight_a, sample.flight_b), []).append(sample)

        conflicts = []
        for index, ((flight_a, flight_b), group) in enumerate(groups.items()):
            ordered_samples = sorted(group, key=lambda s: s.t_sec)

            min_horizontal = min(s.horizontal_nm for s in ordered_samples)
            min_vertical = min(s.vertical_ft for s in ordered_samples)

            best_sample = ordered_samples[0]
            for sample in ordered_samples[1:]:
                if sample.horizontal_nm < best_sample.horizontal_nm:
                    best_sample = sample
                elif (sample.horizontal_nm == best_sample.horizontal_nm and
                      sample.vertical_ft < best_sample.vertical_ft):
                    best_sample = sample

            conflicts.append(Conflict(
                id=f"{flight_a}-{flight_b}-{index}",
                flight_a=flight_a,
                flight_b=flight_b,
                t_start=ordered_samples[0].t_sec,
                t_end=ordered_samples[-1].t_sec,
                min_horizontal_nm=min_horizontal,
                min_vertical_ft=min_vertical,
                representative_lat=best_sample.lat,
                representative_lon=best_sample.lon,
                samples=ordered_samples
            ))

        return conflicts

    def _check_pair(self, a: TrajectoryPoint, b: TrajectoryPoint):
        if a.flight_id == b.flight_id:
            return None

        horizontal_nm = horizontal_separation_nm(
            Waypoint(a.lat, a.lon), Waypoint(b.lat, b.lon)
        )
        vertical_ft = vertical_separation_ft(a.alt_ft, b.alt_ft)

        if (horizontal_nm > self.horizontal_threshold_nm or
                vertical_ft > self.vertical_threshold_ft):
            return None

        if b.flight_id < a.flight_id:
            a, b = b, a

        return ConflictSample(
            flight_a=a.flight_id,
            flight_b=b.flight_id,
            t_sec=a.t_sec,
            lat=(a.lat + b.lat) / 2,
            lon=(a.lon + b.lon) / 2,
            alt_ft_a=a.alt_ft,
            alt_ft_b=b.alt_ft,
            horizontal_nm=horizontal_nm,
            vertical_ft=vertical_ft
        )

    @staticmethod
    def _create_time_buckets(points: List[TrajectoryPoint]) -> Dict[float, List[TrajectoryPoint]]:
        buckets: Dict[float, List[TrajectoryPoint]] = {}
        for point in points:
            buckets.setdefault(point.t_sec, []).append(point)
        return buckets

    @staticmethod
    def _all_pairs(bucket: List[TrajectoryPoint]) -> Iterator[Tuple[int, int]]:
        for i in range(len(bucket)):
            for j in range(i + 1, len(bucket)):
                yield i, j

    def _grid_pairs(self, bucket: List[TrajectoryPoint]) -> Iterator[Tuple[int, int]]:
        """Pairs restricted to points whose cells lie within the horizontal threshold.

        The search block grows with the threshold and with latitude; where it
        would wrap the globe every later point is a candidate. Yields pairs in
        the same order as ``_all_pairs``, minus the skipped ones.
        """
        cells = [get_cell(point.lat, point.lon) for point in bucket]
        cell_map: Dict[Tuple[int, int], List[int]] = {}
        for idx, cell in enumerate(cells):
            cell_map.setdefault(cell, []).append(idx)

        reaches = {cell: cell_reach(cell, self.horizontal_threshold_nm) for cell in cell_map}

        for i, cell in enumerate(cells):
            reach = reaches[cell]
            if reach is None:
                for j in range(i + 1, len(bucket)):
                    yield i, j
                continue

            candidates = set()
            for neighbor in neighbor_cells(cell, *reach):
                candidates.update(j for j in cell_map.get(neighbor, ()) if j > i)
            for j in sorted(candidates):
                yield i, j
