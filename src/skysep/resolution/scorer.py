"""Deficit-based scoring of single-variable conflict resolutions"""

import logging
import math
from typing import List

from ..schemas.flight_schemas import (
    HORIZONTAL_THRESHOLD_NM, VERTICAL_THRESHOLD_FT,
    CandidateStatus, Conflict, ResolutionCandidate
)


logger = logging.getLogger(__name__)

# Delay: nm of longitudinal spacing gained per minute of delay
DELAY_GAIN_NM_PER_MIN = 3.0
# Speed: nm gained per knot of speed reduction over the conflict window
SPEED_GAIN_NM_PER_KT = 0.4
MIN_SPEED_REDUCTION_KT = 5
MAX_SPEED_REDUCTION_KT = 40
ALTITUDE_STEP_FT = 200

DELAY_COST_OFFSET = 1.0
ALTITUDE_COST_OFFSET = 1.25
SPEED_COST_OFFSET = 1.5

# Tolerance for float round-off when checking that a gain clears a threshold
CLEARANCE_EPSILON = 1e-9


def round_cost(value: float) -> float:
    return round(value, 2)


class ResolutionScorer:
    """
    Propose delay, altitude and speed adjustments for each conflict

    Candidates are scored independently per conflict and pooled into one
    list ranked by ascending cost. No joint feasibility check across
    conflicts is made.
    """

    def __init__(self, horizontal_threshold_nm: float = HORIZONTAL_THRESHOLD_NM,
                 vertical_threshold_ft: float = VERTICAL_THRESHOLD_FT):
        self.horizontal_threshold_nm = horizontal_threshold_nm
        self.vertical_threshold_ft = vertical_threshold_ft

    def score(self, conflicts: List[Conflict]) -> List[ResolutionCandidate]:
        candidates = []
        for conflict in conflicts:
            candidates.extend(self.candidates_for_conflict(conflict))

        candidates.sort(key=lambda c: c.cost)
        logger.debug(f"Scored {len(candidates)} candidates for {len(conflicts)} conflicts")
        return candidates

    def horizontal_deficit(self, conflict: Conflict) -> float:
        return max(0.0, self.horizontal_threshold_nm - conflict.min_horizontal_nm)

    def vertical_deficit(self, conflict: Conflict) -> float:
        return max(0.0, self.vertical_threshold_ft - conflict.min_vertical_ft)

    def compute_severity(self, conflict: Conflict) -> float:
        """Worse of the two normalized deficits, in [0, 1]"""
        horizontal_severity = self.horizontal_deficit(conflict) / self.horizontal_threshold_nm
        vertical_severity = self.vertical_deficit(conflict) / self.vertical_threshold_ft
        return min(1.0, max(horizontal_severity, vertical_severity))

    def base_cost(self, conflict: Conflict) -> float:
        return 1 + self.compute_severity(conflict) * 9

    def candidates_for_conflict(self, conflict: Conflict) -> List[ResolutionCandidate]:
        horizontal_deficit = self.horizontal_deficit(conflict)
        vertical_deficit = self.vertical_deficit(conflict)
        base_cost = self.base_cost(conflict)

        candidates = []

        if horizontal_deficit > 0:
            minutes = max(1, math.ceil(horizontal_deficit / DELAY_GAIN_NM_PER_MIN))
            gain_nm = min(horizontal_deficit, minutes * DELAY_GAIN_NM_PER_MIN)
            candidates.append(self._make_candidate(
                conflict, 'delay', conflict.flight_a,
                delta_time_sec=minutes * 60,
                gain_nm=gain_nm,
                cost=round_cost(base_cost + DELAY_COST_OFFSET),
                notes=(f"Delay {conflict.flight_a} by {minutes} min to widen "
                       f"longitudinal spacing by ~{gain_nm:.1f} nm.")
            ))

        if vertical_deficit > 0:
            delta_ft = max(ALTITUDE_STEP_FT,
                           math.ceil(vertical_deficit / ALTITUDE_STEP_FT) * ALTITUDE_STEP_FT)
            candidates.append(self._make_candidate(
                conflict, 'altitude', conflict.flight_b,
                delta_altitude_ft=delta_ft,
                gain_ft=delta_ft,
                cost=round_cost(base_cost + ALTITUDE_COST_OFFSET),
                notes=f"Climb {conflict.flight_b} by {delta_ft} ft to separate vertically."
            ))

        if horizontal_deficit > 0:
            delta_kt = max(MIN_SPEED_REDUCTION_KT,
                           math.ceil(horizontal_deficit / SPEED_GAIN_NM_PER_KT))
            delta_kt = min(MAX_SPEED_REDUCTION_KT, delta_kt)
            gain_nm = min(horizontal_deficit, delta_kt * SPEED_GAIN_NM_PER_KT)
            candidates.append(self._make_candidate(
                conflict, 'speed', conflict.flight_a,
                delta_speed_kt=-delta_kt,
                gain_nm=gain_nm,
                cost=round_cost(base_cost + SPEED_COST_OFFSET),
                notes=(f"Reduce {conflict.flight_a} speed by {delta_kt} kt through "
                       f"the conflict window to extend spacing.")
            ))

        return candidates

    def resolves(self, conflict: Conflict, gain_nm: float, gain_ft: float) -> bool:
        """Either dimension clearing its threshold resolves the conflict"""
        clears_horizontal = (conflict.min_horizontal_nm + gain_nm >=
                             self.horizontal_threshold_nm - CLEARANCE_EPSILON)
        clears_vertical = (conflict.min_vertical_ft + gain_ft >=
                           self.vertical_threshold_ft - CLEARANCE_EPSILON)
        return clears_horizontal or clears_vertical

    def _make_candidate(self, conflict: Conflict, kind: str, flight_id: str,
                        cost: float, notes: str,
                        delta_time_sec: int = 0, delta_altitude_ft: int = 0,
                        delta_speed_kt: int = 0, gain_nm: float = 0.0,
                        gain_ft: float = 0.0) -> ResolutionCandidate:
        resolves_conflict = self.resolves(conflict, gain_nm, gain_ft)
        return ResolutionCandidate(
            id=f"{conflict.id}-{kind}-{flight_id}",
            conflict_id=conflict.id,
            flight_a=conflict.flight_a,
            flight_b=conflict.flight_b,
            flight_id=flight_id,
            delta_time_sec=delta_time_sec,
            delta_altitude_ft=delta_altitude_ft,
            delta_speed_kt=delta_speed_kt,
            estimated_horizontal_gain_nm=gain_nm,
            estimated_vertical_gain_ft=gain_ft,
            cost=cost,
            resolves_conflict=resolves_conflict,
            status=CandidateStatus.VALID if resolves_conflict else CandidateStatus.PENDING,
            notes=notes
        )
