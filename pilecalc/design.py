"""Single pile design run: all checks for one pile, profile and demand."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .axial import AxialResult, axial_capacity
from .deflection import DeflectionProfile, pile_deflection_profile
from .lateral import LateralResult, lateral_capacity
from .loads import SAFETY_FACTORS, LoadingInput, SafetyFactors, check_force_height
from .optimization import PileRecommendation, recommend_pile_dimensions
from .pile import PileSpec
from .soil import SoilProfile
from .structural import StructuralResult, check_structural_capacity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PileDesignResult:
    axial: AxialResult
    structural: StructuralResult
    lateral: LateralResult
    deflection: DeflectionProfile
    recommendations: list[PileRecommendation]
    pile: PileSpec
    loading: LoadingInput
    safety_factors: SafetyFactors

    @property
    def capacity_utilization(self) -> float:
        """Governing demand over allowable capacity for the loading kind."""
        if self.loading.loading == "lateral":
            capacity = self.lateral.allowable_lateral_capacity
        else:
            capacity = self.axial.allowable_capacity
        if capacity <= 0:
            return float("inf")
        return self.loading.required_capacity / capacity

    @property
    def passes(self) -> bool:
        return self.capacity_utilization <= 1.0 and self.structural.is_adequate


def run_pile_design(
    profile: SoilProfile,
    pile: PileSpec,
    loading: LoadingInput,
    safety_factors: SafetyFactors = SAFETY_FACTORS,
    method: str = "beta",
) -> PileDesignResult:
    """Run axial, structural, lateral, deflection and recommendation checks.

    The structural check uses the required capacity times the bearing factor
    as the applied axial load. The deflection profile uses the required
    capacity as the lateral load.

    Raises:
        ValueError: force applied above the pile top, or unknown method.
    """
    check_force_height(pile, loading)
    wt = loading.water_table_depth
    e = loading.force_application_height

    axial = axial_capacity(profile, pile, wt, method=method, safety_factor=safety_factors.bearing)
    structural = check_structural_capacity(
        pile, loading.required_capacity * safety_factors.bearing,
        safety_factor=safety_factors.structural,
    )
    lateral = lateral_capacity(profile, pile, wt, e, safety_factor=safety_factors.lateral)
    deflection = pile_deflection_profile(
        profile, pile, wt, e, loading.required_capacity, top_elevation=pile.top_elevation,
    )
    recommendations = recommend_pile_dimensions(
        loading.required_capacity, profile, wt, pile.material,
        bearing_safety_factor=safety_factors.bearing,
        structural_safety_factor=safety_factors.structural,
        loading=loading.loading,
        method=method,
    )

    logger.info(
        "Pile D=%.2f m L=%.1f m: Q_allow=%.1f kN, H_allow=%.1f kN, structural=%s",
        pile.diameter, pile.length, axial.allowable_capacity,
        lateral.allowable_lateral_capacity,
        "adequate" if structural.is_adequate else "inadequate",
    )

    return PileDesignResult(
        axial=axial,
        structural=structural,
        lateral=lateral,
        deflection=deflection,
        recommendations=recommendations,
        pile=pile,
        loading=loading,
        safety_factors=safety_factors,
    )
