"""Pile dimension recommendation: sweep diameters x lengths against a demand.

For each diameter the lengths are scanned in ascending order and the first
length that satisfies both the geotechnical capacity and the structural check
is kept. Candidates are ranked by how close their capacity surplus is to the
20% target and the best three are returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .axial import axial_capacity
from .lateral import lateral_capacity
from .loads import SAFETY_FACTORS
from .pile import PileMaterial, PileSpec
from .soil import SoilProfile
from .structural import check_bending_capacity, check_structural_capacity

logger = logging.getLogger(__name__)


RECOMMENDATION_DIAMETERS = (0.3, 0.4, 0.5, 0.6, 0.8, 1.0)   # m
RECOMMENDATION_LENGTHS = (5.0, 10.0, 15.0, 20.0, 25.0, 30.0)  # m
TARGET_EFFICIENCY = 1.2
MAX_RECOMMENDATIONS = 3


@dataclass(frozen=True)
class PileRecommendation:
    """A passing (diameter, length) combination."""
    diameter: float                 # m
    length: float                   # m
    allowable_capacity: float       # kN
    utilization_ratio: float        # structural demand / capacity
    efficiency: float               # allowable / required
    applied_load: float | None = None           # kN, axial check load
    bending_stress: float | None = None         # MPa, lateral check
    allowable_bending_stress: float | None = None   # MPa


def recommend_pile_dimensions(
    required_capacity: float,
    profile: SoilProfile,
    water_table_depth: float,
    material: PileMaterial,
    bearing_safety_factor: float | None = None,
    structural_safety_factor: float | None = None,
    loading: str = "axial",
    method: str = "beta",
    lateral_safety_factor: float | None = None,
) -> list[PileRecommendation]:
    """Search the standard grid for piles meeting the required capacity.

    Args:
        required_capacity: Required allowable capacity (kN)
        profile: Soil profile
        water_table_depth: Depth of water table (m)
        material: Pile material
        bearing_safety_factor: Axial factor of safety (default 2.5)
        structural_safety_factor: Structural factor of safety (default 1.67)
        loading: "axial" (bearing + compression check) or "lateral"
            (Broms at ground-level load + bending check)
        method: Axial method id for the axial variant
        lateral_safety_factor: Factor applied to the Broms capacity in the
            lateral variant (defaults to the bearing factor)

    Returns:
        Up to three recommendations, closest to 120% efficiency first.
        Empty when no grid point passes.
    """
    FS_b = SAFETY_FACTORS.bearing if bearing_safety_factor is None else bearing_safety_factor
    FS_s = SAFETY_FACTORS.structural if structural_safety_factor is None else structural_safety_factor
    FS_l = FS_b if lateral_safety_factor is None else lateral_safety_factor

    if loading == "axial":
        evaluate = _axial_candidate
        factors = (FS_b, FS_s, method)
    elif loading == "lateral":
        evaluate = _lateral_candidate
        factors = (FS_l, FS_s)
    else:
        raise ValueError(f"Unknown loading '{loading}', expected 'axial' or 'lateral'")

    candidates: list[PileRecommendation] = []
    for diameter in RECOMMENDATION_DIAMETERS:
        for length in RECOMMENDATION_LENGTHS:
            pile = PileSpec(diameter=diameter, length=length, material=material)
            candidate = evaluate(required_capacity, profile, water_table_depth, pile, *factors)
            if candidate is not None:
                candidates.append(candidate)
                # Shortest adequate length for this diameter
                break

    candidates.sort(key=lambda c: abs(c.efficiency - TARGET_EFFICIENCY))

    if not candidates:
        logger.info(
            "No %s recommendation found for %.1f kN within the standard grid",
            loading, required_capacity,
        )
    return candidates[:MAX_RECOMMENDATIONS]


def _axial_candidate(
    required: float,
    profile: SoilProfile,
    water_table_depth: float,
    pile: PileSpec,
    FS_b: float,
    FS_s: float,
    method: str,
) -> PileRecommendation | None:
    ax = axial_capacity(profile, pile, water_table_depth, method=method, safety_factor=FS_b)
    if ax.allowable_capacity < required:
        return None
    applied = required * FS_b
    check = check_structural_capacity(pile, applied, safety_factor=FS_s)
    if not check.is_adequate:
        return None
    return PileRecommendation(
        diameter=pile.diameter,
        length=pile.length,
        allowable_capacity=ax.allowable_capacity,
        utilization_ratio=check.utilization_ratio,
        efficiency=ax.allowable_capacity / required,
        applied_load=applied,
    )


def _lateral_candidate(
    required: float,
    profile: SoilProfile,
    water_table_depth: float,
    pile: PileSpec,
    FS_l: float,
    FS_s: float,
) -> PileRecommendation | None:
    lat = lateral_capacity(profile, pile, water_table_depth, 0.0, safety_factor=FS_l)
    if lat.allowable_lateral_capacity < required:
        return None
    # Simplified moment at one third of the embedded length
    moment = required * pile.length / 3.0
    check = check_bending_capacity(pile, moment, safety_factor=FS_s)
    if not check.is_adequate:
        return None
    return PileRecommendation(
        diameter=pile.diameter,
        length=pile.length,
        allowable_capacity=lat.allowable_lateral_capacity,
        utilization_ratio=check.utilization_ratio,
        efficiency=lat.allowable_lateral_capacity / required,
        bending_stress=check.bending_stress,
        allowable_bending_stress=check.allowable_stress,
    )
