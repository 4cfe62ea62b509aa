"""Structural capacity checks for circular pile sections."""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import dataclass

from .loads import SAFETY_FACTORS
from .pile import PileMaterial, PileSpec, section_area, section_inertia

logger = logging.getLogger(__name__)


NOTE_GOOD_MARGIN = "The pile has sufficient structural capacity with a good safety margin."
NOTE_ADEQUATE = (
    "The pile has adequate structural capacity, but consider increasing the size "
    "for better long-term performance."
)
NOTE_INADEQUATE = (
    "The pile is structurally inadequate for the applied load. Increase the pile dimensions."
)
NOTE_INVALID = (
    "Error occurred during structural capacity calculation. Please check your inputs."
)


@dataclass(frozen=True)
class StructuralResult:
    """Axial compression check."""
    cross_sectional_area: float     # m^2
    compressive_stress: float       # MPa
    allowable_stress: float         # MPa
    utilization_ratio: float
    is_adequate: bool
    notes: str


@dataclass(frozen=True)
class BendingResult:
    """Simplified bending stress check (sigma = M c / I)."""
    moment: float                   # kN-m
    moment_of_inertia: float        # m^4
    bending_stress: float           # MPa
    allowable_stress: float         # MPa
    utilization_ratio: float
    is_adequate: bool


def structural_adequacy_note(utilization_ratio: float) -> str:
    """Narrative band: <= 0.7 good margin, <= 1.0 adequate, otherwise inadequate."""
    if utilization_ratio <= 0.7:
        return NOTE_GOOD_MARGIN
    if utilization_ratio <= 1.0:
        return NOTE_ADEQUATE
    return NOTE_INADEQUATE


def check_structural_capacity(
    pile: PileSpec,
    applied_load: float,
    safety_factor: float | None = None,
    material: PileMaterial | None = None,
) -> StructuralResult:
    """Compressive stress utilization of the pile section.

    Args:
        pile: Pile geometry; its material is used unless one is given
        applied_load: Axial load (kN)
        safety_factor: Structural factor of safety (default 1.67)
        material: Material override (yield strength, wall thickness)

    Returns:
        StructuralResult; degenerate inputs give is_adequate=False and never NaN.
    """
    material = material or pile.material
    FS = SAFETY_FACTORS.structural if safety_factor is None else safety_factor

    if not _positive(applied_load) or not _positive(FS):
        logger.warning(
            "Structural check skipped: applied load %r kN, safety factor %r", applied_load, FS,
        )
        return StructuralResult(
            cross_sectional_area=0.0,
            compressive_stress=0.0,
            allowable_stress=0.0,
            utilization_ratio=0.0,
            is_adequate=False,
            notes=NOTE_INVALID,
        )

    degenerate = False
    area = section_area(pile.diameter, material.wall_thickness)
    if not _positive(area):
        logger.warning("Pile section area is %r m^2; using 1 m^2", area)
        area, degenerate = 1.0, True

    f_y = material.yield_strength
    if not _positive(f_y):
        logger.warning("Yield strength of '%s' is %r MPa; using 1 MPa", material.id, f_y)
        f_y, degenerate = 1.0, True

    compressive_stress = applied_load / area / 1000.0   # kPa -> MPa
    allowable_stress = f_y / FS
    utilization = compressive_stress / allowable_stress

    return StructuralResult(
        cross_sectional_area=area,
        compressive_stress=compressive_stress,
        allowable_stress=allowable_stress,
        utilization_ratio=utilization,
        is_adequate=utilization <= 1.0 and not degenerate,
        notes=NOTE_INVALID if degenerate else structural_adequacy_note(utilization),
    )


def check_bending_capacity(
    pile: PileSpec,
    moment: float,
    safety_factor: float | None = None,
) -> BendingResult:
    """Extreme fibre bending stress against yield / FS.

    Args:
        pile: Pile geometry and material
        moment: Bending moment (kN-m)
        safety_factor: Structural factor of safety (default 1.67)
    """
    FS = SAFETY_FACTORS.structural if safety_factor is None else safety_factor
    I = section_inertia(pile.diameter, pile.material.wall_thickness)
    c = pile.diameter / 2
    sigma_b = abs(moment) * c / I / 1000.0 if I > 0 else math.inf
    f_y = pile.material.yield_strength
    allowable = f_y / FS if _positive(f_y) and _positive(FS) else 0.0
    utilization = sigma_b / allowable if allowable > 0 else math.inf
    return BendingResult(
        moment=moment,
        moment_of_inertia=I,
        bending_stress=sigma_b,
        allowable_stress=allowable,
        utilization_ratio=utilization,
        is_adequate=utilization <= 1.0,
    )


def _positive(value) -> bool:
    return isinstance(value, numbers.Real) and math.isfinite(value) and value > 0
