"""Lateral pile capacity by the simplified Broms method.

The critical layer sits at min(5D, L) below ground. Piles with L/D < 10 are
treated as short (rigid), others as long (flexible). Every intermediate value
is recorded as a calculation step for reporting.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .loads import SAFETY_FACTORS
from .pile import PileSpec
from .soil import SoilProfile, effective_unit_weight, is_submerged

logger = logging.getLogger(__name__)


RIGID_SLENDERNESS_LIMIT = 10.0
CRITICAL_DEPTH_DIAMETERS = 5.0


@dataclass(frozen=True)
class LateralResult:
    """Broms lateral capacity results."""
    lateral_capacity: float             # kN, ultimate after height reduction
    allowable_lateral_capacity: float   # kN
    calculation_method: str
    critical_depth: float               # m
    critical_layer_index: int
    is_rigid: bool
    length_to_diameter_ratio: float
    effective_unit_weight: float        # kN/m^3 at the critical depth
    passive_coefficient: float | None   # K_p, granular only
    equivalent_depth: float | None      # m, granular long piles only
    moment_capacity: float | None       # kN-m, cohesive long piles only
    moment_reduction: float
    safety_factor: float
    steps: list[dict]
    assumptions: list[str]


def passive_coefficient(phi: float) -> float:
    """Rankine K_p = tan^2(45 + phi/2), phi in degrees."""
    return math.tan(math.radians(45.0 + phi / 2)) ** 2


def moment_reduction_factor(length: float, force_height: float) -> float:
    """L / (L + e) for a load applied e above ground, 1.0 at ground level."""
    if force_height > 0:
        return length / (length + force_height)
    return 1.0


def lateral_capacity(
    profile: SoilProfile,
    pile: PileSpec,
    water_table_depth: float,
    force_height: float,
    safety_factor: float | None = None,
) -> LateralResult:
    """Ultimate and allowable lateral capacity of a free-head pile.

    Args:
        profile: Soil profile
        pile: Pile geometry
        water_table_depth: Depth of water table (m, negative above ground)
        force_height: Height of the lateral load above ground (m)
        safety_factor: Lateral factor of safety (default 1.5)

    Returns:
        LateralResult with the step-by-step breakdown
    """
    FS = SAFETY_FACTORS.lateral if safety_factor is None else safety_factor
    D = pile.diameter
    L = pile.length
    steps: list[dict] = []

    z_c = min(CRITICAL_DEPTH_DIAMETERS * D, L)
    layer_index = profile.layer_index_at(z_c)
    layer = profile.layers[layer_index]

    ratio = pile.slenderness
    rigid = ratio < RIGID_SLENDERNESS_LIMIT
    submerged = is_submerged(z_c, water_table_depth)
    gamma_eff = effective_unit_weight(layer, z_c, water_table_depth)

    steps.append(_step(
        f"Pile length to diameter ratio: {ratio:.2f}",
        value=ratio,
        notes="Pile behaves as a short rigid pile" if rigid
        else "Pile behaves as a long flexible pile",
    ))
    steps.append(_step(
        f"Effective unit weight at critical depth: {gamma_eff:.2f} kN/m³",
        value=gamma_eff,
        notes="Adjusted for submerged condition" if submerged else "Dry condition",
    ))

    Kp = None
    L_e = None
    M_cap = None
    c = layer.cohesion
    phi = layer.friction_angle

    if layer.is_cohesive:
        method = "Broms' method for cohesive soils"
        if rigid:
            H = 9.0 * c * D * L / 2.0
            steps.append(_step(
                f"Undrained cohesion of critical layer: {c:.2f} kPa",
                value=c,
                formula="Lateral capacity = 9 × Cu × D × L / 2",
            ))
            steps.append(_step(
                f"Lateral capacity calculation: 9 × {c:.2f} × {D:.2f} × {L:.2f} / 2",
                value=H,
                result=f"{H:.2f} kN",
            ))
        else:
            M_cap = 9.0 * c * D**2 * L
            H = 4.5 * c * D * math.sqrt(M_cap / (c * D))
            steps.append(_step(
                f"Moment capacity calculation: 9 × {c:.2f} × {D:.2f}² × {L:.2f}",
                value=M_cap,
                formula="Moment capacity = 9 × Cu × D² × L",
            ))
            steps.append(_step(
                "Lateral capacity for long pile in clay",
                value=H,
                formula="Lateral capacity = 4.5 × Cu × D × √(M / (Cu × D))",
                result=f"{H:.2f} kN",
            ))
    else:
        method = "Broms' method for granular soils"
        Kp = passive_coefficient(phi)
        steps.append(_step(
            f"Friction angle of critical layer: {phi:.2f}°",
            value=phi,
            notes=f"Passive earth pressure coefficient Kp = {Kp:.2f}",
        ))
        if rigid:
            H = 0.5 * gamma_eff * D * L**3 * Kp
            steps.append(_step(
                "Lateral capacity for short pile in sand",
                value=H,
                formula="Lateral capacity = 0.5 × γ' × D × L³ × Kp",
                calculation=f"0.5 × {gamma_eff:.2f} × {D:.2f} × {L:.2f}³ × {Kp:.2f}",
                result=f"{H:.2f} kN",
            ))
        else:
            L_e = 1.8 * D * math.sqrt(Kp)
            H = 1.5 * gamma_eff * D * L_e**3
            steps.append(_step(
                f"Equivalent depth calculation: 1.8 × {D:.2f} × √{Kp:.2f}",
                value=L_e,
                formula="Equivalent depth = 1.8 × D × √Kp",
            ))
            steps.append(_step(
                "Lateral capacity for long pile in sand",
                value=H,
                formula="Lateral capacity = 1.5 × γ' × D × Le³",
                calculation=f"1.5 × {gamma_eff:.2f} × {D:.2f} × {L_e:.2f}³",
                result=f"{H:.2f} kN",
            ))

    # --- Load height ---
    reduction = moment_reduction_factor(L, force_height)
    steps.append(_step(
        "Moment reduction factor for force height",
        value=reduction,
        formula="Reduction = L / (L + e)",
        calculation=f"{L:.2f} / ({L:.2f} + {force_height:.2f})",
        result=f"{reduction * 100:.1f}% of capacity",
    ))
    H_unreduced = H
    H = H * reduction
    steps.append(_step(
        "Final lateral capacity after height adjustment",
        value=H,
        calculation=f"{H_unreduced:.2f} × {reduction:.2f}",
        result=f"{H:.2f} kN",
    ))

    H_allow = H / FS
    steps.append(_step(
        "Allowable lateral capacity with safety factor",
        value=H_allow,
        formula="Allowable capacity = Ultimate capacity / FOS",
        calculation=f"{H:.2f} / {FS}",
        result=f"{H_allow:.2f} kN",
    ))

    assumptions = [
        f"Critical soil layer considered at depth {z_c:.1f}m",
        "Simplified Broms' method used for lateral capacity estimation",
        f"Force application height of {force_height}m reduces capacity by factor of {reduction:.2f}",
        f"Factor of safety for lateral capacity: {FS}",
    ]
    if not profile.extends_to(z_c):
        logger.warning(
            "Critical depth %.2f m lies below the soil profile (%.2f m); using the last layer",
            z_c, profile.total_depth,
        )
        assumptions.append("Critical depth lies below the modelled profile; last layer assumed")

    logger.debug(
        "%s (%s): H_ult=%.2f kN, H_allow=%.2f kN",
        method, "rigid" if rigid else "flexible", H, H_allow,
    )

    return LateralResult(
        lateral_capacity=H,
        allowable_lateral_capacity=H_allow,
        calculation_method=method,
        critical_depth=z_c,
        critical_layer_index=layer_index,
        is_rigid=rigid,
        length_to_diameter_ratio=ratio,
        effective_unit_weight=gamma_eff,
        passive_coefficient=Kp,
        equivalent_depth=L_e,
        moment_capacity=M_cap,
        moment_reduction=reduction,
        safety_factor=FS,
        steps=steps,
        assumptions=assumptions,
    )


def _step(
    description: str,
    value: float | None = None,
    formula: str = "",
    calculation: str = "",
    result: str = "",
    notes: str = "",
) -> dict:
    return {
        "description": description,
        "formula": formula,
        "calculation": calculation,
        "value": value,
        "result": result,
        "notes": notes,
    }
