"""Axial pile capacity calculations.

Methods: Alpha (total stress) and Beta (effective stress) skin friction, with
Nc = 9 end bearing in cohesive soil and Meyerhof N_q end bearing in granular
soil. Allowable capacity is the ultimate capacity over the bearing factor of
safety.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .loads import SAFETY_FACTORS
from .pile import PileSpec
from .soil import ProfileInterval, SoilLayer, SoilProfile, effective_unit_weight, is_submerged

logger = logging.getLogger(__name__)


CALCULATION_METHODS = {
    "alpha": "Alpha Method (Total Stress)",
    "beta": "Beta Method (Effective Stress)",
}

# Lateral earth pressure coefficient for driven piles
K_DRIVEN = 0.8
# Beta for normally consolidated clay
BETA_CLAY = 0.25
# Bearing capacity factor for cohesive tip
N_C = 9.0


@dataclass(frozen=True)
class AxialResult:
    """Results from an axial capacity analysis."""
    method: str
    skin_friction: float        # kN
    end_bearing: float          # kN
    total_capacity: float       # kN, ultimate
    allowable_capacity: float   # kN
    safety_factor: float
    bearing_layer_index: int
    layer_contributions: list[dict]     # Per-layer breakdown, pile tip last
    assumptions: list[str]


def alpha_adhesion_factor(layer: SoilLayer) -> float:
    """Simplified adhesion factor.

    Cohesive: 0.9 up to c = 100 kPa, 0.5 above. Granular: K * tan(phi).
    """
    if layer.is_cohesive:
        return 0.5 if layer.cohesion > 100 else 0.9
    return K_DRIVEN * math.tan(math.radians(layer.friction_angle))


def beta_coefficient(layer: SoilLayer) -> float:
    """beta = K * tan(phi) for granular layers, fixed 0.25 for clay."""
    if layer.is_cohesive:
        return BETA_CLAY
    return K_DRIVEN * math.tan(math.radians(layer.friction_angle))


def meyerhof_Nq(phi: float) -> float:
    """N_q = exp(pi tan phi) * tan^2(45 + phi/2), phi in degrees."""
    phi_rad = math.radians(phi)
    return math.exp(math.pi * math.tan(phi_rad)) * math.tan(math.radians(45.0 + phi / 2)) ** 2


def alpha_method(
    profile: SoilProfile,
    pile: PileSpec,
    water_table_depth: float,
    safety_factor: float | None = None,
) -> AxialResult:
    """Axial capacity by the Alpha (total stress) method.

    Layer skin friction is alpha * c * P * t for every layer, so granular
    layers without cohesion add nothing to the shaft resistance.
    """
    def layer_friction(iv: ProfileInterval, gamma_eff: float) -> tuple[float, dict]:
        alpha = alpha_adhesion_factor(iv.layer)
        q_s = alpha * iv.layer.cohesion * pile.perimeter * iv.thickness
        return q_s, {
            "factor": alpha,
            "alpha": round(alpha, 3),
            "description": f"Alpha = {alpha:.2f}, Skin friction = {q_s:.2f} kN",
        }

    return _axial_capacity(
        profile, pile, water_table_depth, safety_factor,
        method="alpha",
        layer_friction=layer_friction,
        assumptions=[
            "Alpha factors were estimated based on soil cohesion values",
            "End bearing calculation uses Meyerhof's method for granular soils "
            "and Nc=9 for cohesive soils",
        ],
    )


def beta_method(
    profile: SoilProfile,
    pile: PileSpec,
    water_table_depth: float,
    safety_factor: float | None = None,
) -> AxialResult:
    """Axial capacity by the Beta (effective stress) method."""
    def layer_friction(iv: ProfileInterval, gamma_eff: float) -> tuple[float, dict]:
        beta = beta_coefficient(iv.layer)
        sigma_v = iv.mid_depth * gamma_eff
        q_s = beta * sigma_v * pile.perimeter * iv.thickness
        return q_s, {
            "factor": beta,
            "beta": round(beta, 3),
            "effective_stress_kpa": sigma_v,
            "description": (
                f"Beta = {beta:.2f}, Effective stress = {sigma_v:.2f} kPa, "
                f"Skin friction = {q_s:.2f} kN"
            ),
        }

    return _axial_capacity(
        profile, pile, water_table_depth, safety_factor,
        method="beta",
        layer_friction=layer_friction,
        assumptions=[
            f"Coefficient of lateral earth pressure K = {K_DRIVEN} was assumed for the calculation",
            "Beta values were calculated based on effective friction angles",
            "End bearing calculation uses bearing capacity factors derived from friction angles",
        ],
    )


def axial_capacity(
    profile: SoilProfile,
    pile: PileSpec,
    water_table_depth: float,
    method: str = "beta",
    safety_factor: float | None = None,
) -> AxialResult:
    """Compute axial capacity by method id ("alpha" or "beta")."""
    if method == "alpha":
        return alpha_method(profile, pile, water_table_depth, safety_factor)
    if method == "beta":
        return beta_method(profile, pile, water_table_depth, safety_factor)
    raise ValueError(f"Unknown axial method '{method}', expected one of {list(CALCULATION_METHODS)}")


def end_bearing(
    layer: SoilLayer,
    pile: PileSpec,
    water_table_depth: float,
) -> tuple[float, str]:
    """End bearing (kN) of the tip layer and its report line."""
    A = pile.tip_area
    L = pile.length
    if layer.is_cohesive:
        q_b = N_C * layer.cohesion * A
        return q_b, (
            f"End bearing = 9 × Cu × Area = 9 × {layer.cohesion:g} × {A:.2f} = {q_b:.2f} kN"
        )
    N_q = meyerhof_Nq(layer.friction_angle)
    sigma_v = L * effective_unit_weight(layer, L, water_table_depth)
    q_b = N_q * sigma_v * A
    return q_b, (
        f"End bearing = Nq × σ'v × Area = {N_q:.2f} × {sigma_v:.2f} × {A:.2f} = {q_b:.2f} kN"
    )


# --- Internal helpers ---

def _axial_capacity(
    profile: SoilProfile,
    pile: PileSpec,
    water_table_depth: float,
    safety_factor: float | None,
    method: str,
    layer_friction,
    assumptions: list[str],
) -> AxialResult:
    FS = SAFETY_FACTORS.bearing if safety_factor is None else safety_factor
    L = pile.length
    assumptions = list(assumptions)
    layer_contributions = []
    Q_s = 0.0

    # --- Skin friction ---
    for iv in profile.intervals(L):
        submerged = is_submerged(iv.top, water_table_depth)
        gamma_eff = effective_unit_weight(iv.layer, iv.top, water_table_depth)
        dQ, detail = layer_friction(iv, gamma_eff)
        Q_s += dQ
        row = {
            "depth_range": f"{iv.top:.1f}m - {iv.bottom:.1f}m",
            "top_m": iv.top,
            "bottom_m": iv.bottom,
            "layer": iv.layer.soil_type.value,
            "behavior": iv.layer.behavior.value,
            "cohesion_kpa": iv.layer.cohesion,
            "effective_unit_weight": gamma_eff,
            "submerged": submerged,
            "skin_friction_kn": dQ,
        }
        row.update(detail)
        layer_contributions.append(row)

    # --- End bearing ---
    tip_index = profile.layer_index_at(L)
    tip_layer = profile.layers[tip_index]
    Q_b, tip_note = end_bearing(tip_layer, pile, water_table_depth)
    layer_contributions.append({
        "depth_range": f"{L:.1f}m (Pile Tip)",
        "top_m": L,
        "bottom_m": L,
        "layer": tip_layer.soil_type.value,
        "behavior": tip_layer.behavior.value,
        "end_bearing_kn": Q_b,
        "description": tip_note,
    })

    if not profile.extends_to(L):
        logger.warning(
            "Pile length %.2f m exceeds soil profile depth %.2f m; extending the last layer",
            L, profile.total_depth,
        )
        assumptions.append(
            f"Pile tip ({L:.1f}m) lies below the modelled profile "
            f"({profile.total_depth:.1f}m); the last layer was assumed to continue"
        )
    assumptions.append(f"Factor of safety for bearing capacity: {FS}")

    Q_ult = Q_s + Q_b
    logger.debug(
        "%s method: Q_s=%.2f kN, Q_b=%.2f kN, Q_ult=%.2f kN (FS=%s)",
        method, Q_s, Q_b, Q_ult, FS,
    )

    return AxialResult(
        method=CALCULATION_METHODS[method],
        skin_friction=Q_s,
        end_bearing=Q_b,
        total_capacity=Q_ult,
        allowable_capacity=Q_ult / FS,
        safety_factor=FS,
        bearing_layer_index=tip_index,
        layer_contributions=layer_contributions,
        assumptions=assumptions,
    )
