"""Approximate lateral deflection, bending moment and shear along a pile.

Beam-on-elastic-foundation scaling: the characteristic length
lambda = (EI / (D k_avg))^0.25 normalises depth below ground, and damped
cosine/sine shapes give the response there. Pile/soil stiffness enters only
through lambda; the local modulus ratio k_avg / k(z) scales the deflection
of softer and stiffer layers. The stick-up above ground is
treated as a cantilever loaded at the force application height.

This is a preliminary estimate, not a p-y finite difference solution.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .pile import PileSpec
from .soil import SoilBehavior, SoilLayer, SoilProfile, SoilType, is_submerged

logger = logging.getLogger(__name__)


MIN_POINTS = 100
POINTS_PER_METRE = 10

# (decay rate, phase) of the below-ground response per soil behavior
DECAY_PARAMETERS = {
    SoilBehavior.GRANULAR: (0.6, 0.6),
    SoilBehavior.COHESIVE: (0.45, 0.5),
}
# Decay multipliers by soil density or consistency
DECAY_AMPLIFIERS = {
    SoilType.SAND_LOOSE: 0.8,
    SoilType.SAND_DENSE: 1.25,
    SoilType.GRAVEL: 1.25,
    SoilType.CLAY_SOFT: 0.85,
    SoilType.CLAY_STIFF: 1.2,
}
DEFLECTION_SINE_WEIGHT = 0.2
SUBMERGED_DEFLECTION_FACTOR = 1.2
REFERENCE_LOAD = 100.0          # kN
MODULUS_RATIO_BOUNDS = (0.5, 2.0)


@dataclass(frozen=True, eq=False)
class DeflectionProfile:
    """Response series along the pile, depth measured down from the pile top."""
    depth: np.ndarray               # m
    deflection: np.ndarray          # m
    bending_moment: np.ndarray      # kN-m
    shear_force: np.ndarray         # kN
    max_deflection: float           # m, max |y|
    max_bending_moment: float       # kN-m, max |M|
    max_shear_force: float          # kN, max |V|
    characteristic_length: float    # m
    pile_stiffness: float           # kN-m^2 (EI)
    average_soil_modulus: float     # kPa
    top_elevation: float            # m above ground

    @property
    def points(self) -> int:
        return len(self.depth)

    @property
    def depth_below_ground(self) -> np.ndarray:
        return self.depth - self.top_elevation

    def series(self, name: str) -> list[dict]:
        """One response as [{"depth": .., "value": ..}, ...] ordered by depth."""
        values = {
            "deflection": self.deflection,
            "bending_moment": self.bending_moment,
            "shear_force": self.shear_force,
        }[name]
        return [
            {"depth": float(d), "value": float(v)}
            for d, v in zip(self.depth, values)
        ]


def soil_modulus(layer: SoilLayer, depth: float) -> float:
    """Modulus of subgrade reaction k (kPa) at a depth below ground.

    Granular: 10000 + 1000 z (phi/30)^2, x0.6 loose, x1.5 dense.
    Cohesive: 200 c, x0.7 soft, x1.3 stiff.
    """
    if layer.is_granular:
        k = 10000.0 + 1000.0 * depth * (layer.friction_angle / 30.0) ** 2
        if layer.soil_type == SoilType.SAND_LOOSE:
            k *= 0.6
        elif layer.soil_type == SoilType.SAND_DENSE:
            k *= 1.5
    else:
        k = 200.0 * layer.cohesion
        if layer.soil_type == SoilType.CLAY_SOFT:
            k *= 0.7
        elif layer.soil_type == SoilType.CLAY_STIFF:
            k *= 1.3
    return k


def average_soil_modulus(profile: SoilProfile, length: float) -> float:
    """Thickness-weighted k over the embedded length, each layer at its mid-depth."""
    k_avg = 0.0
    for iv in profile.intervals(length):
        k_avg += soil_modulus(iv.layer, iv.mid_depth) * iv.thickness / length
    return k_avg


def characteristic_length(EI: float, diameter: float, k_avg: float) -> float:
    """lambda = (EI / (D k))^0.25 (m)."""
    return (EI / (diameter * k_avg)) ** 0.25


def decay_parameters(layer: SoilLayer) -> tuple[float, float]:
    """(decay rate, phase) for the damped response in this layer."""
    decay, phase = DECAY_PARAMETERS[layer.behavior]
    return decay * DECAY_AMPLIFIERS.get(layer.soil_type, 1.0), phase


def pile_deflection_profile(
    profile: SoilProfile,
    pile: PileSpec,
    water_table_depth: float,
    force_height: float,
    lateral_load: float,
    top_elevation: float | None = None,
) -> DeflectionProfile:
    """Deflection, moment and shear along the full pile.

    Args:
        profile: Soil profile
        pile: Pile geometry and material
        water_table_depth: Depth of water table (m, negative above ground)
        force_height: Height of the lateral load above ground (m)
        lateral_load: Lateral load (kN)
        top_elevation: Pile top above ground (m); defaults to the pile's own

    Returns:
        DeflectionProfile with read-only numpy series
    """
    top = pile.top_elevation if top_elevation is None else top_elevation
    D = pile.diameter
    L = pile.length
    F = lateral_load
    total_length = L + top

    EI = pile.flexural_rigidity
    k_avg = average_soil_modulus(profile, L)
    lam = characteristic_length(EI, D, k_avg)

    n_points = max(MIN_POINTS, math.ceil(POINTS_PER_METRE * L))
    depth = np.linspace(0.0, total_length, n_points)
    y = np.zeros(n_points)
    M = np.zeros(n_points)
    V = np.zeros(n_points)

    # Ground-line reference deflection of a long free-head pile
    y_0 = 2.0 * F / (D * k_avg * lam)
    load_factor = 0.5 * (1.0 + abs(F) / REFERENCE_LOAD)
    lo, hi = MODULUS_RATIO_BOUNDS
    total_force_height = force_height + top

    for i, z in enumerate(depth):
        z_g = z - top   # below ground when positive

        if z_g <= 0:
            h_g = top - z
            e = force_height - h_g
            if e >= 0:
                y[i] = F * e**3 / (3.0 * EI)
                M[i] = F * e
                V[i] = F
            else:
                y[i] = F * force_height**3 / (3.0 * EI)
        else:
            layer = profile.layer_at(z_g)
            a, b = decay_parameters(layer)
            x = z_g / lam
            damping = math.exp(-a * x)

            modulus_ratio = min(hi, max(lo, k_avg / soil_modulus(layer, z_g)))
            water = SUBMERGED_DEFLECTION_FACTOR if is_submerged(z_g, water_table_depth) else 1.0

            y[i] = (
                y_0 * modulus_ratio * water * load_factor * damping
                * (math.cos(b * x) + DEFLECTION_SINE_WEIGHT * math.sin(b * x))
            )
            M[i] = F * lam * damping * math.sin(b * x) / b
            V[i] = F * damping * (math.cos(b * x) - (a / b) * math.sin(b * x))

        if force_height > 0:
            M[i] += F * max(0.0, total_force_height - z)

    for arr in (depth, y, M, V):
        arr.flags.writeable = False

    result = DeflectionProfile(
        depth=depth,
        deflection=y,
        bending_moment=M,
        shear_force=V,
        max_deflection=float(np.max(np.abs(y))),
        max_bending_moment=float(np.max(np.abs(M))),
        max_shear_force=float(np.max(np.abs(V))),
        characteristic_length=lam,
        pile_stiffness=EI,
        average_soil_modulus=k_avg,
        top_elevation=top,
    )
    logger.debug(
        "Deflection profile: %d points, lambda=%.3f m, y_max=%.4g m, M_max=%.2f kN-m",
        n_points, lam, result.max_deflection, result.max_bending_moment,
    )
    return result
