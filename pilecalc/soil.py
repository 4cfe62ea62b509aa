"""Soil profile model, soil type registry, and submergence rule."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


GAMMA_WATER = 9.81  # kN/m^3


class SoilType(str, Enum):
    SAND_LOOSE = "sand-loose"
    SAND_MEDIUM = "sand-medium"
    SAND_DENSE = "sand-dense"
    CLAY_SOFT = "clay-soft"
    CLAY_MEDIUM = "clay-medium"
    CLAY_STIFF = "clay-stiff"
    SILT = "silt"
    GRAVEL = "gravel"
    CUSTOM = "custom"


class SoilBehavior(str, Enum):
    """Formula family a layer is calculated with."""
    GRANULAR = "granular"
    COHESIVE = "cohesive"


@dataclass(frozen=True)
class SoilTypeDefaults:
    name: str
    friction_angle: float   # degrees
    cohesion: float         # kPa
    unit_weight: float      # kN/m^3


# Predefined soil types (read-only)
SOIL_TYPES: MappingProxyType = MappingProxyType({
    SoilType.SAND_LOOSE: SoilTypeDefaults("Sand (Loose)", 30.0, 0.0, 17.0),
    SoilType.SAND_MEDIUM: SoilTypeDefaults("Sand (Medium)", 33.0, 0.0, 18.0),
    SoilType.SAND_DENSE: SoilTypeDefaults("Sand (Dense)", 38.0, 0.0, 20.0),
    SoilType.CLAY_SOFT: SoilTypeDefaults("Clay (Soft)", 0.0, 20.0, 16.0),
    SoilType.CLAY_MEDIUM: SoilTypeDefaults("Clay (Medium)", 0.0, 50.0, 17.0),
    SoilType.CLAY_STIFF: SoilTypeDefaults("Clay (Stiff)", 0.0, 100.0, 19.0),
    SoilType.SILT: SoilTypeDefaults("Silt", 28.0, 5.0, 17.0),
    SoilType.GRAVEL: SoilTypeDefaults("Gravel", 40.0, 0.0, 21.0),
    SoilType.CUSTOM: SoilTypeDefaults("Custom", 0.0, 0.0, 18.0),
})

DEFAULT_SOIL_LAYER = {
    "type": SoilType.SAND_MEDIUM.value,
    "thickness": 2.0,
    "frictionAngle": 33.0,
    "cohesion": 0.0,
    "unitWeight": 18.0,
}


@dataclass(frozen=True)
class SoilLayer:
    """Single soil layer with properties."""
    soil_type: SoilType
    thickness: float        # m
    friction_angle: float   # degrees
    cohesion: float         # kPa
    unit_weight: float      # kN/m^3
    behavior: SoilBehavior = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "soil_type", SoilType(self.soil_type))
        if not (math.isfinite(self.thickness) and self.thickness > 0):
            raise ValueError(f"Layer thickness must be > 0 m, got {self.thickness}")
        if not 0.0 <= self.friction_angle <= 45.0:
            raise ValueError(
                f"Friction angle must be within [0, 45] degrees, got {self.friction_angle}"
            )
        if not (math.isfinite(self.cohesion) and self.cohesion >= 0):
            raise ValueError(f"Cohesion must be >= 0 kPa, got {self.cohesion}")
        if not 10.0 <= self.unit_weight <= 25.0:
            raise ValueError(
                f"Unit weight must be within [10, 25] kN/m^3, got {self.unit_weight}"
            )
        # Cohesion wins for mixed custom layers
        behavior = SoilBehavior.COHESIVE if self.cohesion > 0 else SoilBehavior.GRANULAR
        object.__setattr__(self, "behavior", behavior)

    @property
    def is_cohesive(self) -> bool:
        return self.behavior == SoilBehavior.COHESIVE

    @property
    def is_granular(self) -> bool:
        return self.behavior == SoilBehavior.GRANULAR

    @property
    def name(self) -> str:
        return SOIL_TYPES[self.soil_type].name


@dataclass(frozen=True)
class ProfileInterval:
    """Portion of a layer lying along the embedded pile."""
    layer_index: int
    layer: SoilLayer
    top: float              # m below ground
    thickness: float        # m, effective thickness along the pile

    @property
    def bottom(self) -> float:
        return self.top + self.thickness

    @property
    def mid_depth(self) -> float:
        return self.top + self.thickness / 2


@dataclass(frozen=True)
class SoilProfile:
    """Soil profile of stacked layers, listed top to bottom."""
    layers: tuple[SoilLayer, ...]

    def __post_init__(self):
        object.__setattr__(self, "layers", tuple(self.layers))
        if not self.layers:
            raise ValueError("A soil profile needs at least one layer")

    @property
    def total_depth(self) -> float:
        return sum(layer.thickness for layer in self.layers)

    @property
    def layer_bottoms(self) -> list[float]:
        """Cumulative depth (m) to the bottom of each layer."""
        bottoms = []
        depth = 0.0
        for layer in self.layers:
            depth += layer.thickness
            bottoms.append(depth)
        return bottoms

    def extends_to(self, depth: float) -> bool:
        return depth <= self.total_depth

    def layer_index_at(self, depth: float) -> int:
        """Index of the first layer whose bottom reaches the given depth.

        Depths below the profile bottom resolve to the last layer, which is
        treated as extending indefinitely.
        """
        current = 0.0
        for i, layer in enumerate(self.layers):
            if current + layer.thickness >= depth:
                return i
            current += layer.thickness
        return len(self.layers) - 1

    def layer_at(self, depth: float) -> SoilLayer:
        return self.layers[self.layer_index_at(depth)]

    def intervals(self, length: float) -> list[ProfileInterval]:
        """Split the embedded length [0, length) into per-layer intervals."""
        result = []
        current = 0.0
        last = len(self.layers) - 1
        for i, layer in enumerate(self.layers):
            if current >= length:
                break
            thickness = min(layer.thickness, length - current)
            if i == last and current + layer.thickness < length:
                thickness = length - current
            result.append(ProfileInterval(i, layer, current, thickness))
            current += layer.thickness
        return result


def is_submerged(depth: float, water_table_depth: float) -> bool:
    """Water above ground submerges everything; otherwise depth below the table."""
    return water_table_depth < 0 or depth > water_table_depth


def effective_unit_weight(layer: SoilLayer, depth: float, water_table_depth: float) -> float:
    """Unit weight (kN/m^3), buoyant when the depth is submerged."""
    if is_submerged(depth, water_table_depth):
        return layer.unit_weight - GAMMA_WATER
    return layer.unit_weight


# --- Soil Layer Construction Helpers ---

def build_soil_layer(soil_type: SoilType | str, thickness: float, **overrides) -> SoilLayer:
    """Build a layer from the registry defaults of a soil type.

    Keyword overrides: friction_angle, cohesion, unit_weight.
    """
    soil_type = SoilType(soil_type)
    defaults = SOIL_TYPES[soil_type]
    return SoilLayer(
        soil_type=soil_type,
        thickness=thickness,
        friction_angle=overrides.get("friction_angle", defaults.friction_angle),
        cohesion=overrides.get("cohesion", defaults.cohesion),
        unit_weight=overrides.get("unit_weight", defaults.unit_weight),
    )


def build_soil_layer_from_dict(ld: dict) -> SoilLayer:
    """Build a SoilLayer from an input-form dict.

    Accepts both the form's camelCase keys and snake_case keys; missing
    properties fall back to the soil type defaults.
    """
    soil_type = SoilType(ld.get("type") or ld.get("soil_type") or DEFAULT_SOIL_LAYER["type"])
    overrides = {}
    for snake, camel in (
        ("friction_angle", "frictionAngle"),
        ("cohesion", "cohesion"),
        ("unit_weight", "unitWeight"),
    ):
        value = ld.get(camel, ld.get(snake))
        if value is not None:
            overrides[snake] = float(value)
    thickness = ld.get("thickness", DEFAULT_SOIL_LAYER["thickness"])
    return build_soil_layer(soil_type, float(thickness), **overrides)


def build_soil_profile(layer_dicts: list[dict]) -> SoilProfile:
    return SoilProfile(layers=tuple(build_soil_layer_from_dict(ld) for ld in layer_dicts))
