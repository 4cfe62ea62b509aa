"""Pile material database and circular pile section properties."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType


class PileSection(str, Enum):
    SOLID = "solid"
    TUBULAR = "tubular"


@dataclass(frozen=True)
class CompositeBlend:
    """Two registry materials mixed by volume; ratio is the share of material2."""
    material1: str
    material2: str
    ratio: float

    def __post_init__(self):
        if not 0.1 <= self.ratio <= 0.6:
            raise ValueError(f"Composite blend ratio must be within [0.1, 0.6], got {self.ratio}")


@dataclass(frozen=True)
class PileMaterial:
    id: str
    name: str
    yield_strength: float           # MPa
    elasticity: float               # MPa
    unit_weight: float              # kN/m^3
    wall_thickness: float | None = None     # m, tubular piles only
    composite_blend: CompositeBlend | None = None

    def __post_init__(self):
        if self.wall_thickness is not None and not self.wall_thickness > 0:
            raise ValueError(f"Wall thickness must be > 0 m, got {self.wall_thickness}")

    @property
    def section_type(self) -> PileSection:
        if self.wall_thickness:
            return PileSection.TUBULAR
        return PileSection.SOLID

    @property
    def is_composite(self) -> bool:
        return self.composite_blend is not None

    def with_wall_thickness(self, wall_thickness: float | None) -> PileMaterial:
        return replace(self, wall_thickness=wall_thickness)


# Pile material database (read-only)
PILE_MATERIALS: MappingProxyType = MappingProxyType({
    "concrete": PileMaterial(
        id="concrete", name="Concrete", yield_strength=25.0, elasticity=30000.0, unit_weight=25.0,
    ),
    "steel": PileMaterial(
        id="steel", name="Steel", yield_strength=355.0, elasticity=210000.0, unit_weight=78.0,
    ),
    "timber": PileMaterial(
        id="timber", name="Timber", yield_strength=20.0, elasticity=12000.0, unit_weight=7.0,
    ),
    "composite": PileMaterial(
        id="composite", name="Composite", yield_strength=150.0, elasticity=40000.0, unit_weight=18.0,
    ),
})


def get_material(material_id: str) -> PileMaterial:
    """Look up a material by id. Raises KeyError if not found."""
    return PILE_MATERIALS[material_id]


def list_materials() -> list[str]:
    """Return sorted list of available material ids."""
    return sorted(PILE_MATERIALS.keys())


def blend_materials(material1: str, material2: str, ratio: float) -> PileMaterial:
    """Create a composite material by linear mixing of two registry materials.

    Args:
        material1: Base material id
        material2: Secondary material id
        ratio: Volume share of material2 (0.1-0.6)
    """
    blend = CompositeBlend(material1, material2, ratio)
    m1 = get_material(material1)
    m2 = get_material(material2)

    def mix(a: float, b: float) -> float:
        return a * (1.0 - ratio) + b * ratio

    return PileMaterial(
        id="composite",
        name=f"Composite ({m1.name}/{m2.name})",
        yield_strength=mix(m1.yield_strength, m2.yield_strength),
        elasticity=mix(m1.elasticity, m2.elasticity),
        unit_weight=mix(m1.unit_weight, m2.unit_weight),
        composite_blend=blend,
    )


def make_pipe_material(wall_thickness: float, material_id: str = "steel") -> PileMaterial:
    """Registry material with a tubular wall."""
    return get_material(material_id).with_wall_thickness(wall_thickness)


def section_area(diameter: float, wall_thickness: float | None = None) -> float:
    """Cross-sectional area (m^2) of a solid or tubular circular section."""
    r = diameter / 2
    if wall_thickness:
        r_in = max(0.0, r - wall_thickness)
        return math.pi * (r**2 - r_in**2)
    return math.pi * r**2


def section_inertia(diameter: float, wall_thickness: float | None = None) -> float:
    """Second moment of area (m^4) of a solid or tubular circular section."""
    r = diameter / 2
    if wall_thickness:
        r_in = max(0.0, r - wall_thickness)
        return math.pi * (r**4 - r_in**4) / 4
    return math.pi * r**4 / 4


@dataclass(frozen=True)
class PileSpec:
    diameter: float             # m
    length: float               # m, embedded length
    material: PileMaterial
    top_elevation: float = 0.0  # m above ground

    def __post_init__(self):
        if not 0.2 <= self.diameter <= 3.0:
            raise ValueError(f"Pile diameter must be within [0.2, 3.0] m, got {self.diameter}")
        if not 3.0 <= self.length <= 50.0:
            raise ValueError(f"Pile length must be within [3, 50] m, got {self.length}")
        if not self.top_elevation >= 0:
            raise ValueError(f"Pile top elevation must be >= 0 m, got {self.top_elevation}")

    @property
    def radius(self) -> float:
        return self.diameter / 2

    @property
    def tip_area(self) -> float:
        """Gross tip area (m^2) for end bearing."""
        return math.pi * self.radius**2

    @property
    def perimeter(self) -> float:
        """Shaft perimeter (m) for skin friction."""
        return math.pi * self.diameter

    @property
    def section_type(self) -> PileSection:
        return self.material.section_type

    @property
    def cross_sectional_area(self) -> float:
        """Structural area (m^2), net of the bore for tubular piles."""
        return section_area(self.diameter, self.material.wall_thickness)

    @property
    def moment_of_inertia(self) -> float:
        """Second moment of area (m^4)."""
        return section_inertia(self.diameter, self.material.wall_thickness)

    @property
    def flexural_rigidity(self) -> float:
        """EI (kN-m^2); elasticity converted MPa -> kPa."""
        return self.material.elasticity * 1000.0 * self.moment_of_inertia

    @property
    def total_length(self) -> float:
        """Embedded length plus stick-up above ground (m)."""
        return self.length + self.top_elevation

    @property
    def slenderness(self) -> float:
        return self.length / self.diameter

    def with_dimensions(self, diameter: float, length: float) -> PileSpec:
        return replace(self, diameter=diameter, length=length)
