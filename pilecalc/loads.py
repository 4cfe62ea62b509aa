"""Loading inputs and safety factor configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .pile import PileSpec


LOADING_KINDS = ("axial", "lateral")


@dataclass(frozen=True)
class SafetyFactors:
    """Factors of safety applied to ultimate capacities."""
    bearing: float = 2.5
    structural: float = 1.67
    lateral: float = 1.5

    def __post_init__(self):
        for name in ("bearing", "structural", "lateral"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value >= 1.0):
                raise ValueError(f"Safety factor '{name}' must be >= 1.0, got {value}")

    def override(self, **changes) -> SafetyFactors:
        """Copy with selected factors replaced; None values keep the default."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


SAFETY_FACTORS = SafetyFactors()


@dataclass(frozen=True)
class LoadingInput:
    """Design demand and site conditions."""
    required_capacity: float            # kN
    water_table_depth: float = 0.0      # m below ground (negative = above ground)
    force_application_height: float = 0.0   # m above ground
    loading: str = "axial"              # "axial" or "lateral"

    def __post_init__(self):
        if not (math.isfinite(self.required_capacity) and self.required_capacity > 0):
            raise ValueError(
                f"Required capacity must be greater than zero, got {self.required_capacity}"
            )
        if not (math.isfinite(self.force_application_height) and self.force_application_height >= 0):
            raise ValueError(
                f"Force application height must be >= 0 m, got {self.force_application_height}"
            )
        if not math.isfinite(self.water_table_depth):
            raise ValueError("Water table depth must be a finite number")
        if self.loading not in LOADING_KINDS:
            raise ValueError(f"Loading must be one of {LOADING_KINDS}, got '{self.loading}'")


def check_force_height(pile: PileSpec, loading: LoadingInput) -> None:
    """The lateral force acts on the pile: at or below its top."""
    if loading.force_application_height > pile.top_elevation:
        raise ValueError(
            f"Force application height {loading.force_application_height} m is above "
            f"the pile top ({pile.top_elevation} m above ground)"
        )
