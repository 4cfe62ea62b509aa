import pytest

from pilecalc.pile import PileMaterial, PileSpec, get_material
from pilecalc.soil import SoilProfile, SoilType, build_soil_layer


@pytest.fixture
def layered_profile():
    """Medium sand over dense sand over medium clay (18 m)."""
    return SoilProfile(layers=(
        build_soil_layer(SoilType.SAND_MEDIUM, 3.0),
        build_soil_layer(SoilType.SAND_DENSE, 5.0),
        build_soil_layer(SoilType.CLAY_MEDIUM, 10.0),
    ))


@pytest.fixture
def clay_profile():
    return SoilProfile(layers=(build_soil_layer(SoilType.CLAY_MEDIUM, 20.0),))


@pytest.fixture
def sand_profile():
    return SoilProfile(layers=(build_soil_layer(SoilType.SAND_MEDIUM, 40.0),))


@pytest.fixture
def concrete():
    return get_material("concrete")


@pytest.fixture
def concrete_30():
    """Concrete with 30 MPa yield strength."""
    return PileMaterial(
        id="concrete", name="Concrete", yield_strength=30.0, elasticity=30000.0, unit_weight=25.0,
    )


@pytest.fixture
def concrete_pile(concrete):
    return PileSpec(diameter=0.6, length=15.0, material=concrete)
