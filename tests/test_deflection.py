import numpy as np
import pytest

from pilecalc import deflection
from pilecalc.deflection import (
    SUBMERGED_DEFLECTION_FACTOR,
    average_soil_modulus,
    characteristic_length,
    pile_deflection_profile,
    soil_modulus,
)
from pilecalc.pile import PileSpec
from pilecalc.soil import SoilProfile, SoilType, build_soil_layer


def test_point_count_and_ordering(clay_profile, concrete, concrete_pile):
    result = pile_deflection_profile(clay_profile, concrete_pile, 0.0, 0.0, 50.0)
    assert result.points == 150
    assert result.depth[0] == 0.0
    assert result.depth[-1] == pytest.approx(15.0)
    assert np.all(np.diff(result.depth) > 0)

    short = PileSpec(diameter=0.6, length=5.0, material=concrete, top_elevation=1.0)
    result = pile_deflection_profile(clay_profile, short, 0.0, 0.0, 50.0)
    assert result.points == 100
    assert result.depth[-1] == pytest.approx(6.0)
    assert result.depth_below_ground[0] == pytest.approx(-1.0)


def test_maxima_are_absolute_maxima(clay_profile, concrete_pile):
    result = pile_deflection_profile(clay_profile, concrete_pile, 0.0, 0.0, 80.0)
    assert result.max_deflection == pytest.approx(np.max(np.abs(result.deflection)))
    assert result.max_bending_moment == pytest.approx(np.max(np.abs(result.bending_moment)))
    assert result.max_shear_force == pytest.approx(np.max(np.abs(result.shear_force)))


def test_zero_load_gives_zero_response(sand_profile, concrete_pile):
    result = pile_deflection_profile(sand_profile, concrete_pile, 5.0, 0.0, 0.0)
    assert result.max_deflection == 0.0
    assert result.max_bending_moment == 0.0
    assert result.max_shear_force == 0.0


def test_stiffness_and_soil_modulus(clay_profile, concrete_pile):
    result = pile_deflection_profile(clay_profile, concrete_pile, 0.0, 0.0, 50.0)
    assert result.pile_stiffness == pytest.approx(concrete_pile.flexural_rigidity)
    assert result.average_soil_modulus == pytest.approx(200.0 * 50.0)
    assert result.characteristic_length == pytest.approx(
        characteristic_length(concrete_pile.flexural_rigidity, 0.6, 10000.0)
    )


def test_soil_modulus_adjustments():
    medium = build_soil_layer(SoilType.SAND_MEDIUM, 5.0)
    loose = build_soil_layer(SoilType.SAND_LOOSE, 5.0, friction_angle=33.0)
    assert soil_modulus(medium, 0.0) == pytest.approx(10000.0)
    assert soil_modulus(loose, 2.0) == pytest.approx(0.6 * soil_modulus(medium, 2.0))
    assert soil_modulus(build_soil_layer(SoilType.CLAY_SOFT, 1.0), 1.0) == pytest.approx(0.7 * 200 * 20)


def test_average_modulus_weights_by_thickness(layered_profile):
    k = average_soil_modulus(layered_profile, 10.0)
    expected = (
        soil_modulus(layered_profile.layers[0], 1.5) * 3
        + soil_modulus(layered_profile.layers[1], 5.5) * 5
        + soil_modulus(layered_profile.layers[2], 9.0) * 2
    ) / 10.0
    assert k == pytest.approx(expected)


def test_series_are_read_only(clay_profile, concrete_pile):
    result = pile_deflection_profile(clay_profile, concrete_pile, 0.0, 0.0, 50.0)
    with pytest.raises(ValueError):
        result.deflection[0] = 1.0
    series = result.series("bending_moment")
    assert len(series) == result.points
    assert series[0]["depth"] == 0.0


def test_submerged_soil_increases_deflection(sand_profile, concrete_pile):
    dry = pile_deflection_profile(sand_profile, concrete_pile, 100.0, 0.0, 50.0)
    wet = pile_deflection_profile(sand_profile, concrete_pile, -1.0, 0.0, 50.0)
    below = dry.depth_below_ground > 0
    np.testing.assert_allclose(
        wet.deflection[below], SUBMERGED_DEFLECTION_FACTOR * dry.deflection[below],
    )
    np.testing.assert_allclose(wet.bending_moment, dry.bending_moment)


def test_stick_up_carries_full_shear(clay_profile, concrete):
    pile = PileSpec(diameter=0.6, length=12.0, material=concrete, top_elevation=2.0)
    result = pile_deflection_profile(clay_profile, pile, 0.0, 2.0, 40.0)
    above = result.depth_below_ground <= 0
    assert above.any()
    np.testing.assert_allclose(result.shear_force[above], 40.0)


def test_deflection_decays_with_depth(clay_profile, concrete_pile):
    result = pile_deflection_profile(clay_profile, concrete_pile, 0.0, 0.0, 50.0)
    assert result.deflection[1] > 0
    assert abs(result.deflection[-1]) < 0.2 * result.deflection[1]


def test_local_modulus_ratio_scales_and_clips(concrete_pile, monkeypatch):
    profile = SoilProfile(layers=(
        build_soil_layer(SoilType.CLAY_SOFT, 2.0),
        build_soil_layer(SoilType.CLAY_STIFF, 18.0),
    ))
    scaled = pile_deflection_profile(profile, concrete_pile, 0.0, 0.0, 50.0)
    monkeypatch.setattr(deflection, "MODULUS_RATIO_BOUNDS", (1.0, 1.0))
    plain = pile_deflection_profile(profile, concrete_pile, 0.0, 0.0, 50.0)

    k_avg = scaled.average_soil_modulus
    k_stiff = soil_modulus(profile.layers[1], 10.0)
    # Soft layer: k_avg / k is about 8, clipped to the upper bound
    assert scaled.deflection[1] == pytest.approx(2.0 * plain.deflection[1])
    assert scaled.deflection[-1] == pytest.approx(k_avg / k_stiff * plain.deflection[-1])
