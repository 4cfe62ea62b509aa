import math

import numpy as np
import pytest

from pilecalc.pile import PileMaterial, PileSpec, make_pipe_material
from pilecalc.structural import (
    NOTE_ADEQUATE,
    NOTE_GOOD_MARGIN,
    NOTE_INADEQUATE,
    NOTE_INVALID,
    check_bending_capacity,
    check_structural_capacity,
    structural_adequacy_note,
)


def test_solid_concrete_check(concrete_30):
    pile = PileSpec(diameter=0.6, length=10.0, material=concrete_30)
    result = check_structural_capacity(pile, 2500.0, safety_factor=2.0)

    assert result.cross_sectional_area == pytest.approx(0.282743, rel=1e-5)
    assert result.compressive_stress == pytest.approx(8.8419, rel=1e-4)
    assert result.allowable_stress == pytest.approx(15.0)
    assert result.utilization_ratio == pytest.approx(0.5895, rel=1e-3)
    assert result.is_adequate
    assert result.notes == NOTE_GOOD_MARGIN


def test_default_structural_factor(concrete_pile):
    result = check_structural_capacity(concrete_pile, 1000.0)
    assert result.allowable_stress == pytest.approx(25.0 / 1.67)


def test_tubular_section_uses_net_area():
    pile = PileSpec(diameter=0.6, length=12.0, material=make_pipe_material(0.02))
    result = check_structural_capacity(pile, 3000.0)
    net = math.pi * (0.3**2 - 0.28**2)
    assert result.cross_sectional_area == pytest.approx(net)
    assert result.compressive_stress == pytest.approx(3000.0 / net / 1000.0)


def test_material_override(concrete_pile, concrete_30):
    result = check_structural_capacity(concrete_pile, 1000.0, safety_factor=2.0, material=concrete_30)
    assert result.allowable_stress == pytest.approx(15.0)


def test_overloaded_pile_is_inadequate(concrete_pile):
    result = check_structural_capacity(concrete_pile, 1e5)
    assert result.utilization_ratio > 1.0
    assert not result.is_adequate
    assert result.notes == NOTE_INADEQUATE


@pytest.mark.parametrize("load, fs", [
    (0.0, 1.67),
    (-10.0, 1.67),
    (float("nan"), 1.67),
    (100.0, 0.0),
])
def test_invalid_inputs_give_inadequate_result(concrete_pile, load, fs):
    result = check_structural_capacity(concrete_pile, load, safety_factor=fs)
    assert not result.is_adequate
    assert result.notes == NOTE_INVALID
    assert not math.isnan(result.utilization_ratio)


def test_zero_yield_strength_never_produces_nan(concrete_pile):
    weak = PileMaterial(id="weak", name="Weak", yield_strength=0.0, elasticity=1000.0, unit_weight=10.0)
    result = check_structural_capacity(concrete_pile, 10.0, material=weak)
    assert math.isfinite(result.utilization_ratio)
    assert not result.is_adequate
    assert result.notes == NOTE_INVALID


@pytest.mark.parametrize("load", [np.int64(2500), np.float32(2500.0), np.float64(2500.0)])
def test_numpy_scalar_loads_are_accepted(concrete_30, load):
    pile = PileSpec(diameter=0.6, length=10.0, material=concrete_30)
    result = check_structural_capacity(pile, load, safety_factor=2.0)
    assert result.compressive_stress == pytest.approx(8.8419, rel=1e-4)
    assert result.is_adequate
    assert result.notes == NOTE_GOOD_MARGIN


@pytest.mark.parametrize("ratio, note", [
    (0.0, NOTE_GOOD_MARGIN),
    (0.7, NOTE_GOOD_MARGIN),
    (0.70001, NOTE_ADEQUATE),
    (1.0, NOTE_ADEQUATE),
    (1.0001, NOTE_INADEQUATE),
])
def test_adequacy_note_bands(ratio, note):
    assert structural_adequacy_note(ratio) == note


def test_bending_stress(concrete_pile):
    result = check_bending_capacity(concrete_pile, 50.0)
    I = math.pi * 0.3**4 / 4
    assert result.moment_of_inertia == pytest.approx(I)
    assert result.bending_stress == pytest.approx(50.0 * 0.3 / I / 1000.0)
    assert result.allowable_stress == pytest.approx(25.0 / 1.67)
    assert result.is_adequate

    assert check_bending_capacity(concrete_pile, -50.0).bending_stress == result.bending_stress
