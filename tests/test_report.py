import pytest

from pilecalc.design import run_pile_design
from pilecalc.loads import LoadingInput
from pilecalc.report import (
    GENERAL_ASSUMPTIONS,
    assumptions_table,
    calculation_steps_table,
    lateral_details_table,
    profile_table,
    recommendations_table,
    soil_profile_table,
    summary_table,
    water_level_text,
)


@pytest.fixture
def design(layered_profile, concrete_pile):
    return run_pile_design(layered_profile, concrete_pile, LoadingInput(300.0, water_table_depth=5.0))


def test_summary_table(design):
    table = summary_table(design)
    assert list(table.columns) == ["Item", "Value"]
    values = dict(zip(table["Item"], table["Value"]))
    assert values["Calculation Method"] == "Beta Method (Effective Stress)"
    assert values["Water Level"] == "5.00 m below ground"
    assert values["Structural Adequacy"] == "ADEQUATE"


def test_soil_profile_table(layered_profile):
    table = soil_profile_table(layered_profile)
    assert len(table) == 3
    assert table["Bottom Depth (m)"].tolist() == [3.0, 8.0, 18.0]
    assert table["Behavior"].tolist() == ["granular", "granular", "cohesive"]


def test_calculation_steps_end_with_pile_tip(design):
    table = calculation_steps_table(design)
    assert len(table) == 4
    assert table["Layer Depth"].iloc[-1] == "15.0m (Pile Tip)"


def test_lateral_details_table(design):
    table = lateral_details_table(design)
    assert len(table) == len(design.lateral.steps)
    assert list(table.columns) == ["Description", "Formula/Calculation", "Result/Value", "Notes"]


def test_recommendations_table(design):
    table = recommendations_table(design.recommendations)
    assert len(table) == len(design.recommendations)
    assert table["Option"].iloc[0] == "Option 1"
    assert recommendations_table([]).empty


def test_assumptions_table(design):
    table = assumptions_table(design)
    general = table[table["Category"] == "General"]
    assert general["Assumption"].tolist() == GENERAL_ASSUMPTIONS
    assert "Bearing Capacity: 2.5" in table["Assumption"].tolist()


def test_profile_table(design):
    table = profile_table(design)
    assert len(table) == design.deflection.points
    assert table["Deflection (mm)"].iloc[1] == pytest.approx(design.deflection.deflection[1] * 1000)


@pytest.mark.parametrize("depth, text", [
    (-1.5, "1.50 m above ground"),
    (0.0, "At ground level"),
    (2.0, "2.00 m below ground"),
])
def test_water_level_text(depth, text):
    assert water_level_text(depth) == text
