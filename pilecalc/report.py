"""Tabular report data for spreadsheet / PDF exporters.

Builds pandas DataFrames from the calculation results. Writing files is left
to the caller.
"""

from __future__ import annotations

import pandas as pd

from .design import PileDesignResult
from .optimization import PileRecommendation
from .soil import SoilProfile


GENERAL_ASSUMPTIONS = [
    "Pile is assumed to be vertical with no installation deviation",
    "Ground is level with no slope effects",
    "No group effects are considered (single pile analysis)",
    "Static loading conditions are assumed",
    "Soil properties are assumed to be homogeneous within each layer",
    "Water table is assumed to be horizontal",
]


def water_level_text(water_table_depth: float) -> str:
    if water_table_depth < 0:
        return f"{abs(water_table_depth):.2f} m above ground"
    if water_table_depth == 0:
        return "At ground level"
    return f"{water_table_depth:.2f} m below ground"


def summary_table(result: PileDesignResult) -> pd.DataFrame:
    """Item / value summary of one design run."""
    ax = result.axial
    st = result.structural
    lat = result.lateral
    pile = result.pile
    rows = [
        ("Calculation Method", ax.method),
        ("Diameter", f"{pile.diameter:.2f} m"),
        ("Length", f"{pile.length:.2f} m"),
        ("Material", pile.material.name),
        ("Required Capacity", f"{result.loading.required_capacity:.2f} kN"),
        ("Total Ultimate Capacity", f"{ax.total_capacity:.2f} kN"),
        ("Skin Friction", f"{ax.skin_friction:.2f} kN"),
        ("End Bearing", f"{ax.end_bearing:.2f} kN"),
        ("Allowable Capacity", f"{ax.allowable_capacity:.2f} kN"),
        ("Safety Factor (Bearing)", f"{result.safety_factors.bearing}"),
        ("Compressive Stress", f"{st.compressive_stress:.2f} MPa"),
        ("Allowable Stress", f"{st.allowable_stress:.2f} MPa"),
        ("Utilization Ratio", f"{st.utilization_ratio * 100:.1f}%"),
        ("Structural Adequacy", "ADEQUATE" if st.is_adequate else "INADEQUATE"),
        ("Allowable Lateral Capacity", f"{lat.allowable_lateral_capacity:.2f} kN"),
        ("Lateral Calculation Method", lat.calculation_method),
        ("Force Application Height", f"{result.loading.force_application_height:.2f} m"),
        ("Water Level", water_level_text(result.loading.water_table_depth)),
        ("Max Deflection", f"{result.deflection.max_deflection * 1000:.3f} mm"),
        ("Max Bending Moment", f"{result.deflection.max_bending_moment:.2f} kN·m"),
        ("Max Shear Force", f"{result.deflection.max_shear_force:.2f} kN"),
    ]
    return pd.DataFrame(rows, columns=["Item", "Value"])


def soil_profile_table(profile: SoilProfile) -> pd.DataFrame:
    bottoms = profile.layer_bottoms
    rows = []
    for i, layer in enumerate(profile.layers):
        rows.append({
            "Layer": f"Layer {i + 1}",
            "Type": layer.name,
            "Behavior": layer.behavior.value,
            "Thickness (m)": layer.thickness,
            "Bottom Depth (m)": bottoms[i],
            "Friction Angle (°)": layer.friction_angle,
            "Cohesion (kPa)": layer.cohesion,
            "Unit Weight (kN/m³)": layer.unit_weight,
        })
    return pd.DataFrame(rows)


def calculation_steps_table(result: PileDesignResult) -> pd.DataFrame:
    rows = [
        {"Layer Depth": c["depth_range"], "Layer": c["layer"], "Description": c["description"]}
        for c in result.axial.layer_contributions
    ]
    return pd.DataFrame(rows, columns=["Layer Depth", "Layer", "Description"])


def lateral_details_table(result: PileDesignResult) -> pd.DataFrame:
    rows = []
    for step in result.lateral.steps:
        value = step["value"]
        rows.append({
            "Description": step["description"],
            "Formula/Calculation": step["formula"] or step["calculation"],
            "Result/Value": step["result"] or ("" if value is None else f"{value:.4g}"),
            "Notes": step["notes"],
        })
    return pd.DataFrame(rows, columns=["Description", "Formula/Calculation", "Result/Value", "Notes"])


def recommendations_table(recommendations: list[PileRecommendation]) -> pd.DataFrame:
    rows = [
        {
            "Option": f"Option {i + 1}",
            "Diameter (m)": rec.diameter,
            "Length (m)": rec.length,
            "Allowable Capacity (kN)": round(rec.allowable_capacity, 2),
            "Structural Utilization (%)": round(rec.utilization_ratio * 100, 1),
            "Efficiency (%)": round(rec.efficiency * 100, 1),
        }
        for i, rec in enumerate(recommendations)
    ]
    return pd.DataFrame(rows, columns=[
        "Option", "Diameter (m)", "Length (m)", "Allowable Capacity (kN)",
        "Structural Utilization (%)", "Efficiency (%)",
    ])


def assumptions_table(result: PileDesignResult) -> pd.DataFrame:
    rows = [("General", text) for text in GENERAL_ASSUMPTIONS]
    rows += [("Axial Capacity", text) for text in result.axial.assumptions]
    rows += [("Lateral Capacity", text) for text in result.lateral.assumptions]
    sf = result.safety_factors
    rows += [
        ("Safety Factors", f"Bearing Capacity: {sf.bearing}"),
        ("Safety Factors", f"Structural Capacity: {sf.structural}"),
        ("Safety Factors", f"Lateral Capacity: {sf.lateral}"),
    ]
    return pd.DataFrame(rows, columns=["Category", "Assumption"])


def profile_table(result: PileDesignResult) -> pd.DataFrame:
    """Deflection, moment and shear series, one row per depth."""
    d = result.deflection
    return pd.DataFrame({
        "Depth (m)": d.depth,
        "Depth Below Ground (m)": d.depth_below_ground,
        "Deflection (mm)": d.deflection * 1000.0,
        "Bending Moment (kN·m)": d.bending_moment,
        "Shear Force (kN)": d.shear_force,
    })
