"""Preliminary pile design calculations: axial, structural, lateral, deflection."""

from .axial import AxialResult, alpha_method, axial_capacity, beta_method
from .deflection import DeflectionProfile, pile_deflection_profile
from .design import PileDesignResult, run_pile_design
from .lateral import LateralResult, lateral_capacity
from .loads import SAFETY_FACTORS, LoadingInput, SafetyFactors
from .optimization import PileRecommendation, recommend_pile_dimensions
from .pile import PILE_MATERIALS, PileMaterial, PileSpec, blend_materials, get_material
from .soil import SOIL_TYPES, SoilLayer, SoilProfile, SoilType, build_soil_layer
from .structural import StructuralResult, check_structural_capacity
