"""Core package for natural-resource bioeconomic modelling.

This package contains the deterministic models (logistic yield optimum,
forest rotation sweep, scenario production and basin water allocation),
the aggregation of yearly records into indicators, sustainability indices and the policy
recommendation built on them.

Each submodule exposes pure functions that accept typed parameter models
and return pydantic results or pandas DataFrames.  The high‑level
`run_analysis` helper in `pipeline.py` composes these functions into a full
report; `run_analysis_async` awaits the environmental statistics first.
"""

from .params import (
    AnalysisConfig,
    ResourceParameterSet,
    RotationParams,
    EnvironmentParams,
    ExtractionParams,
    MarketParams,
    IndustrializationParams,
    LaborParams,
    ImpactParams,
    IndexScales,
    RecommendationThresholds,
    WaterAllocationParams,
    FISHERY_SPECIES,
)
from .exceptions import BioeconError, ConfigurationError, EmptyScenarioError, MissingExternalData
from .environment import EnvironmentalStatistics, EnvironmentalFactorBundle, StaticSource, normalize_environment, fetch_environment
from .sim_1_fishery import optimal_fishery, fishery_table, classify_productivity, estimate_forest_stock
from .sim_2_forestry import optimal_rotation
from .sim_3_production import ScenarioKind, simulate_scenario, simulate_all
from .sim_4_water import water_balance, classify_balance, optimal_allocation
from .aggregate import compute_indicators
from .sustainability import sustainability_index
from .recommendation import PolicyTier, recommend
from .pipeline import AnalysisReport, run_analysis, run_analysis_async
from .utils import load_config

__all__ = [
    "AnalysisConfig",
    "ResourceParameterSet",
    "RotationParams",
    "EnvironmentParams",
    "ExtractionParams",
    "MarketParams",
    "IndustrializationParams",
    "LaborParams",
    "ImpactParams",
    "IndexScales",
    "RecommendationThresholds",
    "WaterAllocationParams",
    "FISHERY_SPECIES",
    "BioeconError",
    "ConfigurationError",
    "EmptyScenarioError",
    "MissingExternalData",
    "EnvironmentalStatistics",
    "EnvironmentalFactorBundle",
    "StaticSource",
    "normalize_environment",
    "fetch_environment",
    "optimal_fishery",
    "fishery_table",
    "classify_productivity",
    "estimate_forest_stock",
    "optimal_rotation",
    "ScenarioKind",
    "simulate_scenario",
    "simulate_all",
    "water_balance",
    "classify_balance",
    "optimal_allocation",
    "compute_indicators",
    "sustainability_index",
    "PolicyTier",
    "recommend",
    "AnalysisReport",
    "run_analysis",
    "run_analysis_async",
    "load_config",
]
