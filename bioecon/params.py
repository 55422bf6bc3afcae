# MIT License
"""Parameter models for the bioeconomic engine.

All parameter models are defined using [`pydantic.BaseModel`](https://docs.pydantic.dev/)
to provide type checking, validation and JSON serialisation.  Each model
encapsulates the constants for one stage of the analysis and is frozen, so
a configuration value can be threaded through every component without any
of them mutating it.

The top‑level :class:`AnalysisConfig` holds a collection of nested parameter
objects.  This allows a whole run to be restored from a single JSON, YAML or
TOML document (see :func:`bioecon.utils.load_config`).
"""
from __future__ import annotations
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic import field_validator, model_validator


class ResourceParameterSet(BaseModel):
    """Static economic and biological constants of one resource unit.

    Attributes
    ----------
    capacity:
        Carrying capacity K of the stock (tonnes).
    growth_rate:
        Intrinsic logistic growth rate r, strictly between 0 and 1.
    unit_price:
        Landed price per tonne (USD/t).
    unit_cost:
        Harvest cost per tonne (USD/t).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field("resource", description="Label of the stock (species, lot, ...)")
    capacity: float = Field(..., gt=0, description="Carrying capacity K (t)")
    growth_rate: float = Field(..., gt=0, lt=1, description="Intrinsic growth rate r (1/yr)")
    unit_price: float = Field(0.0, ge=0, description="Price per tonne (USD/t)")
    unit_cost: float = Field(0.0, ge=0, description="Cost per tonne (USD/t)")


# Lake fishery presets (Karachi, Ispi, Pejerrey)
FISHERY_SPECIES: Dict[str, ResourceParameterSet] = {
    "Karachi": ResourceParameterSet(name="Karachi", capacity=12000, growth_rate=0.45, unit_price=2800, unit_cost=1200),
    "Ispi": ResourceParameterSet(name="Ispi", capacity=8000, growth_rate=0.55, unit_price=2200, unit_cost=900),
    "Pejerrey": ResourceParameterSet(name="Pejerrey", capacity=6000, growth_rate=0.35, unit_price=3500, unit_cost=1500),
}


class RotationParams(BaseModel):
    """Stumpage economics and growth used by the rotation sweep.

    Volumes are m³/ha, prices and costs USD/m³.
    """

    model_config = ConfigDict(frozen=True)

    price_per_volume: float = Field(180.0, ge=0, description="Timber price (USD/m³)")
    harvest_cost_per_volume: float = Field(85.0, ge=0, description="Harvest cost (USD/m³)")
    discount_rate: float = Field(0.07, gt=0, lt=1, description="Annual discount rate (fraction)")
    growth_rate: float = Field(0.025, description="Exponential volume growth rate g (1/yr)")
    initial_volume: float = Field(150.0, gt=0, description="Standing volume V0 at age 0 (m³/ha)")
    ages: List[int] = Field(
        default_factory=lambda: list(range(10, 65, 5)),
        description="Candidate harvest ages, evaluated in the given order (years)."
    )

    @field_validator("ages")
    @classmethod
    def ages_positive(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("at least one candidate age is required")
        if any(a <= 0 for a in v):
            raise ValueError("candidate ages must be positive")
        return v


class EnvironmentParams(BaseModel):
    """Normalisation of raw platform statistics into [0, 1] factors.

    The offsets and reference values map a spatial mean onto a unit scale;
    the fallback values apply when the platform reports no data.
    """

    model_config = ConfigDict(frozen=True)

    min_bound: float = Field(0.0, ge=0.0, le=1.0, description="Lower clamp of every factor")
    max_bound: float = Field(1.0, ge=0.0, le=1.0, description="Upper clamp of every factor")
    water_index_offset: float = Field(0.5, description="Added to NDWI to centre it on [0, 1]")
    temperature_reference_c: float = Field(30.0, gt=0, description="Temperature mapped to factor 1.0 (°C)")
    evaporation_reference: float = Field(300.0, gt=0, description="Evapotranspiration mapped to factor 1.0")
    fallback_water_index_factor: float = Field(0.5, ge=0.0, le=1.0)
    fallback_temperature_factor: float = Field(0.5, ge=0.0, le=1.0)
    fallback_evaporation_factor: float = Field(0.7, ge=0.0, le=1.0)
    fetch_timeout_s: float = Field(30.0, gt=0, description="Seconds to wait for the platform before falling back")

    @model_validator(mode="after")
    def bounds_ordered(self):
        if self.min_bound > self.max_bound:
            raise ValueError("min_bound must not exceed max_bound")
        return self


class ExtractionParams(BaseModel):
    """Physical extraction capacity of the deposit."""

    model_config = ConfigDict(frozen=True)

    capacity: float = Field(100_000.0, gt=0, description="Brine processing capacity (t/yr)")
    concentration: float = Field(0.15, gt=0, le=1, description="Mineral concentration of the feed (0–1]")
    extraction_efficiency: float = Field(0.8, gt=0, le=1, description="Recovery efficiency (0–1]")
    seasonal_amplitude: float = Field(0.1, ge=0, le=1, description="Amplitude of the seasonal modulation")


class MarketParams(BaseModel):
    """Prices and unit costs of both value chains (USD/t)."""

    model_config = ConfigDict(frozen=True)

    raw_price: float = Field(20_000.0, ge=0, description="Carbonate export price (USD/t)")
    industrial_price: float = Field(150_000.0, ge=0, description="Battery-grade product price (USD/t)")
    extraction_cost: float = Field(5_000.0, ge=0, description="Extraction cost (USD/t)")
    industrial_cost_multiplier: float = Field(1.5, ge=0, description="Cost uplift of local processing")


class IndustrializationParams(BaseModel):
    """Learning curve and capital programme of the industrial scenario."""

    model_config = ConfigDict(frozen=True)

    ramp_years: float = Field(5.0, gt=0, description="Years until the learning factor reaches 1")
    investment: float = Field(500_000_000.0, ge=0, description="Total industrialisation investment (USD)")
    investment_years: int = Field(10, ge=1, le=100, description="Years over which the investment is spread")
    investment_taper: float = Field(
        0.5, ge=0, le=1,
        description="Share of the annual instalment released once learning is complete"
    )
    technology_gain: float = Field(2.0, ge=0, description="Technological rent gained at full learning")
    value_added_multiplier: float = Field(1.5, ge=0, description="Value added per unit of profit")


class LaborParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    jobs_per_unit_raw: float = Field(0.01, ge=0, description="Jobs per tonne exported raw")
    jobs_per_unit_industrial: float = Field(0.05, ge=0, description="Jobs per tonne processed locally")


class ImpactParams(BaseModel):
    """Water and carbon footprint per tonne and their impact weights."""

    model_config = ConfigDict(frozen=True)

    water_per_unit: float = Field(500.0, ge=0, description="Water consumed (m³/t)")
    co2_per_unit_raw: float = Field(5.0, ge=0, description="CO₂ emitted by raw export (t/t)")
    co2_per_unit_industrial: float = Field(8.0, ge=0, description="CO₂ emitted by industrial chain (t/t)")
    water_impact_weight: float = Field(0.001, ge=0)
    co2_impact_weight: float = Field(0.1, ge=0)


class IndexScales(BaseModel):
    """Reference denominators of the sustainability sub-indices.

    These are tunable defaults, not physical constants.
    """

    model_config = ConfigDict(frozen=True)

    economic: float = Field(5e9, gt=0, description="Total profit mapped to an economic index of 1")
    social: float = Field(1_000.0, gt=0, description="Total jobs mapped to a social index of 1")
    environmental: float = Field(50_000.0, gt=0, description="Total impact mapped to an environmental index of 0")
    technological: float = Field(3.0, gt=0, description="Mean tech rent mapped to a technological index of 1")


class RecommendationThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    strong: float = Field(0.15, description="Gap above which full industrialisation is advised")
    phased: float = Field(0.05, description="Gap above which a phased transition is advised")

    @model_validator(mode="after")
    def strong_above_phased(self):
        if self.strong < self.phased:
            raise ValueError("strong threshold must be >= phased threshold")
        return self


class WaterAllocationParams(BaseModel):
    """Sector demands, unit benefits and guaranteed minimums of a basin.

    Attributes
    ----------
    runoff_share:
        Share of precipitation lost to surface runoff in the water balance.
    demands:
        Annual demand per sector (million m³).
    benefits:
        Economic benefit per m³ delivered to each sector (USD).
    minimums:
        Allocation guaranteed to each sector before any surplus is shared
        (million m³).
    """

    model_config = ConfigDict(frozen=True)

    runoff_share: float = Field(0.3, ge=0, le=1, description="Runoff coefficient of the basin")
    demands: Dict[str, float] = Field(
        default_factory=lambda: {"Agricultura": 450.0, "Municipal": 120.0, "Industrial": 80.0, "Ambiental": 150.0}
    )
    benefits: Dict[str, float] = Field(
        default_factory=lambda: {"Agricultura": 0.8, "Municipal": 2.5, "Industrial": 5.0, "Ambiental": 1.2}
    )
    minimums: Dict[str, float] = Field(
        default_factory=lambda: {"Agricultura": 300.0, "Municipal": 100.0, "Industrial": 50.0, "Ambiental": 100.0}
    )

    @model_validator(mode="after")
    def sectors_consistent(self):
        sectors = list(self.demands)
        if not sectors:
            raise ValueError("at least one water sector is required")
        if set(self.benefits) != set(sectors) or set(self.minimums) != set(sectors):
            raise ValueError("benefits and minimums must name the same sectors as demands")
        for table in (self.demands, self.benefits, self.minimums):
            if any(v < 0 for v in table.values()):
                raise ValueError("sector values must be non-negative")
        if sum(self.benefits.values()) <= 0:
            raise ValueError("at least one sector must have a positive benefit")
        return self

    @property
    def sectors(self) -> List[str]:
        return list(self.demands)


class AnalysisConfig(BaseModel):
    """A complete set of parameters describing one analysis run.

    The configuration groups together all parameter objects.  This makes it
    straightforward to serialise and restore the entire state from a file.
    """

    model_config = ConfigDict(frozen=True)

    years: int = Field(10, ge=1, le=100, description="Number of simulated years.")
    environment: EnvironmentParams = Field(default_factory=EnvironmentParams)
    extraction: ExtractionParams = Field(default_factory=ExtractionParams)
    market: MarketParams = Field(default_factory=MarketParams)
    industrialization: IndustrializationParams = Field(default_factory=IndustrializationParams)
    labor: LaborParams = Field(default_factory=LaborParams)
    impact: ImpactParams = Field(default_factory=ImpactParams)
    scales: IndexScales = Field(default_factory=IndexScales)
    thresholds: RecommendationThresholds = Field(default_factory=RecommendationThresholds)
    rotation: RotationParams = Field(default_factory=RotationParams)
    water: WaterAllocationParams = Field(default_factory=WaterAllocationParams)
