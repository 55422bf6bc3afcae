# MIT License
"""Scenario production simulator.

This module implements the yearly dynamics of a mineral extraction project
under competing value chains.  Each year the extracted volume follows the
environmental drivers and a seasonal modulation; the scenario then turns
that volume into revenue, cost, jobs, technological rent and footprint.
The outputs of :func:`simulate_scenario` feed the indicator aggregation.

Scenarios are members of :class:`ScenarioKind`, each one owning the strategy
that prices its volume.  A new value chain is a new strategy class and a new
enum member.
"""

from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict

from .environment import EnvironmentalFactorBundle
from .exceptions import ConfigurationError
from .params import AnalysisConfig, IndustrializationParams

logger = logging.getLogger(__name__)

SEASONAL_PERIOD_YEARS = 3


class ScenarioYearRecord(BaseModel):
    """Outcome of one scenario in one year."""

    model_config = ConfigDict(frozen=True)

    scenario: str
    year: int
    base_extraction: float
    extracted_volume: float
    learning_factor: float
    revenue: float
    cost: float
    profit: float
    jobs: float
    tech_rent: float
    value_added: float
    water_consumed: float
    co2_emitted: float
    environmental_impact: float


class ScenarioStrategy:
    """Prices the extracted volume of one value chain."""

    key = ""

    def learning_factor(self, year: int, config: AnalysisConfig) -> float:
        return 0.0

    def economics(self, volume: float, year: int, config: AnalysisConfig) -> Dict[str, float]:
        """Return revenue, cost, jobs, tech_rent and value_added for ``volume``."""
        raise NotImplementedError

    def co2_per_unit(self, config: AnalysisConfig) -> float:
        raise NotImplementedError


class RawMaterialExport(ScenarioStrategy):
    """Export of the unprocessed carbonate."""

    key = "raw-material"

    def economics(self, volume, year, config):
        revenue = volume * config.market.raw_price
        cost = volume * config.market.extraction_cost
        return dict(
            revenue=revenue,
            cost=cost,
            jobs=volume * config.labor.jobs_per_unit_raw,
            tech_rent=1.0,
            value_added=revenue - cost,
        )

    def co2_per_unit(self, config):
        return config.impact.co2_per_unit_raw


class Industrialization(ScenarioStrategy):
    """Local manufacturing with a linear learning ramp."""

    key = "industrialization"

    def learning_factor(self, year, config):
        return min(1.0, (year - 1) / config.industrialization.ramp_years)

    def economics(self, volume, year, config):
        ip = config.industrialization
        lf = self.learning_factor(year, config)
        scale = 0.5 + 0.5 * lf
        revenue = volume * config.market.industrial_price * scale
        cost = (
            volume * config.market.extraction_cost * config.market.industrial_cost_multiplier
            + annual_investment(lf, ip)
        )
        return dict(
            revenue=revenue,
            cost=cost,
            jobs=volume * config.labor.jobs_per_unit_industrial * scale,
            tech_rent=1.0 + ip.technology_gain * lf,
            value_added=(revenue - cost) * ip.value_added_multiplier,
        )

    def co2_per_unit(self, config):
        return config.impact.co2_per_unit_industrial


class ScenarioKind(Enum):
    RAW_MATERIAL = RawMaterialExport()
    INDUSTRIALIZATION = Industrialization()

    @property
    def strategy(self) -> ScenarioStrategy:
        return self.value

    @property
    def key(self) -> str:
        return self.value.key

    @classmethod
    def from_key(cls, key: str) -> "ScenarioKind":
        for kind in cls:
            if kind.key == key:
                return kind
        raise ConfigurationError("scenario", key, f"expected one of {[k.key for k in cls]}")


def annual_investment(learning_factor: float, ip: IndustrializationParams) -> float:
    """Capital instalment of a year; it shrinks as the learning factor grows."""
    return ip.investment / ip.investment_years * (1.0 - ip.investment_taper * learning_factor)


def seasonal_modulation(year: int, amplitude: float) -> float:
    """Multiplier 1 + amplitude·sin((year−1)·π/3) of the extraction in ``year``."""
    return 1.0 + amplitude * math.sin((year - 1) * math.pi / SEASONAL_PERIOD_YEARS)


def check_production_config(config: AnalysisConfig) -> None:
    """Reject configurations the simulator cannot run.

    Raises
    ------
    ConfigurationError
        If capacity <= 0, concentration is outside (0, 1] or
        ramp_years <= 0.
    """
    ext = config.extraction
    if not ext.capacity > 0:
        raise ConfigurationError("extraction.capacity", ext.capacity, "must be positive")
    if not 0 < ext.concentration <= 1:
        raise ConfigurationError("extraction.concentration", ext.concentration, "must lie in (0, 1]")
    if not config.industrialization.ramp_years > 0:
        raise ConfigurationError(
            "industrialization.ramp_years", config.industrialization.ramp_years, "must be positive"
        )
    if config.years < 1:
        raise ConfigurationError("years", config.years, "at least one year is required")


def production_step(
    year: int,
    kind: ScenarioKind,
    config: AnalysisConfig,
    bundle: EnvironmentalFactorBundle,
) -> ScenarioYearRecord:
    """Compute the record of ``kind`` in ``year`` (1-based)."""
    ext = config.extraction
    base_extraction = ext.capacity * bundle.base_factor * seasonal_modulation(year, ext.seasonal_amplitude)
    volume = base_extraction * ext.concentration * ext.extraction_efficiency

    strategy = kind.strategy
    econ = strategy.economics(volume, year, config)
    water = volume * config.impact.water_per_unit
    co2 = volume * strategy.co2_per_unit(config)
    return ScenarioYearRecord(
        scenario=kind.key,
        year=year,
        base_extraction=base_extraction,
        extracted_volume=volume,
        learning_factor=strategy.learning_factor(year, config),
        revenue=econ["revenue"],
        cost=econ["cost"],
        profit=econ["revenue"] - econ["cost"],
        jobs=econ["jobs"],
        tech_rent=econ["tech_rent"],
        value_added=econ["value_added"],
        water_consumed=water,
        co2_emitted=co2,
        environmental_impact=water * config.impact.water_impact_weight + co2 * config.impact.co2_impact_weight,
    )


def simulate_scenario(
    kind: ScenarioKind,
    config: AnalysisConfig,
    bundle: EnvironmentalFactorBundle,
) -> List[ScenarioYearRecord]:
    """Run ``kind`` for years 1..config.years, in ascending order."""
    check_production_config(config)
    logger.info("Running scenario %s over %d years", kind.key, config.years)
    return [production_step(int(y), kind, config, bundle) for y in np.arange(1, config.years + 1)]


def simulate_all(
    config: AnalysisConfig,
    bundle: EnvironmentalFactorBundle,
    kinds: Optional[Iterable[ScenarioKind]] = None,
) -> Dict[ScenarioKind, List[ScenarioYearRecord]]:
    """Run every scenario independently; configuration is checked once up front."""
    check_production_config(config)
    kinds = list(ScenarioKind) if kinds is None else list(kinds)
    return {kind: simulate_scenario(kind, config, bundle) for kind in kinds}


def scenario_table(records: List[ScenarioYearRecord]) -> pd.DataFrame:
    """Year-indexed table of one scenario with cumulative profit and volume."""
    df = pd.DataFrame([r.model_dump() for r in records])
    if not df.empty:
        df["cum_profit"] = df["profit"].cumsum()
        df["cum_volume"] = df["extracted_volume"].cumsum()
    logger.debug("scenario table:\n%s", df.head())
    return df
