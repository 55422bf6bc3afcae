# MIT License
"""Aggregation utilities for the scenario simulator.

Functions in this module reduce the per-year records of a scenario to one
set of summary indicators (totals, means and unit profit) and lay several
scenarios side by side in a single table.  Indicators are always recomputed
from the full record sequence.
"""

from __future__ import annotations
import logging
from typing import Mapping, Optional, Sequence

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .exceptions import EmptyScenarioError
from .sim_3_production import ScenarioYearRecord
from .utils import safe_ratio

logger = logging.getLogger(__name__)


class IndicatorSet(BaseModel):
    """Summary indicators of one scenario.

    ``profit_per_unit`` is ``None`` when no volume was extracted.
    """

    model_config = ConfigDict(frozen=True)

    scenario: str
    years: int
    total_profit: float
    total_jobs: float
    avg_tech_rent: float
    total_volume: float
    total_env_impact: float
    profit_per_unit: Optional[float]
    total_water: float
    total_co2: float
    total_value_added: float


def compute_indicators(records: Sequence[ScenarioYearRecord]) -> IndicatorSet:
    """Reduce an ordered record sequence to an :class:`IndicatorSet`.

    Parameters
    ----------
    records:
        Records of a single scenario, ascending by year.

    Returns
    -------
    IndicatorSet
        Sums of profit, jobs, volume, impact, water, CO₂ and value added, the
        mean technological rent and the guarded profit per unit.
    """
    if not records:
        raise EmptyScenarioError("compute_indicators")
    total_profit = sum(r.profit for r in records)
    total_volume = sum(r.extracted_volume for r in records)
    indicators = IndicatorSet(
        scenario=records[0].scenario,
        years=len(records),
        total_profit=total_profit,
        total_jobs=sum(r.jobs for r in records),
        avg_tech_rent=sum(r.tech_rent for r in records) / len(records),
        total_volume=total_volume,
        total_env_impact=sum(r.environmental_impact for r in records),
        profit_per_unit=safe_ratio(total_profit, total_volume),
        total_water=sum(r.water_consumed for r in records),
        total_co2=sum(r.co2_emitted for r in records),
        total_value_added=sum(r.value_added for r in records),
    )
    if indicators.profit_per_unit is None:
        logger.warning("Scenario %s extracted no volume; profit per unit not applicable", indicators.scenario)
    return indicators


def indicator_table(indicators: Mapping[str, IndicatorSet]) -> pd.DataFrame:
    """One row per scenario, in mapping order."""
    return pd.DataFrame([ind.model_dump() for ind in indicators.values()])
