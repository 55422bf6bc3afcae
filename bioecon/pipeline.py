# MIT License
"""End-to-end analysis run.

:func:`run_analysis` composes the production simulator, the indicator
aggregation, the sustainability indices and the recommendation into one
:class:`AnalysisReport`.  :func:`run_analysis_async` first awaits the
environmental statistics from the geospatial platform and then continues
with the same synchronous run.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .aggregate import IndicatorSet, compute_indicators, indicator_table
from .environment import EnvironmentalFactorBundle, EnvironmentalSource, fetch_environment
from .params import AnalysisConfig
from .recommendation import Recommendation, recommend, recommendation_table
from .sim_3_production import ScenarioKind, ScenarioYearRecord, scenario_table, simulate_all
from .sustainability import SustainabilityIndex, sustainability_index, sustainability_table
from .utils import config_hash

logger = logging.getLogger(__name__)


class AnalysisReport(BaseModel):
    """Everything one run produces, keyed by scenario key."""

    model_config = ConfigDict(frozen=True)

    config_hash: str
    environment: EnvironmentalFactorBundle
    records: Dict[str, List[ScenarioYearRecord]]
    indicators: Dict[str, IndicatorSet]
    indices: Dict[str, SustainabilityIndex]
    recommendation: Recommendation

    @property
    def degraded(self) -> bool:
        """True when fallback environmental factors were used."""
        return self.environment.degraded

    def tables(self) -> Dict[str, pd.DataFrame]:
        """Tabular outputs for the visualisation and export layer."""
        env = self.environment.model_dump()
        env["fallback_fields"] = ",".join(env["fallback_fields"])
        env["base_factor"] = self.environment.base_factor
        out = {"environment": pd.DataFrame([env])}
        for key, records in self.records.items():
            out[f"{key}_years"] = scenario_table(records)
        out["indicators"] = indicator_table(self.indicators)
        out["sustainability"] = sustainability_table(self.indices)
        out["recommendation"] = recommendation_table(self.recommendation)
        return out


def run_analysis(config: AnalysisConfig, bundle: EnvironmentalFactorBundle) -> AnalysisReport:
    """Run both scenarios and derive indicators, indices and a recommendation.

    Parameters
    ----------
    config:
        The full analysis configuration.
    bundle:
        Normalised environmental factors of the study area.

    Returns
    -------
    AnalysisReport
        The complete report.  ``report.degraded`` tells whether fallback
        environmental values were used.

    Raises
    ------
    ConfigurationError
        Before any year is simulated, if the configuration is invalid.
    """
    logger.info("Running analysis over %d years", config.years)
    runs = simulate_all(config, bundle)
    records = {kind.key: recs for kind, recs in runs.items()}
    indicators = {key: compute_indicators(recs) for key, recs in records.items()}
    indices = {key: sustainability_index(ind, config.scales) for key, ind in indicators.items()}
    raw = ScenarioKind.RAW_MATERIAL.key
    ind = ScenarioKind.INDUSTRIALIZATION.key
    rec = recommend(indices[raw], indices[ind], indicators[raw], indicators[ind], config.thresholds)
    if bundle.degraded:
        logger.warning("Report uses fallback environmental factors for: %s", ", ".join(bundle.fallback_fields))
    return AnalysisReport(
        config_hash=config_hash(config),
        environment=bundle,
        records=records,
        indicators=indicators,
        indices=indices,
        recommendation=rec,
    )


async def run_analysis_async(
    source: EnvironmentalSource,
    config: AnalysisConfig,
    timeout: Optional[float] = None,
) -> AnalysisReport:
    """Fetch the environmental statistics, then run the analysis on them."""
    bundle = await fetch_environment(source, config.environment, timeout=timeout)
    return run_analysis(config, bundle)
