# MIT License
"""Policy recommendation from the sustainability gap between scenarios."""

from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .aggregate import IndicatorSet
from .params import RecommendationThresholds
from .sustainability import SustainabilityIndex

logger = logging.getLogger(__name__)

# IndicatorSet fields compared between scenarios
DELTA_FIELDS = (
    "total_profit",
    "total_jobs",
    "avg_tech_rent",
    "total_volume",
    "total_env_impact",
    "profit_per_unit",
    "total_water",
    "total_co2",
    "total_value_added",
)


class PolicyTier(str, Enum):
    STRONG_INDUSTRIALIZATION = "strong industrialization"
    PHASED_TRANSITION = "phased transition"
    OPTIMIZE_EXTRACTION = "optimize current extraction"


GUIDANCE: Dict[PolicyTier, List[str]] = {
    PolicyTier.STRONG_INDUSTRIALIZATION: [
        "Advance with the industrialization strategy",
        "Higher value added and technological rent justify local processing",
    ],
    PolicyTier.PHASED_TRANSITION: [
        "Transition gradually towards industrialization",
        "Implement in phases to mitigate risk",
        "Build local technical capacity first",
    ],
    PolicyTier.OPTIMIZE_EXTRACTION: [
        "Optimize extraction before industrializing",
        "Improve extraction efficiency",
        "Reduce the current environmental impact",
    ],
}


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    gap: float
    tier: PolicyTier
    headline: str
    actions: List[str]
    indicator_deltas: Dict[str, Optional[float]]


def select_tier(gap: float, thresholds: RecommendationThresholds) -> PolicyTier:
    if gap > thresholds.strong:
        return PolicyTier.STRONG_INDUSTRIALIZATION
    if gap > thresholds.phased:
        return PolicyTier.PHASED_TRANSITION
    return PolicyTier.OPTIMIZE_EXTRACTION


def percent_delta(baseline: Optional[float], value: Optional[float]) -> Optional[float]:
    """Percentage change from ``baseline`` to ``value``; ``None`` when the baseline is zero or missing."""
    if baseline is None or value is None or baseline == 0:
        return None
    return (value - baseline) / abs(baseline) * 100.0


def recommend(
    raw_index: SustainabilityIndex,
    industrial_index: SustainabilityIndex,
    raw_indicators: IndicatorSet,
    industrial_indicators: IndicatorSet,
    thresholds: RecommendationThresholds,
) -> Recommendation:
    """Turn the composite gap between the two scenarios into a policy tier.

    Parameters
    ----------
    raw_index, industrial_index:
        Sustainability indices of the raw-material and industrialization
        scenarios.
    raw_indicators, industrial_indicators:
        The indicator sets the indices were derived from; used for the
        per-indicator percentage deltas.
    thresholds:
        Gap thresholds separating the tiers.
    """
    gap = industrial_index.composite - raw_index.composite
    tier = select_tier(gap, thresholds)
    deltas = {
        name: percent_delta(getattr(raw_indicators, name), getattr(industrial_indicators, name))
        for name in DELTA_FIELDS
    }
    headline, *actions = GUIDANCE[tier]
    logger.info("Composite gap %.3f -> %s", gap, tier.value)
    return Recommendation(
        gap=gap,
        tier=tier,
        headline=headline,
        actions=actions,
        indicator_deltas=deltas,
    )


def recommendation_table(rec: Recommendation) -> pd.DataFrame:
    """Per-indicator deltas with the gap and tier repeated on every row."""
    rows = [
        dict(indicator=name, pct_delta=delta, gap=rec.gap, tier=rec.tier.value)
        for name, delta in rec.indicator_deltas.items()
    ]
    return pd.DataFrame(rows)
