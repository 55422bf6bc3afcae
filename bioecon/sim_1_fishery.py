# MIT License
"""Logistic-growth yield model.

This module implements the Schaefer surplus-production optimum of a
renewable stock: the maximum sustainable yield reached at half the carrying
capacity, the effort that sustains it and the resulting annual economics.
It also derives logistic stock parameters from vegetation index proxies so
that a forest stand can be evaluated with the same model.
"""

from __future__ import annotations
import logging
from typing import Iterable, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .environment import EnvironmentalStatistics, is_missing
from .exceptions import ConfigurationError
from .params import FISHERY_SPECIES, ResourceParameterSet
from .utils import build_model

logger = logging.getLogger(__name__)

# share of MSY advised as the precautionary catch
PRECAUTIONARY_SHARE = 0.8

# vegetation proxies of the forest stock
FOREST_NDVI_THRESHOLD = 0.3
BIOMASS_PER_NDVI = 120.0
BIOMASS_INTERCEPT = 20.0
CAPACITY_PER_NDVI = 150.0
NDVI_SATURATION = 0.85

# chlorophyll-a class limits (mg/m³), exclusive
HIGH_PRODUCTIVITY_CHLOROPHYLL = 5.0
MEDIUM_PRODUCTIVITY_CHLOROPHYLL = 2.0


class FisheryOptimum(BaseModel):
    model_config = ConfigDict(frozen=True)

    species: str
    capacity: float
    growth_rate: float
    msy: float
    optimal_effort: float
    optimal_biomass: float
    optimal_catch: float
    revenue: float
    cost: float
    profit: float
    recommended_catch: float


def check_resource(params: ResourceParameterSet) -> None:
    """Reject a stock whose logistic parameters are out of range.

    Raises
    ------
    ConfigurationError
        If ``capacity <= 0`` or ``growth_rate`` is outside ``(0, 1)``.
    """
    if not params.capacity > 0:
        raise ConfigurationError("capacity", params.capacity, "must be positive")
    if not 0 < params.growth_rate < 1:
        raise ConfigurationError("growth_rate", params.growth_rate, "must lie strictly between 0 and 1")


def optimal_fishery(params: ResourceParameterSet, precautionary_share: float = PRECAUTIONARY_SHARE) -> FisheryOptimum:
    """Compute the maximum sustainable yield optimum of a logistic stock.

    Parameters
    ----------
    params:
        Carrying capacity, growth rate, price and cost of the stock.
    precautionary_share:
        Fraction of MSY reported as the recommended catch.
        Must lie in ``(0, 1]``.

    Returns
    -------
    FisheryOptimum
        MSY = K·r/4 with effort r/2 and biomass K/2, the economics of
        harvesting exactly MSY and the precautionary catch.
    """
    check_resource(params)
    if not 0 < precautionary_share <= 1:
        raise ConfigurationError("precautionary_share", precautionary_share, "must lie in (0, 1]")
    msy = params.capacity * params.growth_rate / 4.0
    revenue = msy * params.unit_price
    cost = msy * params.unit_cost
    return FisheryOptimum(
        species=params.name,
        capacity=params.capacity,
        growth_rate=params.growth_rate,
        msy=msy,
        optimal_effort=params.growth_rate / 2.0,
        optimal_biomass=params.capacity / 2.0,
        optimal_catch=msy,
        revenue=revenue,
        cost=cost,
        profit=revenue - cost,
        recommended_catch=msy * precautionary_share,
    )


def fishery_table(species: Optional[Iterable[ResourceParameterSet]] = None) -> pd.DataFrame:
    """Evaluate several stocks, one row each (defaults to the lake species presets)."""
    if species is None:
        species = FISHERY_SPECIES.values()
    rows = [optimal_fishery(sp).model_dump() for sp in species]
    df = pd.DataFrame(rows)
    logger.debug("fishery table:\n%s", df.head())
    return df


def classify_productivity(chlorophyll: Optional[float]) -> Optional[str]:
    """Productivity class of a water body from its mean chlorophyll-a.

    ``"high"`` above 5 mg/m³, ``"medium"`` above 2 mg/m³ and ``"low"``
    otherwise.  Returns ``None`` when no chlorophyll value was reported.
    """
    if is_missing(chlorophyll):
        return None
    if chlorophyll > HIGH_PRODUCTIVITY_CHLOROPHYLL:
        return "high"
    if chlorophyll > MEDIUM_PRODUCTIVITY_CHLOROPHYLL:
        return "medium"
    return "low"


class ForestStock(BaseModel):
    """Logistic stock parameters inferred from vegetation indices (m³/ha)."""

    model_config = ConfigDict(frozen=True)

    initial_biomass: float
    capacity: float
    growth_rate: float

    def as_resource(self, unit_price: float = 0.0, unit_cost: float = 0.0, name: str = "forest") -> ResourceParameterSet:
        """Validate the inferred parameters as a :class:`ResourceParameterSet`."""
        return build_model(ResourceParameterSet, dict(
            name=name,
            capacity=self.capacity,
            growth_rate=self.growth_rate,
            unit_price=unit_price,
            unit_cost=unit_cost,
        ))


def estimate_forest_stock(stats: EnvironmentalStatistics) -> Optional[ForestStock]:
    """Infer B0, K and r of a stand from its NDVI statistics.

    B0 = 120·NDVI_mean + 20, K = 150·NDVI_max / 0.85 and r is the relative
    change of mean NDVI to the following year.  Returns ``None`` when a
    statistic is missing (``None`` or NaN) or the area is not forest
    (NDVI_mean <= 0.3).
    """
    if any(is_missing(v) for v in (stats.ndvi_mean, stats.ndvi_max, stats.ndvi_mean_next)):
        logger.warning("NDVI statistics incomplete, no forest stock estimated")
        return None
    if stats.ndvi_mean <= FOREST_NDVI_THRESHOLD:
        return None
    return ForestStock(
        initial_biomass=BIOMASS_PER_NDVI * stats.ndvi_mean + BIOMASS_INTERCEPT,
        capacity=CAPACITY_PER_NDVI * stats.ndvi_max / NDVI_SATURATION,
        growth_rate=(stats.ndvi_mean_next - stats.ndvi_mean) / stats.ndvi_mean,
    )
