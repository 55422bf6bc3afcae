# MIT License
"""Basin water balance and sector allocation.

The annual balance of a basin is precipitation minus evapotranspiration
minus the share of precipitation that leaves as runoff.  The water
available from that balance is then shared between competing sectors:
each sector first receives its guaranteed minimum and whatever remains is
split in proportion to the economic benefit of one cubic metre in each
sector.

When the available water does not even cover the guaranteed minimums the
allocation is labelled ``"shortfall"`` and the minimums are scaled down pro
rata instead of producing negative allocations.
"""

from __future__ import annotations
import logging
from typing import Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .environment import is_missing
from .exceptions import ConfigurationError
from .params import WaterAllocationParams
from .utils import safe_ratio

logger = logging.getLogger(__name__)

# balance class limits (mm)
DEFICIT_LIMIT = -100.0
SURPLUS_LIMIT = 100.0


class WaterBalance(BaseModel):
    """Annual water balance of a basin (mm)."""

    model_config = ConfigDict(frozen=True)

    precipitation: float
    evapotranspiration: float
    runoff: float
    balance: float


def water_balance(precipitation: float, evapotranspiration: float, runoff_share: float = 0.3) -> WaterBalance:
    """Balance = P - ET - runoff_share·P.

    Raises
    ------
    ConfigurationError
        If either flux is missing or ``runoff_share`` is outside ``[0, 1]``.
    """
    if is_missing(precipitation):
        raise ConfigurationError("precipitation", precipitation, "no data")
    if is_missing(evapotranspiration):
        raise ConfigurationError("evapotranspiration", evapotranspiration, "no data")
    if not 0 <= runoff_share <= 1:
        raise ConfigurationError("runoff_share", runoff_share, "must lie in [0, 1]")
    runoff = precipitation * runoff_share
    return WaterBalance(
        precipitation=precipitation,
        evapotranspiration=evapotranspiration,
        runoff=runoff,
        balance=precipitation - evapotranspiration - runoff,
    )


def classify_balance(balance: Optional[float]) -> Optional[str]:
    """``"deficit"`` below -100 mm, ``"surplus"`` above 100 mm, else ``"equilibrium"``."""
    if is_missing(balance):
        return None
    if balance < DEFICIT_LIMIT:
        return "deficit"
    if balance > SURPLUS_LIMIT:
        return "surplus"
    return "equilibrium"


def optimal_allocation(availability: float, params: Optional[WaterAllocationParams] = None) -> pd.DataFrame:
    """Share ``availability`` between the water sectors.

    Parameters
    ----------
    availability:
        Water available for allocation (million m³).
    params:
        Sector demands, benefits and minimums.  Defaults to the Río Grande
        basin figures.

    Returns
    -------
    pandas.DataFrame
        One row per sector with columns ``sector``, ``demand``, ``minimum``,
        ``benefit_per_m3``, ``allocation``, ``coverage`` (allocation over
        demand, ``None`` for a zero demand), ``benefit`` and ``status``.
        Allocations sum to ``availability`` whenever it is positive.
    """
    params = params or WaterAllocationParams()
    if is_missing(availability):
        raise ConfigurationError("availability", availability, "no data")
    sectors = params.sectors
    total_min = sum(params.minimums[s] for s in sectors)
    total_benefit = sum(params.benefits[s] for s in sectors)

    if availability < total_min:
        status = "shortfall"
        logger.warning(
            "Available water %.1f does not cover the guaranteed minimums %.1f, scaling them down",
            availability, total_min,
        )
        # availability < total_min, so total_min > 0 whenever availability > 0
        share = max(availability, 0.0) / total_min if availability > 0 else 0.0
        allocation = {s: params.minimums[s] * share for s in sectors}
    else:
        status = "allocated"
        remaining = availability - total_min
        allocation = {
            s: params.minimums[s] + remaining * params.benefits[s] / total_benefit
            for s in sectors
        }

    rows = []
    for s in sectors:
        rows.append(dict(
            sector=s,
            demand=params.demands[s],
            minimum=params.minimums[s],
            benefit_per_m3=params.benefits[s],
            allocation=allocation[s],
            coverage=safe_ratio(allocation[s], params.demands[s]),
            benefit=allocation[s] * params.benefits[s],
            status=status,
        ))
    df = pd.DataFrame(rows)
    logger.info("Water allocation (%s): total benefit %.1f", status, df["benefit"].sum())
    logger.debug("allocation table:\n%s", df.head())
    return df
