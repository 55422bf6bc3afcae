# MIT License
"""Forest rotation valuation sweep.

Evaluates a single harvest at each candidate age of a grid: the standing
volume grows exponentially, the stumpage margin is discounted back to the
present and the age with the highest value is retained.  Only one rotation
is valued; the infinite-rotation (Faustmann) correction is not applied.
"""

from __future__ import annotations
import logging
import math
from typing import List

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict

from .exceptions import ConfigurationError
from .economics import present_value
from .params import RotationParams

logger = logging.getLogger(__name__)


class RotationPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int
    npv: float
    volume: float


class RotationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    optimal_age: int
    max_npv: float
    curve: List[RotationPoint]

    def curve_table(self) -> pd.DataFrame:
        """The swept curve as an (age, npv, volume) DataFrame."""
        return pd.DataFrame([p.model_dump() for p in self.curve], columns=["age", "npv", "volume"])


def stand_volume(age: float, rp: RotationParams) -> float:
    """Standing volume V0·e^(g·t) at ``age`` (m³/ha)."""
    return rp.initial_volume * math.exp(rp.growth_rate * age)


def harvest_npv(age: float, rp: RotationParams) -> float:
    """Discounted stumpage margin of a clear-cut at ``age``."""
    margin = (rp.price_per_volume - rp.harvest_cost_per_volume) * stand_volume(age, rp)
    return present_value(margin, rp.discount_rate, age)


def optimal_rotation(rp: RotationParams) -> RotationResult:
    """Select the harvest age maximising NPV over ``rp.ages``.

    Ties go to the earliest age in iteration order.

    Parameters
    ----------
    rp:
        Rotation parameter object.

    Returns
    -------
    RotationResult
        The optimal age, its NPV and the full (age, npv, volume) curve.
    """
    if not 0 < rp.discount_rate < 1:
        raise ConfigurationError("discount_rate", rp.discount_rate, "must lie strictly between 0 and 1")
    if not rp.ages:
        raise ConfigurationError("ages", rp.ages, "at least one candidate age is required")
    curve = [
        RotationPoint(age=age, npv=harvest_npv(age, rp), volume=stand_volume(age, rp))
        for age in rp.ages
    ]
    # np.argmax returns the first maximum
    best = curve[int(np.argmax([p.npv for p in curve]))]
    result = RotationResult(optimal_age=best.age, max_npv=best.npv, curve=curve)
    logger.info("Optimal rotation: %d years (NPV %.2f)", result.optimal_age, result.max_npv)
    return result
