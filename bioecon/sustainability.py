# MIT License
"""Sustainability indices.

Normalises the summary indicators of a scenario against fixed reference
scales into four sub-indices within ``[0, 1]`` and their unweighted mean.
"""

from __future__ import annotations
from typing import Mapping

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from .aggregate import IndicatorSet
from .params import IndexScales
from .utils import clamp


class SustainabilityIndex(BaseModel):
    model_config = ConfigDict(frozen=True)

    scenario: str
    economic: float = Field(..., ge=0.0, le=1.0)
    social: float = Field(..., ge=0.0, le=1.0)
    environmental: float = Field(..., ge=0.0, le=1.0)
    technological: float = Field(..., ge=0.0, le=1.0)
    composite: float = Field(..., ge=0.0, le=1.0)


def sustainability_index(ind: IndicatorSet, scales: IndexScales) -> SustainabilityIndex:
    """Compute the four sub-indices and the composite of one scenario.

    Higher environmental impact lowers the environmental index.
    """
    economic = clamp(ind.total_profit / scales.economic)
    social = clamp(ind.total_jobs / scales.social)
    environmental = clamp(1.0 - ind.total_env_impact / scales.environmental)
    technological = clamp(ind.avg_tech_rent / scales.technological)
    return SustainabilityIndex(
        scenario=ind.scenario,
        economic=economic,
        social=social,
        environmental=environmental,
        technological=technological,
        composite=(economic + social + environmental + technological) / 4.0,
    )


def sustainability_table(indices: Mapping[str, SustainabilityIndex]) -> pd.DataFrame:
    return pd.DataFrame([idx.model_dump() for idx in indices.values()])
