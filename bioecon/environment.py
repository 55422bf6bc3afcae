# MIT License
"""Environmental factor bundle.

The external geospatial platform reduces satellite rasters to a few spatial
means (water index, land surface temperature, evapotranspiration and
vegetation index proxies).  This module maps those scalars onto normalised
``[0, 1]`` factors consumed by the simulators and wraps the single
asynchronous fetch that gates a run.

When the platform reports no value for a statistic, or does not answer
within the configured timeout, the documented fallback factors are used
instead and the bundle is labelled ``degraded``.
"""

from __future__ import annotations
import asyncio
import logging
import math
from typing import List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import MissingExternalData
from .params import EnvironmentParams
from .utils import clamp

logger = logging.getLogger(__name__)


class EnvironmentalStatistics(BaseModel):
    """Scalar statistics reduced by the geospatial platform.

    ``None`` is the explicit "no data" marker for every field.
    """

    model_config = ConfigDict(frozen=True)

    water_index: Optional[float] = Field(None, description="Spatial mean NDWI (≈ -1..1)")
    mean_temperature_c: Optional[float] = Field(None, description="Spatial mean land surface temperature (°C)")
    evapotranspiration: Optional[float] = Field(None, description="Spatial mean evapotranspiration")
    ndvi_mean: Optional[float] = Field(None, description="Mean NDVI of the reference year")
    ndvi_max: Optional[float] = Field(None, description="Maximum NDVI of the reference year")
    ndvi_mean_next: Optional[float] = Field(None, description="Mean NDVI of the following year")
    chlorophyll: Optional[float] = Field(None, description="Spatial mean chlorophyll-a of the water body (mg/m³)")


class EnvironmentalFactorBundle(BaseModel):
    """Normalised environmental drivers of extraction."""

    model_config = ConfigDict(frozen=True)

    water_index_factor: float = Field(..., ge=0.0, le=1.0)
    temperature_factor: float = Field(..., ge=0.0, le=1.0)
    evaporation_factor: float = Field(..., ge=0.0, le=1.0)
    degraded: bool = Field(False, description="True when any fallback constant was used")
    fallback_fields: List[str] = Field(default_factory=list)

    @property
    def base_factor(self) -> float:
        # limiting-factor law: output is capped by the weakest driver
        return self.water_index_factor * self.temperature_factor * self.evaporation_factor


def is_missing(value: Optional[float]) -> bool:
    return value is None or math.isnan(value)


def normalize_environment(stats: EnvironmentalStatistics, env: EnvironmentParams) -> EnvironmentalFactorBundle:
    """Convert raw platform statistics into a clamped factor bundle.

    Parameters
    ----------
    stats:
        Statistics reported by the platform.
    env:
        Normalisation references, clamp bounds and fallback constants.

    Returns
    -------
    EnvironmentalFactorBundle
        Factors within ``[env.min_bound, env.max_bound]``.  Statistics without
        data are replaced by their fallback factor and named in
        ``fallback_fields``.
    """
    fallbacks: List[str] = []

    def factor(name: str, raw: Optional[float], transform, fallback: float) -> float:
        if is_missing(raw):
            fallbacks.append(name)
            logger.warning("No data for %s, using fallback factor %.3f", name, fallback)
            return clamp(fallback, env.min_bound, env.max_bound)
        return clamp(transform(raw), env.min_bound, env.max_bound)

    water = factor(
        "water_index", stats.water_index,
        lambda v: v + env.water_index_offset,
        env.fallback_water_index_factor,
    )
    temperature = factor(
        "mean_temperature_c", stats.mean_temperature_c,
        lambda v: v / env.temperature_reference_c,
        env.fallback_temperature_factor,
    )
    evaporation = factor(
        "evapotranspiration", stats.evapotranspiration,
        lambda v: v / env.evaporation_reference,
        env.fallback_evaporation_factor,
    )
    bundle = EnvironmentalFactorBundle(
        water_index_factor=water,
        temperature_factor=temperature,
        evaporation_factor=evaporation,
        degraded=bool(fallbacks),
        fallback_fields=fallbacks,
    )
    logger.info(
        "Environmental factors: water=%.3f temperature=%.3f evaporation=%.3f degraded=%s",
        water, temperature, evaporation, bundle.degraded,
    )
    return bundle


def fallback_bundle(env: EnvironmentParams) -> EnvironmentalFactorBundle:
    """Bundle made only of fallback constants, labelled degraded."""
    return normalize_environment(EnvironmentalStatistics(), env)


class EnvironmentalSource(Protocol):
    """Anything able to deliver the platform statistics once."""

    async def fetch(self) -> EnvironmentalStatistics:
        ...


class StaticSource:
    """Source returning statistics that are already known.

    ``delay`` simulates platform latency (seconds).
    """

    def __init__(self, stats: Optional[EnvironmentalStatistics], delay: float = 0.0):
        self.stats = stats
        self.delay = delay

    async def fetch(self) -> EnvironmentalStatistics:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.stats is None:
            raise MissingExternalData("environmental statistics")
        return self.stats


async def fetch_environment(
    source: EnvironmentalSource,
    env: EnvironmentParams,
    timeout: Optional[float] = None,
) -> EnvironmentalFactorBundle:
    """Await the platform statistics and normalise them.

    A timeout or a :class:`MissingExternalData` from the source is recovered
    with :func:`fallback_bundle`; it never aborts the run.
    """
    timeout = env.fetch_timeout_s if timeout is None else timeout
    try:
        stats = await asyncio.wait_for(source.fetch(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Environmental fetch timed out after %.1fs, using fallback factors", timeout)
        return fallback_bundle(env)
    except MissingExternalData as e:
        logger.warning("%s, using fallback factors", e)
        return fallback_bundle(env)
    return normalize_environment(stats, env)
