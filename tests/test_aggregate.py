"""Tests for indicators, sustainability indices and the recommendation.

These tests ensure that the indicator reduction sums the yearly records
exactly, that the division guards report "not applicable" instead of
NaN/inf, that every index stays within [0, 1] and that the composite gap
is mapped onto the right policy tier.  The last tests run the whole
analysis on the default configuration.
"""

import math

import pytest

from bioecon.aggregate import IndicatorSet, compute_indicators, indicator_table
from bioecon.environment import EnvironmentalFactorBundle
from bioecon.exceptions import ConfigurationError, EmptyScenarioError
from bioecon.params import AnalysisConfig, IndexScales, RecommendationThresholds
from bioecon.pipeline import run_analysis
from bioecon.recommendation import PolicyTier, percent_delta, recommend, select_tier
from bioecon.sim_3_production import ScenarioKind, simulate_scenario
from bioecon.sustainability import SustainabilityIndex, sustainability_index


def _bundle(water=0.5, temperature=0.5, evaporation=0.7):
    return EnvironmentalFactorBundle(
        water_index_factor=water, temperature_factor=temperature, evaporation_factor=evaporation
    )


def _indicators(**kw):
    base = dict(
        scenario="raw-material",
        years=10,
        total_profit=0.0,
        total_jobs=0.0,
        avg_tech_rent=1.0,
        total_volume=1.0,
        total_env_impact=0.0,
        profit_per_unit=0.0,
        total_water=0.0,
        total_co2=0.0,
        total_value_added=0.0,
    )
    base.update(kw)
    return IndicatorSet(**base)


def _index(composite, scenario="raw-material"):
    return SustainabilityIndex(
        scenario=scenario, economic=composite, social=composite,
        environmental=composite, technological=composite, composite=composite,
    )


def test_total_volume_is_exact_sum():
    for kind in ScenarioKind:
        recs = simulate_scenario(kind, AnalysisConfig(years=17), _bundle())
        ind = compute_indicators(recs)
        assert ind.total_volume == sum(r.extracted_volume for r in recs)
        assert ind.total_profit == sum(r.profit for r in recs)
        assert math.isclose(ind.avg_tech_rent, sum(r.tech_rent for r in recs) / 17)
        assert math.isclose(ind.profit_per_unit, ind.total_profit / ind.total_volume)
        assert ind.years == 17


def test_zero_volume_profit_per_unit_not_applicable():
    recs = simulate_scenario(ScenarioKind.RAW_MATERIAL, AnalysisConfig(years=3), _bundle(water=0.0))
    ind = compute_indicators(recs)
    assert ind.total_volume == 0.0
    assert ind.profit_per_unit is None


def test_empty_records_rejected():
    with pytest.raises(EmptyScenarioError) as exc:
        compute_indicators([])
    assert isinstance(exc.value, ValueError)
    assert not isinstance(exc.value, ConfigurationError)


def test_indices_clamped():
    scales = IndexScales()
    high = sustainability_index(
        _indicators(total_profit=1e12, total_jobs=1e6, avg_tech_rent=10.0, total_env_impact=-5.0), scales
    )
    assert high.economic == high.social == high.technological == high.environmental == 1.0
    assert high.composite == 1.0
    low = sustainability_index(
        _indicators(total_profit=-1e9, total_jobs=0.0, avg_tech_rent=0.0, total_env_impact=1e9), scales
    )
    assert low.economic == low.social == low.technological == low.environmental == 0.0
    assert low.composite == 0.0


def test_index_values_and_composite():
    scales = IndexScales(economic=100.0, social=10.0, environmental=200.0, technological=4.0)
    idx = sustainability_index(_indicators(total_profit=50.0, total_jobs=2.5, avg_tech_rent=1.0, total_env_impact=50.0), scales)
    assert math.isclose(idx.economic, 0.5)
    assert math.isclose(idx.social, 0.25)
    assert math.isclose(idx.environmental, 0.75)
    assert math.isclose(idx.technological, 0.25)
    assert math.isclose(idx.composite, (0.5 + 0.25 + 0.75 + 0.25) / 4)


def test_tier_selection():
    th = RecommendationThresholds()
    assert select_tier(0.2, th) is PolicyTier.STRONG_INDUSTRIALIZATION
    assert select_tier(0.1, th) is PolicyTier.PHASED_TRANSITION
    assert select_tier(0.0, th) is PolicyTier.OPTIMIZE_EXTRACTION
    assert select_tier(-0.3, th) is PolicyTier.OPTIMIZE_EXTRACTION


def test_tier_boundaries_are_inclusive_upwards():
    th = RecommendationThresholds(strong=0.125, phased=0.0625)
    rec = recommend(_index(0.25), _index(0.375, "industrialization"), _indicators(), _indicators(), th)
    assert rec.gap == 0.125
    assert rec.tier is PolicyTier.PHASED_TRANSITION
    rec = recommend(_index(0.25), _index(0.3125, "industrialization"), _indicators(), _indicators(), th)
    assert rec.tier is PolicyTier.OPTIMIZE_EXTRACTION


def test_percent_deltas_guarded():
    raw = _indicators(total_profit=100.0, total_jobs=0.0, profit_per_unit=None)
    ind = _indicators(scenario="industrialization", total_profit=250.0, total_jobs=40.0, profit_per_unit=3.0)
    rec = recommend(_index(0.3), _index(0.6, "industrialization"), raw, ind, RecommendationThresholds())
    assert math.isclose(rec.indicator_deltas["total_profit"], 150.0)
    assert rec.indicator_deltas["total_jobs"] is None
    assert rec.indicator_deltas["profit_per_unit"] is None
    assert rec.tier is PolicyTier.STRONG_INDUSTRIALIZATION
    assert rec.headline
    assert percent_delta(-50.0, -25.0) == 50.0


def test_default_analysis_recommends_industrialization():
    report = run_analysis(AnalysisConfig(), _bundle())
    assert not report.degraded
    raw = report.indices["raw-material"]
    ind = report.indices["industrialization"]
    assert math.isclose(report.recommendation.gap, ind.composite - raw.composite)
    assert report.recommendation.tier is PolicyTier.STRONG_INDUSTRIALIZATION
    for idx in report.indices.values():
        assert math.isclose(idx.composite, (idx.economic + idx.social + idx.environmental + idx.technological) / 4)
    for key, recs in report.records.items():
        assert [r.year for r in recs] == list(range(1, 11))
        assert report.indicators[key].total_volume == sum(r.extracted_volume for r in recs)


def test_indicator_table_rows():
    report = run_analysis(AnalysisConfig(years=2), _bundle())
    df = indicator_table(report.indicators)
    assert list(df["scenario"]) == ["raw-material", "industrialization"]
