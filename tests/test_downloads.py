"""Tests for configuration files and table hand-off.

These tests ensure that configurations serialise and load back from JSON,
YAML and TOML, that invalid files are rejected with a named reason, and
that the report tables are well-formed for CSV export.
"""

import json

import pytest
import yaml

from bioecon.environment import fallback_bundle
from bioecon.exceptions import ConfigurationError
from bioecon.params import AnalysisConfig, EnvironmentParams
from bioecon.pipeline import run_analysis
from bioecon.utils import config_hash, load_config


def test_config_json_roundtrip():
    cfg = AnalysisConfig()
    data = json.loads(cfg.model_dump_json())
    cfg2 = AnalysisConfig.model_validate_json(json.dumps(data))
    assert cfg == cfg2
    assert config_hash(cfg) == config_hash(cfg2)
    assert config_hash(cfg) != config_hash(AnalysisConfig(years=11))


def test_load_yaml_and_toml(tmp_path):
    y = tmp_path / "run.yaml"
    y.write_text(yaml.safe_dump({"years": 12, "extraction": {"capacity": 150000}}), encoding="utf-8")
    cfg = load_config(y)
    assert cfg.years == 12
    assert cfg.extraction.capacity == 150000
    assert cfg.market.raw_price == 20000

    t = tmp_path / "run.toml"
    t.write_text('years = 5\n\n[industrialization]\nramp_years = 3\n', encoding="utf-8")
    cfg = load_config(t)
    assert cfg.years == 5
    assert cfg.industrialization.ramp_years == 3


def test_load_json_defaults(tmp_path):
    p = tmp_path / "run.json"
    p.write_text("{}", encoding="utf-8")
    assert load_config(p) == AnalysisConfig()


def test_load_rejects_invalid(tmp_path):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps({"industrialization": {"ramp_years": 0}}), encoding="utf-8")
    with pytest.raises(ConfigurationError) as exc:
        load_config(p)
    assert exc.value.param_name == "industrialization.ramp_years"

    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yaml")

    other = tmp_path / "run.ini"
    other.write_text("years=3", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(other)


def test_report_tables_csv_export():
    report = run_analysis(AnalysisConfig(years=3), fallback_bundle(EnvironmentParams()))
    tables = report.tables()
    assert set(tables) == {
        "environment",
        "raw-material_years",
        "industrialization_years",
        "indicators",
        "sustainability",
        "recommendation",
    }
    assert bool(tables["environment"].loc[0, "degraded"])
    first_line = tables["industrialization_years"].to_csv(index=False).splitlines()[0]
    assert "year" in first_line and "profit" in first_line
    assert len(tables["raw-material_years"]) == 3
