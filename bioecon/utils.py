# MIT License
from __future__ import annotations
import hashlib, json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from .exceptions import ConfigurationError
from .params import AnalysisConfig

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def config_hash(config: AnalysisConfig) -> str:
    """Compute a stable hash for an AnalysisConfig.

    Serialises the configuration to JSON (with sorted keys) and computes a
    SHA256 hash.  Used to identify the run a report belongs to.

    Parameters
    ----------
    config:
        AnalysisConfig instance.

    Returns
    -------
    str
        Hexadecimal string representation of the hash.
    """
    cfg_json = config.model_dump(mode="json", exclude_none=True)
    # ensure deterministic key ordering
    payload = json.dumps(cfg_json, sort_keys=True).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""
    return max(lo, min(hi, value))


def safe_ratio(numerator: float, denominator: float) -> Optional[float]:
    """Return ``numerator / denominator`` or ``None`` when the ratio is not applicable."""
    if denominator == 0:
        return None
    return numerator / denominator


def build_model(model_cls: Type[M], data: Dict[str, Any]) -> M:
    """Validate ``data`` into ``model_cls``, naming the first offending field on failure.

    Raises
    ------
    ConfigurationError
        If pydantic rejects the data.
    """
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        name = ".".join(str(p) for p in err.get("loc", ())) or model_cls.__name__
        raise ConfigurationError(name, err.get("input"), err.get("msg", "")) from e


def load_config(path: Union[str, Path]) -> AnalysisConfig:
    """Load an :class:`AnalysisConfig` from a JSON, YAML or TOML file.

    Missing keys take their defaults.

    Raises
    ------
    ConfigurationError
        If the file is missing, has an unsupported format, cannot be parsed
        or holds invalid values.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError("config_path", str(file_path), "file not found")

    suffix = file_path.suffix.lower()
    try:
        if suffix in [".yaml", ".yml"]:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        elif suffix == ".toml":
            with open(file_path, "rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                "config_path", str(file_path),
                f"unsupported format {suffix}; use .json, .yaml, .yml or .toml"
            )
    except yaml.YAMLError as e:
        raise ConfigurationError("config_path", str(file_path), f"YAML parsing error: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError("config_path", str(file_path), f"JSON parsing error: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError("config_path", str(file_path), f"TOML parsing error: {e}") from e

    if data is None:
        data = {}
    logger.info("Loaded configuration from %s", file_path)
    return build_model(AnalysisConfig, data)
