from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from expense_forecast.core.models import ForecastCfg
from expense_forecast.ingest.transactions import ColumnMap

@dataclass
class SourceCfg:
  transactions_glob: str
  columns: ColumnMap

@dataclass
class OptionsCfg:
  override_month: str          # "" or "YYYY-MM"

@dataclass
class PathsCfg:
  inputs_dir: Path
  data_dir: Path
  reports_dir: Path
  config_dir: Path

@dataclass
class UnifiedConfig:
  source: SourceCfg
  options: OptionsCfg
  paths: PathsCfg
  forecasting: ForecastCfg

def forecast_cfg_from_dict(d: Dict[str, Any]) -> ForecastCfg:
  cfg = ForecastCfg()
  if "min_months" in d:
    cfg.min_months = int(d["min_months"])
  if "window_months" in d:
    cfg.window_months = int(d["window_months"])
  if "basic_confidence" in d:
    cfg.basic_confidence = float(d["basic_confidence"])
  if "default_confidence" in d:
    cfg.default_confidence = float(d["default_confidence"])
  if "confidence_steps" in d:
    cfg.confidence_steps = [(int(m), float(c)) for m, c in d["confidence_steps"]]
  if "seasonal_multipliers" in d:
    cfg.seasonal_multipliers = {int(k): float(v) for k, v in d["seasonal_multipliers"].items()}
  return cfg

def load_unified_config(repo_root: Path) -> UnifiedConfig:
    """Load config/settings.yaml."""
    cfg_dir = repo_root / "config"
    yaml_cfg = cfg_dir / "settings.yaml"

    if not yaml_cfg.exists():
        raise FileNotFoundError(
            f"Missing {yaml_cfg}. Create it from the settings.yaml template in config/."
        )

    y: Dict[str, Any] = yaml.safe_load(yaml_cfg.read_text(encoding="utf-8")) or {}

    # minimal structure checks (fail fast with clear messages)
    for section in ["paths", "source"]:
        if section not in y:
            raise KeyError(f"settings.yaml is missing the '{section}' section")

    paths = y["paths"]
    source = y["source"]
    options = y.get("options") or {}
    cols = source.get("columns") or {}

    return UnifiedConfig(
        source=SourceCfg(
            transactions_glob=str(source["transactions_glob"]),
            columns=ColumnMap(**{str(k): str(v) for k, v in cols.items()}),
        ),
        options=OptionsCfg(
            override_month=str(options.get("override_month") or ""),
        ),
        paths=PathsCfg(
            inputs_dir=(repo_root / paths["inputs_dir"]).resolve(),
            data_dir=(repo_root / paths["data_dir"]).resolve(),
            reports_dir=(repo_root / paths["reports_dir"]).resolve(),
            config_dir=cfg_dir.resolve(),
        ),
        forecasting=forecast_cfg_from_dict(y.get("forecasting") or {}),
    )
