from datetime import date
import logging
from pathlib import Path
import sys

REPO = Path(__file__).resolve().parents[1]
SRC = REPO / "src"
if str(SRC) not in sys.path:
  sys.path.insert(0, str(SRC))

from expense_forecast.config.loader import load_unified_config
from expense_forecast.pipeline import run_pipeline

def main():
  logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
  cfg = load_unified_config(REPO)
  run_pipeline(cfg=cfg, today=date.today())

if __name__ == "__main__":
  main()
