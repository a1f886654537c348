from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

# Ensure repo root is on sys.path so "import tradebook" works when running this file directly.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from tradebook.analysis.criteria.factory import build_criteria
from tradebook.analysis.summary import criteria_to_dict
from tradebook.backtest.record import TradingRecord
from tradebook.backtest.series import PriceSeries
from tradebook.config.loader import load_run_config
from tradebook.config.logs import configure_logging

log = logging.getLogger(__name__)


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default="configs/criteria.yaml")
    ap.add_argument("--out-dir", default="data/outputs")
    ap.add_argument("--log-level", default=None)
    args = ap.parse_args()

    configure_logging(args.log_level)
    cfg = load_run_config(args.config)

    series = PriceSeries.from_frame(pd.DataFrame({"close": cfg.closes}))
    record = TradingRecord.from_orders(*cfg.orders, starting_side=cfg.starting_side)
    log.info("Replayed %d orders into %d closed trades", len(cfg.orders), record.trade_count)

    criteria = build_criteria({"criteria": cfg.criteria})
    metrics = criteria_to_dict(series, record, criteria)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    payload = {
        "config_path": str(args.config),
        "starting_side": cfg.starting_side.value,
        "closed_trades": record.trade_count,
        "position_open": not record.is_closed(),
        "metrics": metrics,
    }
    summary_path = out_dir / "criteria_summary.json"
    summary_path.write_text(json.dumps(payload, indent=2))

    for name, value in metrics.items():
        log.info("%s = %s", name, value)
    print(f"Wrote {summary_path}")


if __name__ == "__main__":
    main()
