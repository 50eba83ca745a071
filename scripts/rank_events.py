"""Rank calendar events for a planning day from a CSV/JSON events file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from priority_engine.adapters import csv_adapter, json_adapter
from priority_engine.config import Config
from priority_engine.report import build_report

logger = logging.getLogger("rank_events")


def _load_events(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Rank calendar events by priority")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON events file")
    parser.add_argument("--date", help="Planning date (YYYY-MM-DD), defaults to today")
    parser.add_argument("--expand-recurring", action="store_true", help="Add occurrences of recurring events")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))

    now = datetime.now()
    try:
        planning_date = date.fromisoformat(args.date) if args.date else now.date()
        events = _load_events(Path(args.data))
        report = build_report(events, planning_date, now, expand=args.expand_recurring)
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("Ranked %d flexible event(s) for %s", len(report["queue"]), report["planning_date"])
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
