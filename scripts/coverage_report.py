#!/usr/bin/env python3
"""Report event pool gaps and puzzle demand from storage exports.

Usage: coverage_report.py YEAR_STATS_JSON PUZZLES_JSON [BATCH_SIZE]

YEAR_STATS_JSON holds ``[{"year", "total", "used", "available"}, ...]`` and
PUZZLES_JSON holds ``[{"targetYear": ...}, ...]``.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import logging

import structlog
from pydantic import ValidationError

from chronoqc.config import settings
from chronoqc.coverage import analyze_coverage_gaps, analyze_puzzle_demand, select_work
from chronoqc.models import PuzzleDemandRecord, YearStats

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = structlog.get_logger(__name__)


def load_records(path, model):
    """Load a JSON array of records into ``model`` instances."""
    with open(path, "r", encoding="utf-8") as f:
        return [model.model_validate(entry) for entry in json.load(f)]


def main(argv):
    """Print coverage gaps, demand and the next batch's target years."""
    if len(argv) < 3:
        print(__doc__)
        return 2

    batch_size = int(argv[3]) if len(argv) > 3 else 10

    try:
        year_stats = load_records(argv[1], YearStats)
        puzzles = load_records(argv[2], PuzzleDemandRecord)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("failed to load exports", error=str(e))
        return 1

    gaps = analyze_coverage_gaps(year_stats)
    demand = analyze_puzzle_demand(puzzles)
    strategy = select_work(gaps, demand, batch_size)

    logger.info(
        "coverage gaps",
        missing_years=len(gaps.missing_years),
        insufficient_years=len(gaps.insufficient_years),
        coverage_by_era={era.value: round(ratio, 3) for era, ratio in gaps.coverage_by_era.items()}
    )
    logger.info(
        "puzzle demand",
        high_demand_years=demand.high_demand_years[:10],
        demand_by_era={era.value: count for era, count in demand.demand_by_era.items()}
    )
    logger.info(
        "next batch",
        target_years=strategy.target_years,
        priority=strategy.priority.value,
        era_balance={era.value: count for era, count in strategy.era_balance.items()}
    )
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
