"""Coverage analysis of the event pool and puzzle demand.

Both analyses are pure aggregations over records pulled from storage by the
caller. Their output feeds ``select_work``, which picks the years the next
generation batch should target.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Sequence

from ..models.coverage import (
    CoverageGaps,
    CoverageStrategy,
    EraBucket,
    PuzzleDemand,
    PuzzleDemandRecord,
    YearCandidate,
    YearCandidateSource,
    YearStats
)

logger = logging.getLogger(__name__)

# Year range for puzzle generation (inclusive).
YEAR_RANGE_START = -776
YEAR_RANGE_END = 2008

MIN_EVENTS_PER_YEAR = 6

ANCIENT_END = 500
MEDIEVAL_END = 1499

ERA_ORDER = [EraBucket.ANCIENT, EraBucket.MEDIEVAL, EraBucket.MODERN]

ERA_TOTALS: Dict[EraBucket, int] = {
    EraBucket.ANCIENT: ANCIENT_END - YEAR_RANGE_START + 1,
    EraBucket.MEDIEVAL: MEDIEVAL_END - (ANCIENT_END + 1) + 1,
    EraBucket.MODERN: YEAR_RANGE_END - (MEDIEVAL_END + 1) + 1,
}

SOURCE_SEVERITY = {
    YearCandidateSource.MISSING: 3,
    YearCandidateSource.INSUFFICIENT: 2,
    YearCandidateSource.HIGH_DEMAND: 1,
}


def get_era_bucket(year: int) -> EraBucket:
    """Era bucket for a signed year."""
    if year <= ANCIENT_END:
        return EraBucket.ANCIENT
    if year <= MEDIEVAL_END:
        return EraBucket.MEDIEVAL
    return EraBucket.MODERN


def _empty_era_counts() -> Dict[EraBucket, int]:
    return {era: 0 for era in ERA_ORDER}


def analyze_coverage_gaps(year_stats: Iterable[YearStats]) -> CoverageGaps:
    """Find missing and under-populated years and per-era coverage.

    A year counts as covered when it has at least one event, used or not.
    """
    year_stats = list(year_stats)
    covered = {stat.year for stat in year_stats if stat.total > 0}

    missing_years = [
        year for year in range(YEAR_RANGE_START, YEAR_RANGE_END + 1)
        if year not in covered
    ]

    insufficient_years = [stat.year for stat in year_stats if stat.total < MIN_EVENTS_PER_YEAR]

    era_counts = _empty_era_counts()
    for year in covered:
        if YEAR_RANGE_START <= year <= YEAR_RANGE_END:
            era_counts[get_era_bucket(year)] += 1

    coverage_by_era = {era: era_counts[era] / ERA_TOTALS[era] for era in ERA_ORDER}

    return CoverageGaps(
        missing_years=missing_years,
        insufficient_years=insufficient_years,
        coverage_by_era=coverage_by_era
    )


def analyze_puzzle_demand(puzzles: Iterable[PuzzleDemandRecord]) -> PuzzleDemand:
    """Count how often each year has been a puzzle target."""
    frequency: Counter = Counter()
    demand_by_era = _empty_era_counts()

    for puzzle in puzzles:
        frequency[puzzle.target_year] += 1
        demand_by_era[get_era_bucket(puzzle.target_year)] += 1

    # Counter preserves first-seen order and sorted() is stable.
    high_demand_years = [
        year for year, count in sorted(frequency.items(), key=lambda item: item[1], reverse=True)
        if count > 1
    ]

    return PuzzleDemand(
        high_demand_years=high_demand_years,
        demand_by_era=demand_by_era,
        selection_frequency=dict(frequency)
    )


def pick_balanced_years(candidates: Sequence[YearCandidate], count: int) -> List[int]:
    """Pick up to ``count`` distinct years, rotating across eras.

    Candidates are ranked by severity (stable), then taken round-robin from
    the ancient, medieval and modern buckets so no era starves the others.
    """
    if count <= 0 or not candidates:
        return []

    ranked = sorted(candidates, key=lambda candidate: candidate.severity, reverse=True)

    buckets: Dict[EraBucket, List[int]] = {era: [] for era in ERA_ORDER}
    seen = set()
    for candidate in ranked:
        if candidate.year in seen:
            continue
        seen.add(candidate.year)
        buckets[get_era_bucket(candidate.year)].append(candidate.year)

    selected: List[int] = []
    while len(selected) < count and any(buckets.values()):
        for era in ERA_ORDER:
            if len(selected) >= count:
                break
            if buckets[era]:
                selected.append(buckets[era].pop(0))

    return selected


def select_work(gaps: CoverageGaps, demand: PuzzleDemand, count: int) -> CoverageStrategy:
    """Choose the years the next generation batch should target.

    Missing years come first, then under-populated years, then years players
    keep landing on.
    """
    candidates = (
        [YearCandidate(year=year, severity=SOURCE_SEVERITY[YearCandidateSource.MISSING],
                       source=YearCandidateSource.MISSING) for year in gaps.missing_years] +
        [YearCandidate(year=year, severity=SOURCE_SEVERITY[YearCandidateSource.INSUFFICIENT],
                       source=YearCandidateSource.INSUFFICIENT) for year in gaps.insufficient_years] +
        [YearCandidate(year=year, severity=SOURCE_SEVERITY[YearCandidateSource.HIGH_DEMAND],
                       source=YearCandidateSource.HIGH_DEMAND) for year in demand.high_demand_years]
    )

    target_years = pick_balanced_years(candidates, count)

    sources = {}
    for candidate in sorted(candidates, key=lambda c: c.severity, reverse=True):
        sources.setdefault(candidate.year, candidate.source)

    if target_years:
        priority = max((sources[year] for year in target_years), key=lambda source: SOURCE_SEVERITY[source])
    else:
        priority = YearCandidateSource.MISSING

    era_balance = _empty_era_counts()
    for year in target_years:
        era_balance[get_era_bucket(year)] += 1

    balance = {era.value: era_balance[era] for era in ERA_ORDER}
    logger.info(f"Selected {len(target_years)} years for generation, priority {priority.value}: {balance}")

    return CoverageStrategy(target_years=target_years, priority=priority, era_balance=era_balance)
