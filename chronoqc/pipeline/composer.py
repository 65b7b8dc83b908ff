"""Puzzle composer orchestrating the judge over candidate years."""

import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from ..agents.judge import PuzzleJudgeAgent
from ..config import settings
from ..exceptions import ModelCallError
from ..models.judgments import CompositionResult, CompositionStatus, Era, PuzzleJudgeInput, PUZZLE_EVENT_COUNT
from ..quality.puzzle_checks import has_obvious_redundancy

logger = logging.getLogger(__name__)

YearCandidates = Callable[[], Awaitable[Optional[Tuple[int, List[str]]]]]


class PuzzleComposer:
    """Turns candidate events for a year into an approved, ordered puzzle.

    Each attempt makes one judge call. Retrying with other years is driven by
    ``compose_with_retries`` through a caller-supplied candidate source, since
    only the caller has storage access.
    """

    def __init__(self, judge_agent: PuzzleJudgeAgent):
        """Initialize the composer."""
        self.judge_agent = judge_agent

        self.stats = {
            "total_compositions": 0,
            "approved": 0,
            "rejected": 0,
            "errors": 0,
            "average_processing_time": 0.0,
            "last_composition_time": None
        }

    async def compose(self, year: int, events: List[str]) -> CompositionResult:
        """Judge the first six events for ``year`` and report the outcome."""
        if len(events) < PUZZLE_EVENT_COUNT:
            return CompositionResult(
                status=CompositionStatus.FAILED,
                reason=f"Need at least {PUZZLE_EVENT_COUNT} events, got {len(events)}",
                attempts=0
            )

        start_time = time.time()
        hints = events[:PUZZLE_EVENT_COUNT]

        if has_obvious_redundancy(hints):
            logger.info(f"Year {year} rejected before judging: redundant hints")
            self._update_stats("rejected", time.time() - start_time)
            return CompositionResult(
                status=CompositionStatus.FAILED,
                reason="Hints are near-duplicates of each other",
                attempts=1
            )

        era = Era.BCE if year < 0 else Era.CE
        judge_input = PuzzleJudgeInput(year=abs(year), era=era.value, events=hints)

        try:
            result = self.judge_agent.judge(judge_input)

        except (ModelCallError, ValueError) as e:
            logger.error(f"Composition failed for year {year}: {e}")
            self._update_stats("errors", time.time() - start_time)
            return CompositionResult(status=CompositionStatus.FAILED, reason=str(e), attempts=1)

        judgment = result.judgment
        if judgment.approved:
            logger.info(f"Puzzle approved for year {year} (quality {judgment.quality_score})")
            self._update_stats("approved", time.time() - start_time)
            return CompositionResult(
                status=CompositionStatus.SUCCESS,
                ordered_events=judgment.ordering.recommended,
                judgment=judgment,
                attempts=1
            )

        logger.info(f"Puzzle rejected for year {year} (quality {judgment.quality_score}): {judgment.issues}")
        self._update_stats("rejected", time.time() - start_time)
        return CompositionResult(
            status=CompositionStatus.FAILED,
            reason="; ".join(judgment.issues) or "Below quality threshold",
            attempts=1,
            last_judgment=judgment
        )

    async def compose_with_retries(self, get_year_candidates: YearCandidates,
                                   max_attempts: Optional[int] = None) -> CompositionResult:
        """Try successive candidate years until one is approved."""
        max_attempts = max_attempts or settings.max_composition_attempts
        attempted_years: List[int] = []
        last_result: Optional[CompositionResult] = None

        for attempt in range(max_attempts):
            candidates = await get_year_candidates()

            if candidates is None:
                return CompositionResult(
                    status=CompositionStatus.FAILED,
                    reason="No more year candidates available",
                    attempts=attempt,
                    attempted_years=attempted_years
                )

            year, events = candidates
            attempted_years.append(year)

            result = await self.compose(year, events)
            last_result = result

            if result.succeeded:
                return result.model_copy(update={"attempts": attempt + 1, "attempted_years": attempted_years})

            logger.info(f"Year {year} rejected (attempt {attempt + 1}/{max_attempts}): {result.reason}")

        return CompositionResult(
            status=CompositionStatus.FAILED,
            reason=f"All {max_attempts} attempts failed",
            attempts=max_attempts,
            last_judgment=last_result.last_judgment if last_result else None,
            attempted_years=attempted_years
        )

    def _update_stats(self, outcome: str, processing_time: float):
        """Update composition statistics."""
        self.stats["total_compositions"] += 1
        self.stats[outcome] += 1

        total = self.stats["total_compositions"]
        current_avg = self.stats["average_processing_time"]
        self.stats["average_processing_time"] = ((current_avg * (total - 1)) + processing_time) / total
        self.stats["last_composition_time"] = datetime.now(timezone.utc).isoformat()

    def get_status(self) -> Dict[str, Any]:
        """Get current composer status and statistics."""
        return {
            "composer_status": "operational",
            "judge": {"status": "ready", "model": self.judge_agent.model_name},
            "statistics": self.stats,
            "configuration": {
                "max_composition_attempts": settings.max_composition_attempts,
                "judge_temperature": settings.judge_temperature,
                "cache_ttl_seconds": settings.cache_ttl_seconds
            }
        }


def legacy_shuffle_events(events: List[str], rng: Optional[random.Random] = None) -> List[str]:
    """Fisher-Yates shuffle, used when the judge is unavailable or every attempt failed."""
    rng = rng or random.Random()
    shuffled = list(events)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
