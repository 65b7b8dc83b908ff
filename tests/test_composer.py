"""Tests for the puzzle composer."""

import random
import pytest
from unittest.mock import Mock

from chronoqc.agents import PuzzleJudgeAgent
from chronoqc.exceptions import ModelCallError
from chronoqc.models import (
    CompositionScores, CompositionStatus, JudgeResult, LLMUsage, OrderingRecommendation, PuzzleJudgment
)
from chronoqc.pipeline import PuzzleComposer, legacy_shuffle_events

EVENTS = [
    "Alaric sacks Rome",
    "Honorius withdraws legions from Britain",
    "Chinese Jin dynasty emperor captured",
    "Visigoths settle in Aquitaine",
    "Pelagius teaches free will doctrine",
    "Hypatia lectures in Alexandria",
]


def create_result(approved=True, issues=None):
    """Create a judge result as the agent would return it."""
    judgment = PuzzleJudgment(
        approved=approved,
        quality_score=0.81 if approved else 0.45,
        ordering=OrderingRecommendation(recommended=list(reversed(EVENTS)), rationale="hard to easy"),
        composition=CompositionScores(
            topic_diversity=0.8, geographic_spread=0.7, difficulty_gradient=0.9, guessability=0.8
        ),
        issues=issues or []
    )
    return JudgeResult(judgment=judgment, llm=LLMUsage(model="gpt-4o-mini"))


class TestPuzzleComposer:
    """Tests for PuzzleComposer."""

    @pytest.fixture
    def mock_judge(self):
        """Create a mock judge agent."""
        judge = Mock(spec=PuzzleJudgeAgent)
        judge.model_name = "gpt-4o-mini"
        judge.judge.return_value = create_result()
        return judge

    @pytest.fixture
    def composer(self, mock_judge):
        """Create a composer with a mocked judge."""
        return PuzzleComposer(judge_agent=mock_judge)

    def candidate_source(self, *candidates):
        """Async candidate source yielding the given (year, events) pairs, then None."""
        queue = list(candidates)

        async def get_year_candidates():
            return queue.pop(0) if queue else None

        return get_year_candidates

    def test_composer_initialization(self, composer):
        """Test composer initialization."""
        assert composer.stats["total_compositions"] == 0
        assert composer.stats["approved"] == 0

    @pytest.mark.asyncio
    async def test_compose_success(self, composer, mock_judge):
        """Test an approved judgment yields the judge's ordering."""
        result = await composer.compose(410, EVENTS)

        assert result.status == CompositionStatus.SUCCESS
        assert result.ordered_events == list(reversed(EVENTS))
        assert result.attempts == 1
        assert composer.stats["approved"] == 1

        judge_input = mock_judge.judge.call_args.args[0]
        assert judge_input.era == "CE"
        assert judge_input.year == 410

    @pytest.mark.asyncio
    async def test_compose_bce_year(self, composer, mock_judge):
        """Test negative years are presented as positive BCE years."""
        await composer.compose(-44, EVENTS)

        judge_input = mock_judge.judge.call_args.args[0]
        assert judge_input.era == "BCE"
        assert judge_input.year == 44

    @pytest.mark.asyncio
    async def test_compose_too_few_events(self, composer, mock_judge):
        """Test fewer than six events fails without calling the judge."""
        result = await composer.compose(410, EVENTS[:4])

        assert result.status == CompositionStatus.FAILED
        assert result.attempts == 0
        mock_judge.judge.assert_not_called()

    @pytest.mark.asyncio
    async def test_compose_redundant_hints(self, composer, mock_judge):
        """Test near-duplicate hints are rejected before judging."""
        events = EVENTS[:4] + ["Visigoths under Alaric sack Rome", "Alaric and Visigoths sack Rome again"]

        result = await composer.compose(410, events)

        assert result.status == CompositionStatus.FAILED
        assert result.reason == "Hints are near-duplicates of each other"
        mock_judge.judge.assert_not_called()

    @pytest.mark.asyncio
    async def test_compose_rejected(self, composer, mock_judge):
        """Test a rejection reports the judge's issues."""
        mock_judge.judge.return_value = create_result(approved=False, issues=["Too Western", "Flat gradient"])

        result = await composer.compose(410, EVENTS)

        assert result.status == CompositionStatus.FAILED
        assert result.reason == "Too Western; Flat gradient"
        assert result.last_judgment is not None
        assert composer.stats["rejected"] == 1

    @pytest.mark.asyncio
    async def test_compose_rejected_without_issues(self, composer, mock_judge):
        """Test a bare rejection gets a default reason."""
        mock_judge.judge.return_value = create_result(approved=False)

        result = await composer.compose(410, EVENTS)

        assert result.reason == "Below quality threshold"

    @pytest.mark.asyncio
    async def test_compose_judge_error(self, composer, mock_judge):
        """Test a model failure is reported, not raised."""
        mock_judge.judge.side_effect = ModelCallError("provider down")

        result = await composer.compose(410, EVENTS)

        assert result.status == CompositionStatus.FAILED
        assert result.reason == "provider down"
        assert composer.stats["errors"] == 1

    @pytest.mark.asyncio
    async def test_retries_until_approved(self, composer, mock_judge):
        """Test later years are tried after a rejection."""
        mock_judge.judge.side_effect = [create_result(approved=False), create_result()]
        source = self.candidate_source((410, EVENTS), (476, EVENTS))

        result = await composer.compose_with_retries(source, max_attempts=3)

        assert result.succeeded
        assert result.attempts == 2
        assert result.attempted_years == [410, 476]

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, composer, mock_judge):
        """Test every attempt failing is reported with the last judgment."""
        mock_judge.judge.return_value = create_result(approved=False)
        source = self.candidate_source((410, EVENTS), (476, EVENTS), (455, EVENTS))

        result = await composer.compose_with_retries(source, max_attempts=2)

        assert not result.succeeded
        assert result.reason == "All 2 attempts failed"
        assert result.attempts == 2
        assert result.last_judgment is not None
        assert result.attempted_years == [410, 476]

    @pytest.mark.asyncio
    async def test_retries_run_out_of_candidates(self, composer, mock_judge):
        """Test the loop stops when no more years are available."""
        mock_judge.judge.return_value = create_result(approved=False)
        source = self.candidate_source((410, EVENTS))

        result = await composer.compose_with_retries(source, max_attempts=3)

        assert result.reason == "No more year candidates available"
        assert result.attempts == 1
        assert result.attempted_years == [410]

    def test_get_status(self, composer):
        """Test getting composer status."""
        status = composer.get_status()

        assert status["composer_status"] == "operational"
        assert status["judge"]["model"] == "gpt-4o-mini"
        assert "statistics" in status
        assert "configuration" in status


class TestLegacyShuffle:
    """Tests for legacy_shuffle_events."""

    def test_shuffle_is_permutation(self):
        """Test shuffling keeps every event once."""
        shuffled = legacy_shuffle_events(EVENTS, rng=random.Random(7))

        assert sorted(shuffled) == sorted(EVENTS)
        assert EVENTS[0] == "Alaric sacks Rome"

    def test_shuffle_is_seedable(self):
        """Test the same seed gives the same order."""
        assert legacy_shuffle_events(EVENTS, random.Random(3)) == legacy_shuffle_events(EVENTS, random.Random(3))
