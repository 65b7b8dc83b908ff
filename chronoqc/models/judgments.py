"""Puzzle composition judgment models."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

# Judged puzzles always carry this many clues.
PUZZLE_EVENT_COUNT = 6


class Era(str, Enum):
    """Era literal used when presenting a target year to the judge."""
    BCE = "BCE"
    CE = "CE"


class CompositionScores(BaseModel):
    """The four dimensions a puzzle is judged on, each in [0, 1]."""

    model_config = ConfigDict(populate_by_name=True)

    topic_diversity: float = Field(..., ge=0.0, le=1.0, alias="topicDiversity")
    geographic_spread: float = Field(..., ge=0.0, le=1.0, alias="geographicSpread")
    difficulty_gradient: float = Field(..., ge=0.0, le=1.0, alias="difficultyGradient")
    guessability: float = Field(..., ge=0.0, le=1.0, alias="guessability")


class OrderingRecommendation(BaseModel):
    """Hint order proposed by the judge, hardest first."""

    recommended: List[str] = Field(..., min_length=PUZZLE_EVENT_COUNT, max_length=PUZZLE_EVENT_COUNT)
    rationale: str = Field(..., description="Why this order")


class PuzzleJudgment(BaseModel):
    """Verdict on a candidate puzzle.

    Coming from the model this is only a claim. Once it has passed through
    ``enforce_approval_thresholds`` the ``approved`` and ``quality_score``
    fields hold recomputed values.
    """

    model_config = ConfigDict(populate_by_name=True)

    approved: bool = Field(..., description="Approval decision")
    quality_score: float = Field(..., ge=0.0, le=1.0, alias="qualityScore")
    ordering: OrderingRecommendation
    composition: CompositionScores
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class PuzzleJudgeInput(BaseModel):
    """Input to the puzzle judge. Checked by ``validate_judge_input``."""

    year: int = Field(..., description="Display year, always positive")
    era: str = Field(..., description="BCE or CE")
    events: List[str] = Field(..., description="Candidate clue texts")


class LLMUsage(BaseModel):
    """Usage metadata reported by the model client. Not interpreted by the core."""

    model: str
    request_id: Optional[str] = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cache_hit: bool = False


class JudgeResult(BaseModel):
    """Authoritative judgment plus the usage metadata of the call that produced it."""

    judgment: PuzzleJudgment
    llm: LLMUsage


class CompositionStatus(str, Enum):
    """Outcome of a composition attempt."""
    SUCCESS = "success"
    FAILED = "failed"


class CompositionResult(BaseModel):
    """Result of composing a puzzle for one or more candidate years."""

    status: CompositionStatus
    attempts: int = Field(..., ge=0, description="Number of judge attempts made")
    ordered_events: Optional[List[str]] = Field(None, description="Final hint order when successful")
    judgment: Optional[PuzzleJudgment] = Field(None, description="Judgment of the successful attempt")
    reason: Optional[str] = Field(None, description="Why composition failed")
    last_judgment: Optional[PuzzleJudgment] = Field(None, description="Judgment of the last rejected attempt")
    attempted_years: List[int] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == CompositionStatus.SUCCESS
