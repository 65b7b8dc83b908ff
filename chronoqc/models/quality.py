"""Event quality validation models."""

from typing import List, Optional
from pydantic import BaseModel, Field

from .events import LeakyPhrase


class LeakageScore(BaseModel):
    """How strongly a text echoes the closest known leaky phrase."""

    score: float = Field(..., ge=0.0, le=1.0)
    closest: Optional[LeakyPhrase] = Field(None, description="Phrase that produced the score")


class QualityScores(BaseModel):
    """Per-event score dimensions.

    ``factual``, ``ambiguity`` and ``guessability`` are fixed placeholders and
    take no part in the pass/fail decision.
    """

    semantic_leakage: float = Field(..., ge=0.0, le=1.0, description="0 = no leak, 1 = obvious leak")
    factual: float = Field(0.5, ge=0.0, le=1.0)
    ambiguity: float = Field(0.5, ge=0.0, le=1.0)
    guessability: float = Field(0.5, ge=0.0, le=1.0)
    metadata_quality: float = Field(..., ge=0.0, le=1.0)


class ValidationResult(BaseModel):
    """Pass/fail verdict for a single event."""

    passed: bool
    scores: QualityScores
    reasoning: str
    suggestions: List[str] = Field(default_factory=list)


class EventCritique(BaseModel):
    """A validated event, used to summarize a generation run."""

    event_text: str
    passed: bool
    scores: QualityScores


class ScoreVector(BaseModel):
    """Averaged score dimensions for a set of critiques."""

    factual: float = 0.0
    leak_risk: float = 0.0
    ambiguity: float = 0.0
    guessability: float = 0.0


class RunQualityScores(BaseModel):
    """Durable quality summary of one generation run."""

    version: int = 1
    candidate_count: int = 0
    pass_count: int = 0
    selected_count: int = 0
    overall: float = Field(0.0, ge=0.0, le=1.0, description="Weighted composite of the selected averages")
    avg: ScoreVector = Field(default_factory=ScoreVector)
    selected_avg: ScoreVector = Field(default_factory=ScoreVector)
