"""Order game models: puzzle events, attempts and scores."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class PositionFeedback(str, Enum):
    """Per-slot feedback for a submitted ordering."""
    CORRECT = "correct"
    INCORRECT = "incorrect"


class OrderEvent(BaseModel):
    """Event as stored on an Order puzzle."""

    id: str
    year: int
    text: str = ""


class OrderAttempt(BaseModel):
    """A single submission as reported by the client.

    ``feedback``, ``pairs_correct`` and ``total_pairs`` are claims and must be
    checked against ``evaluate_ordering`` before use.
    """

    model_config = ConfigDict(populate_by_name=True)

    ordering: List[str]
    feedback: List[str] = Field(default_factory=list)
    pairs_correct: int = Field(0, alias="pairsCorrect")
    total_pairs: int = Field(0, alias="totalPairs")
    timestamp: Optional[float] = None


class AttemptValidation(BaseModel):
    """Server-recomputed evaluation of an ordering."""

    model_config = ConfigDict(populate_by_name=True)

    ordering: List[str]
    feedback: List[PositionFeedback]
    pairs_correct: int = Field(..., alias="pairsCorrect")
    total_pairs: int = Field(..., alias="totalPairs")


class OrderScore(BaseModel):
    """Points for an ordering. ``perfect_positions`` is display only."""

    total_score: int
    correct_pairs: int
    total_pairs: int
    perfect_positions: int
    hints_used: int = 0
