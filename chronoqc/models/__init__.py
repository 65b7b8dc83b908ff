"""Data models for the puzzle integrity core."""

from .events import Event, EventMetadata, LeakyPhrase, METADATA_FIELDS
from .judgments import (
    Era,
    CompositionScores,
    OrderingRecommendation,
    PuzzleJudgment,
    PuzzleJudgeInput,
    LLMUsage,
    JudgeResult,
    CompositionStatus,
    CompositionResult,
    PUZZLE_EVENT_COUNT
)
from .quality import (
    LeakageScore,
    QualityScores,
    ValidationResult,
    EventCritique,
    ScoreVector,
    RunQualityScores
)
from .order import PositionFeedback, OrderEvent, OrderAttempt, AttemptValidation, OrderScore
from .coverage import (
    EraBucket,
    YearCandidateSource,
    YearStats,
    PuzzleDemandRecord,
    CoverageGaps,
    PuzzleDemand,
    YearCandidate,
    CoverageStrategy
)

__all__ = [
    "Event",
    "EventMetadata",
    "LeakyPhrase",
    "METADATA_FIELDS",
    "Era",
    "CompositionScores",
    "OrderingRecommendation",
    "PuzzleJudgment",
    "PuzzleJudgeInput",
    "LLMUsage",
    "JudgeResult",
    "CompositionStatus",
    "CompositionResult",
    "PUZZLE_EVENT_COUNT",
    "LeakageScore",
    "QualityScores",
    "ValidationResult",
    "EventCritique",
    "ScoreVector",
    "RunQualityScores",
    "PositionFeedback",
    "OrderEvent",
    "OrderAttempt",
    "AttemptValidation",
    "OrderScore",
    "EraBucket",
    "YearCandidateSource",
    "YearStats",
    "PuzzleDemandRecord",
    "CoverageGaps",
    "PuzzleDemand",
    "YearCandidate",
    "CoverageStrategy"
]
