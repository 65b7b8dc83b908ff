"""Approval thresholds for puzzle composition judgments.

The model's own ``approved`` and ``qualityScore`` are never trusted. The score
is recomputed from fixed weights and approval is decided from it and the
individual dimension scores.
"""

import logging
from typing import List

from ..claims import reconcile
from ..exceptions import InvalidJudgeInputError
from ..models.judgments import CompositionScores, Era, PuzzleJudgeInput, PuzzleJudgment, PUZZLE_EVENT_COUNT

logger = logging.getLogger(__name__)

# Gradient and guessability shape the player experience most.
QUALITY_WEIGHTS = {
    "topic_diversity": 0.2,
    "geographic_spread": 0.2,
    "difficulty_gradient": 0.3,
    "guessability": 0.3,
}

APPROVAL_THRESHOLD = 0.6
MIN_COMPONENT_SCORE = 0.4

# Reporting order and wire names of the dimensions.
DIMENSION_NAMES = [
    ("topic_diversity", "topicDiversity"),
    ("geographic_spread", "geographicSpread"),
    ("difficulty_gradient", "difficultyGradient"),
    ("guessability", "guessability"),
]


def compute_quality_score(composition: CompositionScores) -> float:
    """Weighted sum of the composition dimensions, rounded to 3 decimals."""
    raw = sum(weight * getattr(composition, name) for name, weight in QUALITY_WEIGHTS.items())
    return round(raw, 3)


def low_components(composition: CompositionScores) -> List[str]:
    """Wire names of dimensions below the per-component minimum."""
    return [
        wire_name for name, wire_name in DIMENSION_NAMES
        if getattr(composition, name) < MIN_COMPONENT_SCORE
    ]


def enforce_approval_thresholds(judgment: PuzzleJudgment) -> PuzzleJudgment:
    """Return a copy of ``judgment`` with recomputed score and approval.

    When the claim was "approved" but the thresholds say otherwise, the
    reasons are appended to ``issues``. A claimed rejection gets no extra
    issues.
    """
    composition = judgment.composition
    computed_score = compute_quality_score(composition)
    failing = low_components(composition)

    meets_overall = computed_score >= APPROVAL_THRESHOLD
    meets_components = not failing
    should_approve = meets_overall and meets_components

    approved, discrepancy = reconcile("approved", judgment.approved, should_approve)

    issues = list(judgment.issues)
    if discrepancy is not None and judgment.approved:
        if not meets_overall:
            issues.append(f"Quality score {computed_score:.2f} below {APPROVAL_THRESHOLD} threshold")
        if not meets_components:
            issues.append(f"Low scores: {', '.join(failing)}")
        logger.info(f"Overrode judge approval: {discrepancy.note}")
    elif discrepancy is not None:
        logger.info(f"Judge rejected a puzzle that meets thresholds (score {computed_score:.3f}), approving")

    return judgment.model_copy(update={
        "quality_score": computed_score,
        "approved": approved,
        "issues": issues,
    })


def validate_judge_input(judge_input: PuzzleJudgeInput) -> None:
    """Reject inputs the judge cannot work with."""
    if len(judge_input.events) < PUZZLE_EVENT_COUNT:
        raise InvalidJudgeInputError(
            f"Need at least {PUZZLE_EVENT_COUNT} events for a puzzle, got {len(judge_input.events)}"
        )
    if judge_input.era not in (Era.BCE.value, Era.CE.value):
        raise InvalidJudgeInputError(f"Invalid era: {judge_input.era}")
