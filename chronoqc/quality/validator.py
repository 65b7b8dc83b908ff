"""Quality validator combining leakage and metadata completeness."""

import logging
from collections.abc import Mapping
from typing import Any, Optional, Tuple

from pydantic import BaseModel

from ..models.events import Event, METADATA_FIELDS
from ..models.quality import QualityScores, ValidationResult
from .leakage import SemanticLeakageDetector

logger = logging.getLogger(__name__)

LEAKAGE_THRESHOLD = 0.6
METADATA_THRESHOLD = 0.5

# Reserved dimensions with no signal source yet.
PLACEHOLDER_SCORE = 0.5

SUGGEST_REMOVE_LEAKS = "Remove phrases that reveal the year"
SUGGEST_ADD_METADATA = "Add/normalize metadata fields"


class QualityValidator:
    """Pass/fail verdicts for candidate events."""

    def __init__(self, leakage_detector: Optional[SemanticLeakageDetector] = None):
        """Initialize the validator with a leakage detector."""
        self.leakage_detector = leakage_detector or SemanticLeakageDetector()

    def validate(self, event: Event) -> ValidationResult:
        """Validate an ``Event`` model."""
        return self.validate_event(event.text, event.year, event.metadata)

    def validate_event(self, text: str, year: int, metadata: Any = None) -> ValidationResult:
        """Validate one event's text and metadata.

        ``year`` is accepted for symmetry with the generation pipeline; the
        verdict does not depend on it.
        """
        leak = self.leakage_detector.score(text)

        scores = QualityScores(
            semantic_leakage=leak.score,
            factual=PLACEHOLDER_SCORE,
            ambiguity=PLACEHOLDER_SCORE,
            guessability=PLACEHOLDER_SCORE,
            metadata_quality=self.score_metadata(metadata)
        )

        passed = scores.semantic_leakage < LEAKAGE_THRESHOLD and scores.metadata_quality >= METADATA_THRESHOLD

        suggestions = []
        if scores.semantic_leakage >= LEAKAGE_THRESHOLD:
            suggestions.append(SUGGEST_REMOVE_LEAKS)
        if scores.metadata_quality < METADATA_THRESHOLD:
            suggestions.append(SUGGEST_ADD_METADATA)

        if leak.closest is not None:
            reasoning = f'Closest leak phrase: "{leak.closest.phrase}" (score {leak.score:.2f})'
        else:
            reasoning = "No strong leakage detected"

        if not passed:
            logger.debug(f"Event for year {year} failed validation: {reasoning}; {suggestions}")

        return ValidationResult(passed=passed, scores=scores, reasoning=reasoning, suggestions=suggestions)

    def learn_from_rejected(self, text: str, year_range: Tuple[int, int]) -> None:
        """Teach the leakage detector about text rejected for revealing its year."""
        self.leakage_detector.learn(text, year_range)

    @staticmethod
    def score_metadata(metadata: Any) -> float:
        """Fraction of the metadata schema present. Non-objects score 0."""
        if isinstance(metadata, BaseModel):
            keys = set(metadata.model_dump(exclude_none=True))
        elif isinstance(metadata, Mapping):
            keys = set(metadata)
        else:
            return 0.0

        present = sum(1 for key in METADATA_FIELDS if key in keys)
        return present / len(METADATA_FIELDS)
