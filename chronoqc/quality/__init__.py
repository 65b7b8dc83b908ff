"""Content quality checks: leakage, validation, thresholds and run summaries."""

from .leakage import SemanticLeakageDetector
from .validator import QualityValidator
from .thresholds import enforce_approval_thresholds, validate_judge_input, compute_quality_score
from .puzzle_checks import has_obvious_redundancy, has_topic_diversity, select_diverse_hints
from .scores import compute_quality_scores

__all__ = [
    "SemanticLeakageDetector",
    "QualityValidator",
    "enforce_approval_thresholds",
    "validate_judge_input",
    "compute_quality_score",
    "has_obvious_redundancy",
    "has_topic_diversity",
    "select_diverse_hints",
    "compute_quality_scores"
]
