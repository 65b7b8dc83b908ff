"""Order mode scoring."""

from typing import Sequence

from ..models.order import OrderEvent, OrderScore, PositionFeedback
from .validation import evaluate_ordering

POINTS_PER_PAIR = 2


def calculate_order_score(ordering: Sequence[str], events: Sequence[OrderEvent], hints_used: int = 0) -> OrderScore:
    """Score an ordering: two points per correctly ordered pair.

    An empty ordering is scored as the events' stored order, which is what the
    player sees before moving anything.
    """
    resolved = list(ordering) if ordering else [event.id for event in events]
    evaluation = evaluate_ordering(resolved, events)

    return OrderScore(
        total_score=evaluation.pairs_correct * POINTS_PER_PAIR,
        correct_pairs=evaluation.pairs_correct,
        total_pairs=evaluation.total_pairs,
        perfect_positions=sum(1 for entry in evaluation.feedback if entry == PositionFeedback.CORRECT),
        hints_used=hints_used
    )
