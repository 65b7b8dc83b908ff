"""Server-side verification of Order game submissions.

Everything here is recomputed from the puzzle's stored event years. Nothing a
client sends about feedback or pair counts is used as input.

Three layers, cheapest first:

1. ``would_solve``: is the ordering the chronological order at all.
2. ``evaluate_ordering``: per-position feedback and correctly ordered pairs.
3. ``is_solved``: every position of a (verified) attempt is correct.
"""

from typing import Dict, List, Sequence, Tuple, Union

from ..exceptions import MalformedOrderingError
from ..models.order import AttemptValidation, OrderAttempt, OrderEvent, PositionFeedback


def get_correct_order(events: Sequence[OrderEvent]) -> List[str]:
    """Event ids in chronological order, ties broken by id."""
    return [event.id for event in sorted(events, key=lambda event: (event.year, event.id))]


def _check_ordering(ordering: Sequence[str], correct_order: Sequence[str]) -> None:
    if len(ordering) != len(correct_order):
        raise MalformedOrderingError(
            f"Ordering has {len(ordering)} events, puzzle has {len(correct_order)}"
        )
    if set(ordering) != set(correct_order) or len(set(ordering)) != len(ordering):
        raise MalformedOrderingError("Ordering does not contain exactly the puzzle's events")


def would_solve(ordering: Sequence[str], events: Sequence[OrderEvent]) -> bool:
    """True iff ``ordering`` is exactly the chronological order."""
    correct_order = get_correct_order(events)
    _check_ordering(ordering, correct_order)
    return list(ordering) == correct_order


def evaluate_ordering(ordering: Sequence[str], events: Sequence[OrderEvent]) -> AttemptValidation:
    """Recompute feedback and pair counts for ``ordering`` from the event years."""
    correct_order = get_correct_order(events)
    _check_ordering(ordering, correct_order)

    feedback = [
        PositionFeedback.CORRECT if event_id == correct_order[index] else PositionFeedback.INCORRECT
        for index, event_id in enumerate(ordering)
    ]
    pairs_correct, total_pairs = count_correct_pairs(ordering, correct_order)

    return AttemptValidation(
        ordering=list(ordering),
        feedback=feedback,
        pairs_correct=pairs_correct,
        total_pairs=total_pairs
    )


def is_solved(attempt: Union[AttemptValidation, OrderAttempt]) -> bool:
    """True iff every position of ``attempt`` is correct.

    Only meaningful on an attempt whose feedback came from ``evaluate_ordering``.
    """
    return all(entry == PositionFeedback.CORRECT for entry in attempt.feedback)


def count_correct_pairs(ordering: Sequence[str], correct_order: Sequence[str]) -> Tuple[int, int]:
    """Count index pairs ``i < j`` whose events keep their chronological order.

    Returns ``(correct, total)`` where total is ``n * (n - 1) / 2``.
    """
    n = len(ordering)
    total = n * (n - 1) // 2
    position: Dict[str, int] = {event_id: index for index, event_id in enumerate(correct_order)}

    correct = 0
    for i in range(n):
        for j in range(i + 1, n):
            if position[ordering[i]] < position[ordering[j]]:
                correct += 1

    return correct, total
