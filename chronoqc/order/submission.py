"""Verification of a finished Order play before it is persisted."""

import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from ..claims import Discrepancy, reconcile
from ..exceptions import MalformedOrderingError
from ..models.order import AttemptValidation, OrderAttempt, OrderEvent, OrderScore
from .scoring import calculate_order_score
from .validation import evaluate_ordering, is_solved, would_solve

logger = logging.getLogger(__name__)


class OrderPlayVerdict(BaseModel):
    """Outcome of verifying a session.

    ``attempts`` and ``score`` are always the recomputed values; persist those,
    never what the client sent. ``accepted`` is False if any claim was forged
    or malformed.
    """

    accepted: bool
    discrepancies: List[Discrepancy] = Field(default_factory=list)
    attempts: List[AttemptValidation] = Field(default_factory=list)
    score: Optional[OrderScore] = None

    @property
    def reasons(self) -> List[str]:
        return [discrepancy.note for discrepancy in self.discrepancies]


def _verify_attempt(index: int, attempt: OrderAttempt, events: Sequence[OrderEvent],
                    discrepancies: List[Discrepancy]) -> Optional[AttemptValidation]:
    label = f"attempts[{index}]"

    try:
        recomputed = evaluate_ordering(attempt.ordering, events)
    except MalformedOrderingError as e:
        discrepancies.append(Discrepancy(
            field=f"{label}.ordering", claimed=attempt.ordering, recomputed=None,
            note=f"Attempt {index + 1} ordering is malformed: {e}"
        ))
        return None

    if len(attempt.feedback) != len(recomputed.feedback):
        discrepancies.append(Discrepancy(
            field=f"{label}.feedback", claimed=attempt.feedback, recomputed=recomputed.feedback,
            note=f"Attempt {index + 1} feedback has {len(attempt.feedback)} entries, expected {len(recomputed.feedback)}"
        ))
    else:
        _, mismatch = reconcile(f"{label}.feedback", attempt.feedback, recomputed.feedback,
                                note=f"Attempt {index + 1} feedback mismatch")
        if mismatch:
            discrepancies.append(mismatch)

    if attempt.pairs_correct > recomputed.total_pairs:
        discrepancies.append(Discrepancy(
            field=f"{label}.pairs_correct", claimed=attempt.pairs_correct, recomputed=recomputed.pairs_correct,
            note=f"Attempt {index + 1} claims {attempt.pairs_correct} pairs of {recomputed.total_pairs}"
        ))
    else:
        _, mismatch = reconcile(f"{label}.pairs_correct", attempt.pairs_correct, recomputed.pairs_correct,
                                note=f"Attempt {index + 1} pair counts incorrect")
        if mismatch:
            discrepancies.append(mismatch)

    _, mismatch = reconcile(f"{label}.total_pairs", attempt.total_pairs, recomputed.total_pairs,
                            note=f"Attempt {index + 1} pair counts incorrect")
    if mismatch:
        discrepancies.append(mismatch)

    return recomputed


def verify_order_play(final_ordering: Sequence[str], attempts: Sequence[OrderAttempt],
                      events: Sequence[OrderEvent], claimed_attempt_count: Optional[int] = None,
                      hints_used: int = 0) -> OrderPlayVerdict:
    """Run all three verification layers over a finished session.

    Mismatches are reported, not raised. The caller rejects the submission
    when ``accepted`` is False.
    """
    discrepancies: List[Discrepancy] = []

    if claimed_attempt_count is not None:
        _, mismatch = reconcile("score.attempts", claimed_attempt_count, len(attempts),
                                note="Score verification failed: attempts count mismatch")
        if mismatch:
            discrepancies.append(mismatch)

    if not attempts:
        discrepancies.append(Discrepancy(
            field="attempts", claimed=[], recomputed=None, note="Session has no attempts"
        ))

    # Layer 1
    try:
        solves = would_solve(final_ordering, events)
    except MalformedOrderingError as e:
        solves = False
        discrepancies.append(Discrepancy(
            field="ordering", claimed=list(final_ordering), recomputed=None,
            note=f"Final ordering is malformed: {e}"
        ))
    else:
        _, mismatch = reconcile("solved", True, solves,
                                note="Final ordering does not solve puzzle")
        if mismatch:
            discrepancies.append(mismatch)

    # Layer 2
    verified = [_verify_attempt(index, attempt, events, discrepancies) for index, attempt in enumerate(attempts)]

    # Layer 3, on the final attempt only
    if verified and verified[-1] is not None:
        _, mismatch = reconcile("attempts[-1].solved", True, is_solved(verified[-1]),
                                note="Final attempt is not solved")
        if mismatch:
            discrepancies.append(mismatch)

    recomputed_attempts = [attempt for attempt in verified if attempt is not None]
    score = calculate_order_score(final_ordering, events, hints_used) if solves else None
    accepted = not discrepancies

    if not accepted:
        logger.warning(f"Rejected order play: {'; '.join(d.note for d in discrepancies)}")

    return OrderPlayVerdict(
        accepted=accepted,
        discrepancies=discrepancies,
        attempts=recomputed_attempts,
        score=score
    )
