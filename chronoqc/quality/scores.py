"""Quality summary for a generation run.

overall = 0.35*factual + 0.35*guessability + 0.2*(1 - leak_risk) + 0.1*(1 - ambiguity)
"""

from typing import Iterable, List, Sequence

import numpy as np

from ..models.quality import EventCritique, RunQualityScores, ScoreVector

OVERALL_WEIGHTS = {
    "factual": 0.35,
    "guessability": 0.35,
    "leak_risk": 0.2,   # inverted
    "ambiguity": 0.1,   # inverted
}


def _to_vector(critique: EventCritique) -> List[float]:
    scores = critique.scores
    return [scores.factual, scores.semantic_leakage, scores.ambiguity, scores.guessability]


def average_scores(critiques: Sequence[EventCritique]) -> ScoreVector:
    """Mean of each score dimension. Empty input averages to zeros."""
    if not critiques:
        return ScoreVector()

    factual, leak_risk, ambiguity, guessability = np.mean([_to_vector(c) for c in critiques], axis=0)
    return ScoreVector(
        factual=float(factual),
        leak_risk=float(leak_risk),
        ambiguity=float(ambiguity),
        guessability=float(guessability)
    )


def overall_score(vector: ScoreVector) -> float:
    """Weighted composite clamped to [0, 1] and rounded to 4 decimals."""
    raw = (
        OVERALL_WEIGHTS["factual"] * vector.factual +
        OVERALL_WEIGHTS["guessability"] * vector.guessability +
        OVERALL_WEIGHTS["leak_risk"] * (1 - vector.leak_risk) +
        OVERALL_WEIGHTS["ambiguity"] * (1 - vector.ambiguity)
    )
    return round(float(np.clip(raw, 0.0, 1.0)), 4)


def compute_quality_scores(critiques: Sequence[EventCritique], selected_texts: Iterable[str]) -> RunQualityScores:
    """Summarize all critiques of a run and the subset selected for import.

    Selected events are matched back to their critiques by text. If none match,
    the overall score falls back to the average over all candidates.
    """
    selected_texts = list(selected_texts)
    if not critiques:
        return RunQualityScores()

    avg = average_scores(critiques)

    by_text = {critique.event_text: critique for critique in critiques}
    selected = [by_text[text] for text in selected_texts if text in by_text]
    selected_avg = average_scores(selected) if selected else avg

    return RunQualityScores(
        candidate_count=len(critiques),
        pass_count=sum(1 for critique in critiques if critique.passed),
        selected_count=len(selected_texts),
        overall=overall_score(selected_avg),
        avg=avg,
        selected_avg=selected_avg
    )
