"""Deterministic puzzle checks that need no model call."""

import re
from typing import Any, Dict, List, Sequence

from ..exceptions import CallerInputError

_NON_WORD = re.compile(r"[^a-z0-9\s]")

REDUNDANCY_OVERLAP = 0.6
MIN_SIGNIFICANT_WORD_LENGTH = 4


def _significant_words(hint: str) -> set:
    normalized = _NON_WORD.sub("", hint.lower())
    return {word for word in normalized.split() if len(word) >= MIN_SIGNIFICANT_WORD_LENGTH}


def has_obvious_redundancy(hints: Sequence[str]) -> bool:
    """True when any two hints share more than 60% of their significant words.

    Cheap pre-filter to run before asking the judge.
    """
    word_sets = [_significant_words(hint) for hint in hints]

    for i in range(len(word_sets)):
        for j in range(i + 1, len(word_sets)):
            min_size = min(len(word_sets[i]), len(word_sets[j]))
            if min_size == 0:
                continue
            overlap = len(word_sets[i] & word_sets[j])
            if overlap / min_size > REDUNDANCY_OVERLAP:
                return True

    return False


def has_topic_diversity(events: Sequence[Dict[str, Any]], min_categories: int = 3) -> bool:
    """True when the events span at least ``min_categories`` categories."""
    return len({event["category"] for event in events}) >= min_categories


def select_diverse_hints(events: Sequence[Dict[str, Any]], count: int = 6) -> List[str]:
    """Pick ``count`` hint texts spread across categories and difficulties.

    Events are taken easiest first, one per category, then the remaining
    slots are filled in difficulty order.
    """
    if len(events) < count:
        raise CallerInputError(f"Need at least {count} events, got {len(events)}")

    ordered = sorted(events, key=lambda event: event["difficulty"])

    selected: List[Dict[str, Any]] = []
    used_categories = set()
    for event in ordered:
        if len(selected) >= count:
            break
        if event["category"] not in used_categories:
            selected.append(event)
            used_categories.add(event["category"])

    for event in ordered:
        if len(selected) >= count:
            break
        if not any(event is chosen for chosen in selected):
            selected.append(event)

    return [event["text"] for event in selected[:count]]
