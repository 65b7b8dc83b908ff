"""Semantic leakage detection against a learned list of leaky phrases."""

import logging
from typing import Iterable, List, Optional, Tuple

from ..database.phrase_store import LeakyPhraseStore
from ..models.events import LeakyPhrase
from ..models.quality import LeakageScore
from ..text import content_tokens

logger = logging.getLogger(__name__)

# Learned phrases are truncated to keep store entries compact.
MAX_PHRASE_LENGTH = 180


class SemanticLeakageDetector:
    """Scores how much a text overlaps with phrasing known to reveal a year.

    The score for one phrase is its recall: the share of the phrase's content
    tokens that also appear in the text. A long sentence that contains a short
    leaky phrase in full therefore scores 1.0.
    """

    def __init__(self, store: Optional[LeakyPhraseStore] = None, phrases: Optional[Iterable[LeakyPhrase]] = None):
        """Initialize from explicit ``phrases`` or by loading ``store``."""
        self.store = store
        if phrases is not None:
            self.phrases: List[LeakyPhrase] = list(phrases)
        elif store is not None:
            self.phrases = store.load()
        else:
            self.phrases = []

    def score(self, text: str) -> LeakageScore:
        """Maximum recall of any stored phrase against ``text``."""
        if not self.phrases:
            return LeakageScore(score=0.0)

        text_tokens = content_tokens(text)
        best: Optional[LeakyPhrase] = None
        best_score = 0.0

        for phrase in self.phrases:
            phrase_tokens = phrase.tokens
            if not phrase_tokens:
                continue
            recall = len(phrase_tokens & text_tokens) / len(phrase_tokens)
            if recall > best_score:
                best_score = recall
                best = phrase

        return LeakageScore(score=min(1.0, max(0.0, best_score)), closest=best)

    def add_phrase(self, phrase: LeakyPhrase) -> None:
        """Append a phrase to the in-memory list."""
        self.phrases.append(phrase)

    def learn(self, text: str, year_range: Tuple[int, int]) -> Optional[LeakyPhrase]:
        """Record rejected ``text`` as a leaky phrase and persist the list.

        Persistence is best-effort: failures are logged and never raised.
        Blank text is ignored and an inverted ``year_range`` is reordered.
        """
        if not text.strip():
            return None

        start, end = min(year_range), max(year_range)
        phrase = LeakyPhrase(phrase=text.lower()[:MAX_PHRASE_LENGTH], year_range=(start, end))
        self.add_phrase(phrase)
        logger.info(f"Learned leaky phrase for years {start}-{end}: {phrase.phrase!r}")

        if self.store is not None:
            try:
                self.store.save(self.phrases)
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to persist leaky phrases to {self.store.path}: {e}")

        return phrase
