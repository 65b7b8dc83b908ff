"""Tokenization shared by the leakage detector and puzzle checks."""

import re
from typing import FrozenSet, List

_TOKEN_SPLIT = re.compile(r"[^a-z0-9]+")

# Function words carry no signal about a year. "s" is what "Napoleon's" leaves behind.
STOPWORDS: FrozenSet[str] = frozenset({
    # articles
    "a", "an", "the",
    # prepositions
    "about", "above", "after", "against", "along", "among", "around", "at", "before",
    "behind", "below", "beneath", "beside", "between", "beyond", "by", "despite", "down",
    "during", "except", "for", "from", "in", "inside", "into", "near", "of", "off", "on",
    "onto", "out", "outside", "over", "past", "since", "through", "throughout", "to",
    "toward", "towards", "under", "until", "up", "upon", "with", "within", "without",
    # conjunctions
    "and", "as", "because", "but", "if", "nor", "or", "so", "than", "that", "though",
    "unless", "when", "whereas", "whether", "while", "yet",
    # pronouns
    "he", "her", "hers", "him", "his", "i", "it", "its", "me", "my", "our", "ours", "she",
    "their", "theirs", "them", "they", "this", "these", "those", "us", "we", "what",
    "which", "who", "whom", "whose", "you", "your", "yours",
    # auxiliary verbs
    "am", "are", "be", "been", "being", "can", "could", "did", "do", "does", "had", "has",
    "have", "having", "is", "may", "might", "must", "shall", "should", "was", "were",
    "will", "would",
    # possessive artifact
    "s",
})


def split_tokens(text: str) -> List[str]:
    """Lowercase and split on non-alphanumeric runs, dropping empty tokens."""
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


def content_tokens(text: str) -> FrozenSet[str]:
    """Token set of ``text`` with stopwords removed."""
    return frozenset(token for token in split_tokens(text) if token not in STOPWORDS)
