"""Persistence helpers for the integrity core."""

from .phrase_store import LeakyPhraseStore
from .cache import CacheManager

__all__ = ["LeakyPhraseStore", "CacheManager"]
