"""Append-only, file-backed store of leaky phrases."""

import json
import logging
import os
import tempfile
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from ..config import settings
from ..models.events import LeakyPhrase

logger = logging.getLogger(__name__)


class LeakyPhraseStore:
    """JSON file holding ``[{"phrase": ..., "yearRange": [start, end]}, ...]``.

    The store is append-only. Entries that fail validation are kept aside on
    ``load()`` and written back unchanged, at their original positions, on
    ``save()``. If the file exists but could not be read, ``save()`` refuses
    to overwrite it.

    Writes go to a temporary file in the same directory which is then renamed
    over the store, so readers only ever see a complete snapshot.
    """

    def __init__(self, path: Optional[str] = None):
        """Initialize the store at ``path`` (defaults to the configured location)."""
        self.path = path or settings.leaky_phrases_path
        self.load_failed = False
        self._unparsed: List[Tuple[int, Any]] = []

    def load(self) -> List[LeakyPhrase]:
        """Load all valid phrases. A missing or unreadable store yields an empty list."""
        self.load_failed = False
        self._unparsed = []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            logger.info(f"No leaky phrase store at {self.path}, starting empty")
            return []
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading leaky phrase store {self.path}: {e}")
            self.load_failed = True
            return []

        if not isinstance(raw, list):
            logger.error(f"Leaky phrase store {self.path} is not a list, ignoring it")
            self.load_failed = True
            return []

        phrases = []
        for index, entry in enumerate(raw):
            try:
                phrases.append(LeakyPhrase.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Keeping unparseable leaky phrase entry {entry!r} as is: {e}")
                self._unparsed.append((index, entry))
        return phrases

    def save(self, phrases: List[LeakyPhrase]) -> None:
        """Atomically replace the store with ``phrases`` plus any unparsed entries.

        Skipped (and logged) when the last ``load()`` could not read the file.
        Raises ``OSError`` when the write fails.
        """
        if self.load_failed:
            logger.error(f"Not saving {len(phrases)} leaky phrases: {self.path} could not be read")
            return

        records: List[Any] = [phrase.to_record() for phrase in phrases]
        for index, entry in self._unparsed:
            records.insert(index, entry)

        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix=".leaky_phrases.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

        logger.debug(f"Persisted {len(records)} leaky phrases to {self.path}")
