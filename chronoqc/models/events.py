"""Historical event and leaky phrase models."""

from typing import Dict, FrozenSet, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import EventReuseError
from ..text import content_tokens

# Metadata schema used to score completeness.
METADATA_FIELDS = ("difficulty", "category", "era", "fame_level", "tags")


class EventMetadata(BaseModel):
    """Optional enrichment attached to an event after generation."""

    difficulty: Optional[int] = Field(None, ge=1, le=5, description="Difficulty from 1 (easy) to 5 (hard)")
    category: Optional[List[str]] = Field(None, description="Topic categories, e.g. war, science")
    era: Optional[str] = Field(None, description="Era tag")
    fame_level: Optional[int] = Field(None, ge=1, le=5, description="How widely known the event is")
    tags: Optional[List[str]] = Field(None, description="Free-form tags")

    def present_fields(self) -> List[str]:
        """Names of metadata fields that carry a value."""
        return [name for name in METADATA_FIELDS if getattr(self, name) is not None]


class Event(BaseModel):
    """A historical fact candidate.

    Years use the astronomical convention: BCE years are negative.
    """

    id: Optional[str] = Field(None, description="Storage identifier")
    year: int = Field(..., description="Signed year of the event")
    text: str = Field(..., description="Clue text shown to players")
    metadata: Optional[EventMetadata] = Field(None, description="Optional enrichment")

    # game mode -> puzzle id
    used_in: Dict[str, str] = Field(default_factory=dict, description="Puzzles that consumed this event, per mode")

    def mark_used(self, mode: str, puzzle_id: str) -> None:
        """Attach the event to a puzzle, at most once per game mode."""
        current = self.used_in.get(mode)
        if current is not None and current != puzzle_id:
            raise EventReuseError(
                f"Event {self.id or self.text!r} already used by puzzle {current} in mode {mode!r}"
            )
        self.used_in[mode] = puzzle_id

    def is_available_for(self, mode: str) -> bool:
        """Whether the event can still be placed in a puzzle of ``mode``."""
        return mode not in self.used_in


class LeakyPhrase(BaseModel):
    """A phrase known to reveal its year too directly.

    Only ``phrase`` and ``year_range`` are persisted; ``tokens`` is always
    derived from the phrase.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    phrase: str = Field(..., description="Normalized (lowercased, truncated) phrase")
    year_range: Tuple[int, int] = Field(..., alias="yearRange", description="Inclusive [start, end] years")

    @field_validator("year_range")
    @classmethod
    def _check_range(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        start, end = value
        if start > end:
            raise ValueError(f"Year range start {start} is after end {end}")
        return value

    @property
    def tokens(self) -> FrozenSet[str]:
        return content_tokens(self.phrase)

    def to_record(self) -> Dict[str, object]:
        """Persisted form: ``{"phrase": ..., "yearRange": [start, end]}``."""
        return {"phrase": self.phrase, "yearRange": list(self.year_range)}
