"""Pipeline orchestration for puzzle composition."""

from .composer import PuzzleComposer, legacy_shuffle_events

__all__ = ["PuzzleComposer", "legacy_shuffle_events"]
