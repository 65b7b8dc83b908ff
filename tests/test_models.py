"""Tests for data models."""

import pytest
from pydantic import ValidationError

from chronoqc.exceptions import CallerInputError, EventReuseError
from chronoqc.models import (
    CompositionResult, CompositionScores, CompositionStatus, Event, EventMetadata,
    LeakyPhrase, OrderAttempt, PuzzleDemandRecord, PuzzleJudgment
)


class TestEvent:
    """Tests for Event model."""

    def test_create_basic_event(self):
        """Test creating an event without metadata."""
        event = Event(year=-44, text="Julius Caesar is assassinated on the Ides of March")

        assert event.year == -44
        assert event.id is None
        assert event.metadata is None
        assert event.used_in == {}

    def test_mark_used_once_per_mode(self):
        """Test that an event can join one puzzle per game mode."""
        event = Event(id="evt-1", year=1969, text="Woodstock festival draws 400,000 people")

        event.mark_used("classic", "puzzle-1")
        event.mark_used("order", "puzzle-2")

        assert event.used_in == {"classic": "puzzle-1", "order": "puzzle-2"}
        assert not event.is_available_for("classic")
        assert event.is_available_for("daily-challenge")

    def test_mark_used_same_puzzle_is_idempotent(self):
        """Test re-marking with the same puzzle is allowed."""
        event = Event(id="evt-1", year=1969, text="Woodstock festival draws 400,000 people")

        event.mark_used("classic", "puzzle-1")
        event.mark_used("classic", "puzzle-1")

        assert event.used_in == {"classic": "puzzle-1"}

    def test_mark_used_rejects_reuse(self):
        """Test that reusing an event in the same mode raises."""
        event = Event(id="evt-1", year=1969, text="Woodstock festival draws 400,000 people")
        event.mark_used("classic", "puzzle-1")

        with pytest.raises(EventReuseError):
            event.mark_used("classic", "puzzle-9")

        assert issubclass(EventReuseError, CallerInputError)

    def test_metadata_present_fields(self):
        """Test that only populated metadata fields are reported."""
        metadata = EventMetadata(difficulty=3, category=["science"], tags=["space"])

        assert metadata.present_fields() == ["difficulty", "category", "tags"]

    def test_metadata_difficulty_range(self):
        """Test difficulty must be between 1 and 5."""
        with pytest.raises(ValidationError):
            EventMetadata(difficulty=7)


class TestLeakyPhrase:
    """Tests for LeakyPhrase model."""

    def test_alias_and_record(self):
        """Test the persisted camelCase form round-trips."""
        phrase = LeakyPhrase.model_validate({"phrase": "the berlin wall falls", "yearRange": [1989, 1989]})

        assert phrase.year_range == (1989, 1989)
        assert phrase.to_record() == {"phrase": "the berlin wall falls", "yearRange": [1989, 1989]}

    def test_tokens_drop_stopwords(self):
        """Test tokens are derived from the phrase without stopwords."""
        phrase = LeakyPhrase(phrase="the battle of waterloo ends napoleon's rule", year_range=(1815, 1815))

        assert phrase.tokens == frozenset({"battle", "waterloo", "ends", "napoleon", "rule"})

    def test_inverted_range_rejected(self):
        """Test a range whose start is after its end is invalid."""
        with pytest.raises(ValidationError):
            LeakyPhrase(phrase="anything", year_range=(1900, 1800))

    def test_phrase_is_frozen(self):
        """Test phrases cannot be mutated after creation."""
        phrase = LeakyPhrase(phrase="the titanic sinks", year_range=(1912, 1912))

        with pytest.raises(ValidationError):
            phrase.phrase = "something else"


class TestPuzzleJudgment:
    """Tests for PuzzleJudgment model."""

    def create_payload(self, **overrides):
        """Create a judge payload in wire format."""
        payload = {
            "approved": True,
            "qualityScore": 0.8,
            "ordering": {"recommended": [f"event {i}" for i in range(6)], "rationale": "hard to easy"},
            "composition": {
                "topicDiversity": 0.8,
                "geographicSpread": 0.7,
                "difficultyGradient": 0.9,
                "guessability": 0.8
            }
        }
        payload.update(overrides)
        return payload

    def test_parse_wire_format(self):
        """Test parsing camelCase judge output."""
        judgment = PuzzleJudgment.model_validate(self.create_payload())

        assert judgment.quality_score == 0.8
        assert judgment.composition.difficulty_gradient == 0.9
        assert judgment.issues == []
        assert judgment.suggestions == []

    def test_dump_by_alias(self):
        """Test dumping back to the wire names."""
        judgment = PuzzleJudgment.model_validate(self.create_payload())
        dumped = judgment.model_dump(by_alias=True)

        assert "qualityScore" in dumped
        assert "topicDiversity" in dumped["composition"]

    def test_ordering_requires_six_events(self):
        """Test the recommended ordering must hold exactly six events."""
        payload = self.create_payload(ordering={"recommended": ["a", "b"], "rationale": "short"})

        with pytest.raises(ValidationError):
            PuzzleJudgment.model_validate(payload)

    def test_scores_bounded(self):
        """Test composition scores outside [0, 1] are rejected."""
        with pytest.raises(ValidationError):
            CompositionScores(topic_diversity=1.2, geographic_spread=0.5, difficulty_gradient=0.5, guessability=0.5)


class TestOtherModels:
    """Tests for smaller models."""

    def test_composition_result_succeeded(self):
        """Test the succeeded property follows status."""
        assert CompositionResult(status=CompositionStatus.SUCCESS, attempts=1).succeeded
        assert not CompositionResult(status=CompositionStatus.FAILED, attempts=0).succeeded

    def test_order_attempt_aliases(self):
        """Test order attempts accept client camelCase fields."""
        attempt = OrderAttempt.model_validate({
            "ordering": ["a", "b"],
            "feedback": ["correct", "correct"],
            "pairsCorrect": 1,
            "totalPairs": 1
        })

        assert attempt.pairs_correct == 1
        assert attempt.total_pairs == 1

    def test_puzzle_demand_record_alias(self):
        """Test demand records read targetYear."""
        assert PuzzleDemandRecord.model_validate({"targetYear": 1066}).target_year == 1066
