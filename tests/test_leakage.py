"""Tests for the semantic leakage detector and its phrase store."""

import json
import os
import pytest
from unittest.mock import Mock

from chronoqc.database import LeakyPhraseStore
from chronoqc.models import LeakyPhrase
from chronoqc.quality import SemanticLeakageDetector
from chronoqc.quality.leakage import MAX_PHRASE_LENGTH


WATERLOO = LeakyPhrase(phrase="the battle of waterloo ends napoleon's rule", year_range=(1815, 1815))
MOON = LeakyPhrase(phrase="apollo 11 astronauts land on the moon", year_range=(1969, 1969))

SEED_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "leaky_phrases.json")


class TestSemanticLeakageDetector:
    """Tests for SemanticLeakageDetector."""

    @pytest.fixture
    def detector(self):
        """Create a detector with two known phrases."""
        return SemanticLeakageDetector(phrases=[WATERLOO, MOON])

    def test_empty_detector_scores_zero(self):
        """Test that no phrases means no leakage."""
        result = SemanticLeakageDetector().score("The Battle of Waterloo ends Napoleon's rule")

        assert result.score == 0.0
        assert result.closest is None

    def test_reworded_leak_scores_high(self, detector):
        """Test that a reworded leak still scores close to 1."""
        result = detector.score("Napoleon's rule ends at the Battle of Waterloo in Belgium")

        assert result.score >= 0.9
        assert result.closest == WATERLOO

    def test_partial_overlap(self, detector):
        """Test recall is the share of phrase tokens found in the text."""
        # battle + waterloo out of battle, waterloo, ends, napoleon, rule
        result = detector.score("A painting of the battle near Waterloo")

        assert result.score == pytest.approx(0.4)
        assert result.closest == WATERLOO

    def test_stopword_overlap_scores_zero(self, detector):
        """Test that shared stopwords alone are not leakage."""
        result = detector.score("The end of an era, on the other side")

        assert result.score == 0.0
        assert result.closest is None

    def test_deterministic(self, detector):
        """Test scoring the same text twice gives the same result."""
        text = "Astronauts land on the moon for the first time"

        assert detector.score(text) == detector.score(text)

    def test_first_phrase_wins_ties(self):
        """Test that the earliest phrase is reported on equal scores."""
        first = LeakyPhrase(phrase="berlin wall", year_range=(1961, 1961))
        second = LeakyPhrase(phrase="wall berlin", year_range=(1989, 1989))
        detector = SemanticLeakageDetector(phrases=[first, second])

        assert detector.score("The Berlin Wall").closest == first

    def test_learn_normalizes_phrase(self, detector):
        """Test learned phrases are lowercased and truncated."""
        text = "The Treaty Of Versailles " + "x" * 300

        phrase = detector.learn(text, (1919, 1919))

        assert phrase.phrase == text.lower()[:MAX_PHRASE_LENGTH]
        assert detector.phrases[-1] == phrase

    def test_learn_reorders_inverted_range(self, detector):
        """Test an inverted year range is stored low to high instead of raising."""
        phrase = detector.learn("Battle of Waterloo", (1815, 1800))

        assert phrase.year_range == (1800, 1815)
        assert detector.phrases[-1] == phrase

    def test_learn_ignores_blank_text(self, detector):
        """Test blank text is not learned."""
        assert detector.learn("   ", (1900, 1900)) is None
        assert len(detector.phrases) == 2

    def test_learned_phrase_detected(self):
        """Test that a learned phrase is detected afterwards."""
        detector = SemanticLeakageDetector()
        detector.learn("Columbus reaches the Americas", (1492, 1492))

        assert detector.score("Christopher Columbus reaches the Americas").score == 1.0

    def test_learn_swallows_persist_failure(self):
        """Test a failing store does not fail learning."""
        store = Mock(spec=LeakyPhraseStore)
        store.path = "/nonexistent/leaky_phrases.json"
        store.load.return_value = []
        store.save.side_effect = OSError("disk full")
        detector = SemanticLeakageDetector(store=store)

        phrase = detector.learn("The Titanic sinks", (1912, 1912))

        assert phrase is not None
        assert detector.phrases == [phrase]
        store.save.assert_called_once()


class TestLeakyPhraseStore:
    """Tests for LeakyPhraseStore."""

    def test_missing_file_loads_empty(self, tmp_path):
        """Test a missing store yields no phrases."""
        assert LeakyPhraseStore(str(tmp_path / "missing.json")).load() == []

    def test_invalid_json_loads_empty(self, tmp_path):
        """Test an unreadable store yields no phrases."""
        path = tmp_path / "phrases.json"
        path.write_text("{not json", encoding="utf-8")

        assert LeakyPhraseStore(str(path)).load() == []

    def test_malformed_entries_skipped(self, tmp_path):
        """Test entries that fail validation are skipped."""
        path = tmp_path / "phrases.json"
        path.write_text(json.dumps([
            {"phrase": "the berlin wall falls", "yearRange": [1989, 1989]},
            {"phrase": "no range"},
            {"phrase": "backwards", "yearRange": [2000, 1990]}
        ]), encoding="utf-8")

        phrases = LeakyPhraseStore(str(path)).load()

        assert [p.phrase for p in phrases] == ["the berlin wall falls"]

    def test_save_then_load(self, tmp_path):
        """Test saved phrases are readable and no temp files remain."""
        path = tmp_path / "nested" / "phrases.json"
        store = LeakyPhraseStore(str(path))

        store.save([WATERLOO, MOON])

        assert store.load() == [WATERLOO, MOON]
        assert json.loads(path.read_text(encoding="utf-8"))[0]["yearRange"] == [1815, 1815]
        assert [p.name for p in path.parent.iterdir()] == ["phrases.json"]

    def test_learn_persists_to_store(self, tmp_path):
        """Test learning writes the full list through the store."""
        path = tmp_path / "phrases.json"
        store = LeakyPhraseStore(str(path))
        store.save([WATERLOO])
        detector = SemanticLeakageDetector(store=store)

        detector.learn("Apollo 11 astronauts land on the moon", (1969, 1969))

        reloaded = LeakyPhraseStore(str(path)).load()
        assert [p.phrase for p in reloaded] == [WATERLOO.phrase, "apollo 11 astronauts land on the moon"]

    def test_seed_file_loads(self):
        """Test the bundled seed list is valid."""
        phrases = LeakyPhraseStore(SEED_PATH).load()

        assert len(phrases) >= 5
        assert all(p.year_range[0] <= p.year_range[1] for p in phrases)

    def test_unparseable_entries_survive_learn(self, tmp_path):
        """Test entries that fail validation are written back unchanged and in place."""
        path = tmp_path / "phrases.json"
        seeded = [
            {"phrase": "battle of waterloo", "yearRange": [1815, 1815]},
            {"phrase": "fall of rome", "yearRange": [476, 410]},
            {"phrase": "moon landing", "yearRange": [1969]},
            {"phrase": "the berlin wall falls", "yearRange": [1989, 1989]},
        ]
        path.write_text(json.dumps(seeded), encoding="utf-8")
        detector = SemanticLeakageDetector(store=LeakyPhraseStore(str(path)))

        detector.learn("Printing press invented", (1440, 1450))

        stored = json.loads(path.read_text(encoding="utf-8"))
        assert stored == seeded + [{"phrase": "printing press invented", "yearRange": [1440, 1450]}]
        assert [p.phrase for p in detector.phrases] == [
            "battle of waterloo", "the berlin wall falls", "printing press invented"
        ]

    @pytest.mark.parametrize("content", ["{not json", '{"phrase": "not a list"}'])
    def test_unreadable_store_not_overwritten(self, tmp_path, content):
        """Test learning does not clobber a store that could not be read."""
        path = tmp_path / "phrases.json"
        path.write_text(content, encoding="utf-8")
        store = LeakyPhraseStore(str(path))
        detector = SemanticLeakageDetector(store=store)

        phrase = detector.learn("Printing press invented", (1440, 1450))

        assert store.load_failed
        assert detector.phrases == [phrase]
        assert path.read_text(encoding="utf-8") == content

    def test_missing_store_is_created(self, tmp_path):
        """Test a missing store is not a read failure and is created on learn."""
        path = tmp_path / "phrases.json"
        store = LeakyPhraseStore(str(path))
        detector = SemanticLeakageDetector(store=store)

        detector.learn("Printing press invented", (1440, 1450))

        assert not store.load_failed
        assert [p.phrase for p in LeakyPhraseStore(str(path)).load()] == ["printing press invented"]
