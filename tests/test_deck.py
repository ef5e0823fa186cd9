"""
Tests for level deck loading and validation.
"""

import json

import pytest

from lingua_drills.content import load_deck, parse_level_data
from lingua_drills.errors import DeckValidationError


LEVEL = {
    "topic": "Ordering at a cafe",
    "levelName": "Level 1",
    "flashcards": [
        {
            "id": "f1",
            "front": "I would like a coffee.",
            "back": "我想要一杯咖啡。",
            "pronunciation": "wǒ xiǎng yào yī bēi kāfēi",
            "imageVisualDescription": "A cafe counter",
        },
        {"id": "f2", "front": "The bill, please.", "back": "请结账。"},
    ],
    "exam": [
        {
            "question": "How do you ask for the bill?",
            "options": ["The bill, please.", "A coffee.", "Good morning.", "Goodbye."],
            "correctIndex": 0,
            "explanation": "Polite request for the bill.",
        }
    ],
    "rolePlay": {"scenario": "cafe"},
    "weeklyPlan": [],
}


class TestParseLevelData:
    """Tests for parse_level_data."""

    def test_parses_cards_and_exam(self):
        deck = parse_level_data(LEVEL)

        assert deck.topic == "Ordering at a cafe"
        assert deck.level_name == "Level 1"
        assert [card.card_id for card in deck.cards] == ["f1", "f2"]
        assert deck.cards[0].target_text == "I would like a coffee."
        assert deck.cards[0].pronunciation_hint == "wǒ xiǎng yào yī bēi kāfēi"
        assert deck.cards[1].pronunciation_hint is None
        assert deck.cards[1].audio_base64 is None
        assert deck.questions[0].correct_index == 0
        assert deck.questions[0].question_id == "q1"
        assert deck.extras == {"rolePlay": {"scenario": "cafe"}, "weeklyPlan": []}

    def test_bare_flashcard_list(self):
        deck = parse_level_data(LEVEL["flashcards"])
        assert len(deck.cards) == 2
        assert deck.questions == []

    @pytest.mark.parametrize("data, fragment", [
        ({"flashcards": []}, "at least one flashcard"),
        ({"flashcards": [{"id": "a", "front": "", "back": "b"}]}, "missing or empty front"),
        ({"flashcards": ["card"]}, "expected an object"),
        ({"flashcards": [{"id": "a", "front": "x", "back": "y", "pronunciation": 3}]},
         "'pronunciation' must be a string"),
        ({"flashcards": [{"id": "a", "front": "x", "back": "y"},
                         {"id": "a", "front": "z", "back": "w"}]}, "duplicate id 'a'"),
        ({"flashcards": LEVEL["flashcards"],
          "exam": [{"question": "Q?", "options": ["a", "b"], "correctIndex": 2}]},
         "correctIndex"),
        ({"flashcards": LEVEL["flashcards"],
          "exam": [{"question": "Q?", "options": ["a", "b"], "correctIndex": True}]},
         "correctIndex"),
        ({"flashcards": LEVEL["flashcards"],
          "exam": [{"question": "Q?", "options": ["a"], "correctIndex": 0}]},
         "at least two strings"),
        ("cards", "expected a level object"),
    ])
    def test_schema_violations(self, data, fragment):
        with pytest.raises(DeckValidationError) as exc_info:
            parse_level_data(data)

        error = exc_info.value.processing_error
        assert error.error_code == "DECK_003"
        assert any(fragment in problem for problem in error.context['problems'])

    def test_all_problems_are_collected(self):
        data = {"flashcards": [{"id": "a"}, {"front": "x"}, "bad", {"id": "d", "front": "", "back": ""}]}

        with pytest.raises(DeckValidationError) as exc_info:
            parse_level_data(data)

        error = exc_info.value.processing_error
        assert len(error.context['problems']) == 4
        assert error.details.endswith("...")


class TestLoadDeck:
    """Tests for load_deck."""

    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "level.json"
        path.write_text(json.dumps(LEVEL, ensure_ascii=False), encoding="utf-8")

        deck = load_deck(path)
        assert len(deck.cards) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(DeckValidationError) as exc_info:
            load_deck(tmp_path / "missing.json")
        assert exc_info.value.processing_error.error_code == "DECK_001"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "level.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DeckValidationError) as exc_info:
            load_deck(str(path))
        assert exc_info.value.processing_error.error_code == "DECK_002"
        assert exc_info.value.processing_error.context == {'path': str(path)}
