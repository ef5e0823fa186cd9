"""
Loading and schema validation of generated level content.

A level is the JSON document produced by the content generation service:
``topic``, ``levelName``, ``flashcards``, ``rolePlay``, ``exam`` and
``weeklyPlan``. Only the flashcards and the exam are used by the drills;
the other sections are carried through untouched.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import (
    DeckValidationError,
    ErrorCategory,
    ErrorSeverity,
    ProcessingError,
    error_handler,
)
from ..models import LearningCard, QuizQuestion


logger = logging.getLogger(__name__)


@dataclass
class LevelDeck:
    """Validated content of one course level."""
    topic: str
    level_name: str
    cards: List[LearningCard]
    questions: List[QuizQuestion] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _optional_text(entry: Dict[str, Any], key: str, problems: List[str], label: str):
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        problems.append(f"{label}: '{key}' must be a string")
        return None
    return value


def _parse_card(entry: Any, index: int, problems: List[str]) -> Optional[LearningCard]:
    label = f"flashcards[{index}]"
    if not isinstance(entry, dict):
        problems.append(f"{label}: expected an object")
        return None

    missing = [key for key in ("id", "front", "back") if not _is_text(entry.get(key))]
    if missing:
        problems.append(f"{label}: missing or empty {', '.join(missing)}")
        return None

    pronunciation = _optional_text(entry, "pronunciation", problems, label)
    description = _optional_text(entry, "imageVisualDescription", problems, label)
    image = _optional_text(entry, "generatedImageBase64", problems, label)
    audio = _optional_text(entry, "generatedAudioBase64", problems, label)

    return LearningCard(
        card_id=entry["id"],
        target_text=entry["front"],
        translation=entry["back"],
        pronunciation_hint=pronunciation or None,
        image_description=description or "",
        image_base64=image or None,
        audio_base64=audio or None,
    )


def _parse_question(entry: Any, index: int, problems: List[str]) -> Optional[QuizQuestion]:
    label = f"exam[{index}]"
    if not isinstance(entry, dict):
        problems.append(f"{label}: expected an object")
        return None

    if not _is_text(entry.get("question")):
        problems.append(f"{label}: missing or empty question")
        return None

    options = entry.get("options")
    if (not isinstance(options, list) or len(options) < 2
            or not all(isinstance(option, str) for option in options)):
        problems.append(f"{label}: options must be a list of at least two strings")
        return None

    correct_index = entry.get("correctIndex")
    if (not isinstance(correct_index, int) or isinstance(correct_index, bool)
            or not 0 <= correct_index < len(options)):
        problems.append(f"{label}: correctIndex must index into options")
        return None

    return QuizQuestion(
        question_id=str(entry.get("id", f"q{index + 1}")),
        question=entry["question"],
        options=list(options),
        correct_index=correct_index,
        explanation=entry.get("explanation") or "",
    )


def parse_level_data(data: Any) -> LevelDeck:
    """
    Validate generated level content and build a deck.

    Args:
        data: Decoded JSON, either a level object or a bare list of flashcards

    Returns:
        LevelDeck with at least one card

    Raises:
        DeckValidationError: If the content does not match the schema
    """
    if isinstance(data, list):
        data = {"flashcards": data}

    problems: List[str] = []
    if not isinstance(data, dict):
        problems.append("document: expected a level object or a list of flashcards")
        data = {}

    raw_cards = data.get("flashcards")
    if not isinstance(raw_cards, list) or not raw_cards:
        problems.append("flashcards: at least one flashcard is required")
        raw_cards = []

    raw_questions = data.get("exam") or []
    if not isinstance(raw_questions, list):
        problems.append("exam: expected a list of questions")
        raw_questions = []

    cards = [_parse_card(entry, i, problems) for i, entry in enumerate(raw_cards)]
    questions = [_parse_question(entry, i, problems) for i, entry in enumerate(raw_questions)]

    seen_ids = set()
    for card in cards:
        if card is None:
            continue
        if card.card_id in seen_ids:
            problems.append(f"flashcards: duplicate id '{card.card_id}'")
        seen_ids.add(card.card_id)

    if problems:
        raise DeckValidationError(ProcessingError(
            category=ErrorCategory.DECK_LOADING,
            severity=ErrorSeverity.ERROR,
            message="Level content failed validation",
            details=(
                f"{len(problems)} problem(s) found: {'; '.join(problems[:3])}"
                f"{'...' if len(problems) > 3 else ''}"
            ),
            suggested_actions=[
                "Regenerate the level content",
                "Ensure every flashcard has id, front and back text",
                "Ensure every exam question has options and a valid correctIndex"
            ],
            error_code="DECK_003",
            context={'problems': problems}
        ))

    extras = {
        key: value for key, value in data.items()
        if key not in ("topic", "levelName", "flashcards", "exam")
    }
    deck = LevelDeck(
        topic=str(data.get("topic", "")),
        level_name=str(data.get("levelName", "")),
        cards=cards,
        questions=questions,
        extras=extras,
    )
    logger.info(
        f"Loaded level '{deck.level_name or deck.topic}' with {len(cards)} cards "
        f"and {len(questions)} exam questions"
    )
    return deck


def load_deck(path: Union[str, Path]) -> LevelDeck:
    """
    Read and validate a level JSON file.

    Raises:
        DeckValidationError: If the file is missing, not JSON, or invalid
    """
    path = Path(path)
    context = {'path': str(path)}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DeckValidationError(error_handler.handle_deck_error(e, context))
    return parse_level_data(data)
