"""
Core data models for the Lingua Drills flashcard trainer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DrillMode(Enum):
    """Active interaction mode of the flashcard deck."""
    VIEW = "view"
    DICTATION = "dictation"
    PRONUNCIATION = "pronunciation"


class DictationStatus(Enum):
    """Result of the most recent dictation check."""
    IDLE = "idle"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class MatchClass(Enum):
    """Per-word pronunciation accuracy class."""
    EXACT = "exact"
    CLOSE = "close"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class LearningCard:
    """A generated flashcard: a target sentence and its translation."""
    card_id: str
    target_text: str
    translation: str
    pronunciation_hint: Optional[str] = None
    image_description: str = ""
    image_base64: Optional[str] = None  # Cached generated image
    audio_base64: Optional[str] = None  # Cached generated speech (raw PCM)


@dataclass(frozen=True)
class WordAlignment:
    """Classification of one target word against a spoken transcript."""
    word: str
    distance: int
    match_class: MatchClass


@dataclass
class DictationState:
    """Learner input and check status for the typing drill."""
    input_buffer: str = ""
    status: DictationStatus = DictationStatus.IDLE


@dataclass
class PronunciationState:
    """Latest transcript and capture status for the speech drill."""
    transcript: str = ""
    listening: bool = False


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple choice exam question."""
    question_id: str
    question: str
    options: List[str] = field(default_factory=list)
    correct_index: int = 0
    explanation: str = ""
