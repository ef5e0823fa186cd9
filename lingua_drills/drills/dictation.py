"""
Typing dictation drill: listen to the reference sentence and type it.
"""

import logging
from typing import Callable, Optional

from ..alignment.normalizer import normalize
from ..models import DictationState, DictationStatus, LearningCard


logger = logging.getLogger(__name__)


class DictationDrill:
    """
    State machine for the "listen and type" exercise.

    States are IDLE, CORRECT and INCORRECT. Input is compared with the
    card's target sentence after normalization, so case, punctuation and
    spacing never matter. Once CORRECT the input is locked until reset.
    """

    def __init__(
        self,
        card: LearningCard,
        on_correct: Optional[Callable[[], None]] = None,
        on_advance: Optional[Callable[[], None]] = None
    ):
        """
        Args:
            card: Card whose target sentence is dictated
            on_correct: Called after a successful check (plays reference audio)
            on_advance: Called when Enter is pressed on a correct answer
        """
        self.card = card
        self.on_correct = on_correct
        self.on_advance = on_advance
        self.state = DictationState()

    @property
    def status(self) -> DictationStatus:
        return self.state.status

    @property
    def input_buffer(self) -> str:
        return self.state.input_buffer

    @property
    def locked(self) -> bool:
        return self.state.status == DictationStatus.CORRECT

    def reset(self) -> None:
        """Return to the initial empty, idle state."""
        self.state = DictationState()

    def set_input(self, text: str) -> bool:
        """
        Replace the input buffer with what the learner has typed.

        Editing clears a previous INCORRECT verdict.

        Returns:
            False if the input is locked and the edit was rejected
        """
        if self.locked:
            return False
        self.state.input_buffer = text
        self.state.status = DictationStatus.IDLE
        return True

    def check(self) -> DictationStatus:
        """
        Compare the input with the target sentence.

        Empty input is an ordinary mismatch.
        """
        if self.locked:
            return self.state.status

        typed = normalize(self.state.input_buffer)
        if typed and typed == normalize(self.card.target_text):
            self.state.status = DictationStatus.CORRECT
            logger.info(f"Dictation correct for card {self.card.card_id}")
            if self.on_correct is not None:
                self.on_correct()
        else:
            self.state.status = DictationStatus.INCORRECT
            logger.debug(f"Dictation mismatch for card {self.card.card_id}: {typed!r}")
        return self.state.status

    def submit_on_enter(self) -> bool:
        """
        Handle the acknowledgment key.

        Advances to the next card when already correct, otherwise checks.

        Returns:
            True if the drill asked to advance
        """
        if self.locked:
            if self.on_advance is not None:
                self.on_advance()
            return True
        self.check()
        return False
