"""
Level exam: a linear multiple choice quiz with a final score.
"""

import logging
import math
from typing import List, Optional

from ..errors import ErrorCategory, ErrorSeverity, InputValidationError, ProcessingError
from ..models import QuizQuestion


logger = logging.getLogger(__name__)


class QuizSession:
    """
    Walks the learner through the exam questions of a level.

    Each question accepts a single answer; the correct option and the
    explanation are revealed once answered.
    """

    def __init__(self, questions: List[QuizQuestion]):
        if not questions:
            raise InputValidationError(ProcessingError(
                category=ErrorCategory.QUIZ,
                severity=ErrorSeverity.ERROR,
                message="Exam has no questions",
                details="A quiz session needs at least one question",
                suggested_actions=["Regenerate the level content with an exam section"],
                error_code="QUIZ_001"
            ))
        self.questions = list(questions)
        self.retry()

    def retry(self) -> None:
        """Start the exam again from the first question."""
        self.index = 0
        self.score = 0
        self.selected: Optional[int] = None
        self.finished = False

    @property
    def current(self) -> QuizQuestion:
        return self.questions[self.index]

    @property
    def answered(self) -> bool:
        return self.selected is not None

    @property
    def is_last(self) -> bool:
        return self.index == len(self.questions) - 1

    def answer(self, option_index: int) -> bool:
        """
        Answer the current question.

        Returns:
            True if the chosen option is correct. Repeat answers are ignored
            and report whether the first answer was correct.
        """
        if self.finished:
            return False
        if self.answered:
            return self.selected == self.current.correct_index
        if not 0 <= option_index < len(self.current.options):
            raise InputValidationError(ProcessingError(
                category=ErrorCategory.QUIZ,
                severity=ErrorSeverity.WARNING,
                message="Answer is out of range",
                details=f"Option {option_index} does not exist for question {self.current.question_id}",
                suggested_actions=[f"Choose an option between 1 and {len(self.current.options)}"],
                error_code="QUIZ_002"
            ))

        self.selected = option_index
        correct = option_index == self.current.correct_index
        if correct:
            self.score += 1
        logger.debug(f"Question {self.current.question_id} answered {'correctly' if correct else 'incorrectly'}")
        return correct

    def next(self) -> bool:
        """
        Move past an answered question.

        Returns:
            True while questions remain, False once the results are shown
        """
        if not self.answered or self.finished:
            return not self.finished
        if self.is_last:
            self.finished = True
            logger.info(f"Exam complete: {self.score}/{len(self.questions)} ({self.percentage}%)")
            return False
        self.index += 1
        self.selected = None
        return True

    @property
    def percentage(self) -> int:
        # Halves round up
        return math.floor(self.score * 100 / len(self.questions) + 0.5)

    def result_message_key(self) -> str:
        """Translation key of the encouragement shown with the results."""
        percentage = self.percentage
        if percentage == 100:
            return "perfect_score"
        if percentage >= 80:
            return "great_job"
        if percentage >= 60:
            return "good_effort"
        return "keep_practicing"
