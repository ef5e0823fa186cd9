"""
Tests for the level exam.
"""

import pytest

from lingua_drills.content import QuizSession
from lingua_drills.errors import InputValidationError
from lingua_drills.models import QuizQuestion


def make_questions(count):
    return [
        QuizQuestion(question_id=f"q{i}", question=f"Question {i}?",
                     options=["right", "wrong", "also wrong", "nope"], correct_index=0)
        for i in range(count)
    ]


def take_exam(quiz, correct_answers):
    for i in range(len(quiz.questions)):
        quiz.answer(0 if i < correct_answers else 1)
        quiz.next()


class TestQuizSession:
    """Tests for QuizSession."""

    def test_empty_exam_rejected(self):
        with pytest.raises(InputValidationError) as exc_info:
            QuizSession([])
        assert exc_info.value.processing_error.error_code == "QUIZ_001"

    def test_answer_scores_correct_option(self):
        quiz = QuizSession(make_questions(2))
        assert quiz.answer(0) is True
        assert quiz.score == 1
        assert quiz.answered

    def test_repeat_answer_is_ignored(self):
        quiz = QuizSession(make_questions(2))
        assert quiz.answer(1) is False
        assert quiz.answer(0) is False
        assert quiz.score == 0
        assert quiz.selected == 1

    def test_out_of_range_answer(self):
        quiz = QuizSession(make_questions(1))
        with pytest.raises(InputValidationError) as exc_info:
            quiz.answer(4)
        assert exc_info.value.processing_error.error_code == "QUIZ_002"
        assert not quiz.answered

    def test_next_requires_an_answer(self):
        quiz = QuizSession(make_questions(2))
        assert quiz.next() is True
        assert quiz.index == 0

    def test_walks_to_results(self):
        quiz = QuizSession(make_questions(2))
        quiz.answer(0)
        assert quiz.next() is True
        assert quiz.index == 1 and not quiz.answered
        assert quiz.is_last

        quiz.answer(1)
        assert quiz.next() is False
        assert quiz.finished
        assert quiz.answer(0) is False

    def test_retry_resets(self):
        quiz = QuizSession(make_questions(2))
        take_exam(quiz, 2)
        quiz.retry()

        assert (quiz.index, quiz.score, quiz.finished, quiz.answered) == (0, 0, False, False)

    @pytest.mark.parametrize("count, correct, percentage, key", [
        (4, 4, 100, "perfect_score"),
        (5, 4, 80, "great_job"),
        (5, 3, 60, "good_effort"),
        (4, 2, 50, "keep_practicing"),
        (8, 5, 63, "good_effort"),     # 62.5 rounds half up
        (3, 2, 67, "good_effort"),
        (3, 0, 0, "keep_practicing"),
    ])
    def test_results(self, count, correct, percentage, key):
        quiz = QuizSession(make_questions(count))
        take_exam(quiz, correct)

        assert quiz.finished
        assert quiz.percentage == percentage
        assert quiz.result_message_key() == key
