"""Unit tests for the sequential session controllers."""

import random

import pytest

from exercises.base import normalize_free_text, shuffled
from exercises.errors import InvalidTransitionError
from exercises.registry import create_session
from exercises.sequential import FreeTextSession, SingleChoiceSession
from models import ExerciseKind, Score, SessionStatus, round_percentage


class TestFreeTextSession:
    """Tests for typed-answer sessions."""

    def test_padded_capitalized_answer_is_correct(self, fill_in_the_blank_exercise):
        session = FreeTextSession(fill_in_the_blank_exercise)

        answer = session.submit_answer("  Soy ")

        assert answer.is_correct is True
        assert answer.question_index == 0
        assert answer.answer == "  Soy "
        assert session.status == SessionStatus.FEEDBACK

    def test_wrong_answer_is_recorded(self, fill_in_the_blank_exercise):
        session = FreeTextSession(fill_in_the_blank_exercise)

        answer = session.submit_answer("estoy")

        assert answer.is_correct is False
        assert session.answers == (answer,)

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_blank_answer_rejected_without_change(self, fill_in_the_blank_exercise, value):
        session = FreeTextSession(fill_in_the_blank_exercise)

        with pytest.raises(ValueError):
            session.submit_answer(value)

        assert session.answers == ()
        assert session.status == SessionStatus.PRESENTING

    def test_full_walk_through(self, fill_in_the_blank_exercise):
        session = FreeTextSession(fill_in_the_blank_exercise)

        session.submit_answer("soy")
        assert session.advance() == SessionStatus.PRESENTING
        assert session.current_index == 1
        assert session.is_last_question

        session.submit_answer("vamos")
        assert session.advance() == SessionStatus.COMPLETED

        assert session.is_completed
        assert session.score == Score(correct_count=1, total=2, percentage=50)
        assert [a.question_index for a in session.answers] == [0, 1]


class TestSingleChoiceSession:
    """Tests for closed-choice sessions."""

    def test_wrong_option_is_incorrect(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)

        answer = session.submit_answer("estoy")

        assert answer.is_correct is False

    def test_submit_choice_by_index(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)

        answer = session.submit_choice(0)

        assert answer.answer == "soy"
        assert answer.is_correct is True

    def test_value_outside_options_rejected(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)

        with pytest.raises(ValueError):
            session.submit_answer("es")
        assert session.answers == ()

    def test_comparison_is_exact(self, reading_exercise):
        session = SingleChoiceSession(reading_exercise)

        with pytest.raises(ValueError):
            session.submit_answer("en madrid")

    def test_out_of_range_choice(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)

        with pytest.raises(ValueError):
            session.submit_choice(2)

    def test_options_follow_current_question(self, reading_exercise):
        session = SingleChoiceSession(reading_exercise)
        assert "En Madrid" in session.options

        session.submit_answer("En Madrid")
        session.advance()

        assert session.options == ("En coche", "A pie", "En metro")


class TestTransitions:
    """Tests for the PRESENTING/FEEDBACK/COMPLETED state machine."""

    def test_double_submit_rejected(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)
        session.submit_answer("soy")

        with pytest.raises(InvalidTransitionError):
            session.submit_answer("soy")
        assert len(session.answers) == 1

    def test_advance_while_presenting_rejected(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)

        with pytest.raises(InvalidTransitionError):
            session.advance()

    def test_advance_after_completion_is_noop(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)
        session.submit_answer("soy")
        session.advance()
        session.submit_answer("estoy")
        session.advance()
        score = session.score

        assert session.advance() == SessionStatus.COMPLETED
        assert session.score is score

    def test_submit_after_completion_rejected(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)
        for value in ("soy", "estoy"):
            session.submit_answer(value)
            session.advance()

        with pytest.raises(InvalidTransitionError):
            session.submit_answer("soy")

    def test_score_is_none_until_completed(self, ser_vs_estar_exercise):
        session = SingleChoiceSession(ser_vs_estar_exercise)
        session.submit_answer("soy")

        assert session.score is None
        assert session.last_answer.is_correct is True


class TestCreateSession:
    """Tests for choosing a controller by answer style."""

    def test_choice_kind(self, ser_vs_estar_exercise):
        assert isinstance(create_session(ser_vs_estar_exercise), SingleChoiceSession)

    def test_free_text_kind(self, fill_in_the_blank_exercise):
        assert isinstance(create_session(fill_in_the_blank_exercise), FreeTextSession)

    def test_reading_kind(self, reading_exercise):
        session = create_session(reading_exercise)
        assert isinstance(session, SingleChoiceSession)
        assert session.exercise.kind == ExerciseKind.READING_COMPREHENSION

    def test_new_session_has_empty_log(self, ser_vs_estar_exercise):
        first = create_session(ser_vs_estar_exercise)
        first.submit_answer("soy")

        second = create_session(ser_vs_estar_exercise)

        assert second.answers == ()
        assert second.status == SessionStatus.PRESENTING


class TestHelpers:
    """Tests for shared comparison, shuffle and scoring helpers."""

    def test_normalize_free_text(self):
        assert normalize_free_text("  ESTÁ ") == "está"

    def test_normalize_composes_accents(self):
        decomposed = "esta\u0301"
        assert normalize_free_text(decomposed) == normalize_free_text("está")

    def test_shuffle_is_a_permutation(self, rng):
        items = ["a", "b", "c", "d", "e"]
        result = shuffled(items, rng)

        assert sorted(result) == items
        assert items == ["a", "b", "c", "d", "e"]

    def test_shuffle_is_deterministic_with_seed(self):
        assert shuffled(range(10), random.Random(7)) == shuffled(range(10), random.Random(7))

    @pytest.mark.parametrize(
        "correct,total,expected",
        [(0, 0, 0), (1, 2, 50), (2, 3, 67), (1, 3, 33), (1, 8, 13), (3, 3, 100)],
    )
    def test_round_percentage_half_up(self, correct, total, expected):
        assert round_percentage(correct, total) == expected
