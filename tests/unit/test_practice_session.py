"""
Unit tests for the practice session host and its results summary.
"""

import random

import pytest

from quizdrill.core.errors import InvalidSessionError, SessionStateError
from quizdrill.core.performance import QuestionPerformance, SessionStats
from quizdrill.study.practice_session import PracticeSession, SessionResults, build_results
from quizdrill.study.question_bank import Question, QuestionBank


def answer_all_correct(session):
    session.start()
    while True:
        session.submit(session.current_question.correct_answer)
        if session.advance() is None:
            break


class TestPracticeSessionFlow:
    def test_empty_session_rejected(self, settings):
        with pytest.raises(InvalidSessionError):
            PracticeSession([], settings=settings)

    def test_all_correct_session(self, sample_questions, settings, rng):
        session = PracticeSession(sample_questions, settings=settings, rng=rng)

        answer_all_correct(session)

        assert session.is_complete
        results = session.results()
        assert results.total_questions == 3
        assert results.first_try_correct == 3
        assert results.total_submissions == 3
        assert results.wrong_answers == []
        assert results.percentage == 100
        assert results.verdict == "Outstanding!"

    def test_missed_question_listed(self, sample_questions, settings, rng):
        session = PracticeSession(sample_questions, settings=settings, rng=rng)
        first = session.start()

        wrong_choice = (session.current_question.correct_answer + 1) % len(
            session.current_question.answers
        )
        assert session.submit(wrong_choice) is False
        while session.advance() is not None:
            assert session.submit(session.current_question.correct_answer) is True

        results = session.results()
        assert results.first_try_correct == 2
        assert len(results.wrong_answers) == 1
        wrong = results.wrong_answers[0]
        assert wrong.question_number == first + 1
        assert wrong.question_text == sample_questions[first].text
        assert wrong.times_missed == 1
        assert results.total_submissions > 3

    def test_cannot_submit_before_start(self, sample_questions, settings):
        session = PracticeSession(sample_questions, settings=settings)
        with pytest.raises(SessionStateError):
            session.submit(0)

    def test_cannot_start_twice(self, sample_questions, settings):
        session = PracticeSession(sample_questions, settings=settings)
        session.start()
        with pytest.raises(SessionStateError):
            session.start()

    def test_cannot_submit_twice(self, sample_questions, settings):
        session = PracticeSession(sample_questions, settings=settings)
        session.start()
        session.submit(0)
        with pytest.raises(SessionStateError):
            session.submit(0)

    def test_cannot_advance_without_answer(self, sample_questions, settings):
        session = PracticeSession(sample_questions, settings=settings)
        with pytest.raises(SessionStateError):
            session.advance()
        session.start()
        with pytest.raises(SessionStateError):
            session.advance()

    def test_performance_for_current(self, sample_questions, settings):
        session = PracticeSession(sample_questions, settings=settings)
        current = session.start()
        session.submit(0)

        perf = session.performance_for_current()
        assert perf.question_id == current
        assert perf.attempts == 1

    def test_fixed_policy_from_settings(self, sample_questions, settings, rng):
        settings = settings.model_copy(update={"repeat_policy": "fixed", "fixed_post_correct_repeats": 2})
        session = PracticeSession(sample_questions, settings=settings, rng=rng)
        first = session.start()
        session.submit(-1)
        while session.advance() is not None:
            session.submit(session.current_question.correct_answer)

        perf = session.scheduler.get_performance()[first]
        assert perf.correct_count == 3


class TestFromBank:
    def test_draws_requested_count(self, settings):
        bank = QuestionBank([
            Question(text=f"Question {i}?", answers=["a", "b"], correct_answer=0)
            for i in range(30)
        ])

        session = PracticeSession.from_bank(bank, count=12, settings=settings, rng=random.Random(2))

        assert len(session.questions) == 12
        assert len({q.text for q in session.questions}) == 12

    def test_count_clamped_to_maximum(self, settings):
        settings = settings.model_copy(update={"max_question_count": 5})
        bank = QuestionBank([
            Question(text=f"Question {i}?", answers=["a", "b"], correct_answer=0)
            for i in range(30)
        ])

        session = PracticeSession.from_bank(bank, count=12, settings=settings)

        assert len(session.questions) == 5

    def test_default_count_and_block(self, sample_questions, settings):
        bank = QuestionBank(sample_questions)

        session = PracticeSession.from_bank(bank, block="Networking", settings=settings)

        assert len(session.questions) == 2
        assert {q.block for q in session.questions} == {"Networking"}

    def test_empty_block_rejected(self, sample_questions, settings):
        bank = QuestionBank(sample_questions)
        with pytest.raises(InvalidSessionError):
            PracticeSession.from_bank(bank, block="History", settings=settings)


class TestResults:
    @pytest.mark.parametrize(
        "first_try, verdict",
        [(10, "Outstanding!"), (9, "Outstanding!"), (8, "Great job!"), (6, "Good effort!"), (5, "Keep practicing!")],
    )
    def test_verdicts(self, first_try, verdict):
        results = SessionResults(total_questions=10, first_try_correct=first_try, stats=SessionStats())
        assert results.verdict == verdict

    def test_empty_results(self):
        results = SessionResults(total_questions=0, first_try_correct=0, stats=SessionStats())
        assert results.percentage == 0

    def test_build_results_orders_wrong_answers(self):
        questions = [
            Question(text=f"Q{i}", answers=["a", "b"], correct_answer=0) for i in range(3)
        ]
        performance = {
            2: QuestionPerformance(question_id=2, attempts=3, correct_count=2, incorrect_count=1, ever_missed=True),
            0: QuestionPerformance(question_id=0, attempts=4, correct_count=2, incorrect_count=2, ever_missed=True),
            1: QuestionPerformance(question_id=1, attempts=1, correct_count=1),
        }

        results = build_results(questions, performance, SessionStats(8, 5, 3))

        assert [w.question_number for w in results.wrong_answers] == [1, 3]
        assert [w.times_missed for w in results.wrong_answers] == [2, 1]
        assert results.first_try_correct == 1
        assert results.total_submissions == 8
