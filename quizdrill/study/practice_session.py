"""
Practice Session: host loop around the adaptive scheduler.

Maps scheduler question ids to concrete questions and enforces the call
order the scheduler expects:

    start() -> submit() -> advance() -> submit() -> ... -> results()

One scheduler per session; nothing is persisted.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from loguru import logger

from quizdrill.config import Settings, get_settings
from quizdrill.core.errors import InvalidSessionError, SessionStateError
from quizdrill.core.performance import QuestionPerformance, SessionStats
from quizdrill.scheduling.adaptive_scheduler import AdaptiveScheduler, SchedulerConfig
from quizdrill.study.question_bank import Question, QuestionBank, create_random_subset


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class WrongAnswer:
    """A question that was missed at least once."""

    question_number: int  # 1-based, in session order
    question_text: str
    times_missed: int


@dataclass
class SessionResults:
    """Summary of a finished (or abandoned) practice session."""

    total_questions: int
    first_try_correct: int
    stats: SessionStats
    wrong_answers: list[WrongAnswer] = field(default_factory=list)

    @property
    def total_submissions(self) -> int:
        return self.stats.total_attempts

    @property
    def percentage(self) -> int:
        """Share of questions answered correctly on the first try, rounded."""
        if self.total_questions == 0:
            return 0
        return round(self.first_try_correct / self.total_questions * 100)

    @property
    def verdict(self) -> str:
        if self.percentage >= 90:
            return "Outstanding!"
        elif self.percentage >= 75:
            return "Great job!"
        elif self.percentage >= 60:
            return "Good effort!"
        else:
            return "Keep practicing!"


def build_results(
    questions: list[Question],
    performance: dict[int, QuestionPerformance],
    stats: SessionStats,
) -> SessionResults:
    """Build a results summary from a performance snapshot."""
    wrong_answers = [
        WrongAnswer(
            question_number=question_id + 1,
            question_text=questions[question_id].text,
            times_missed=perf.incorrect_count,
        )
        for question_id, perf in sorted(performance.items())
        if perf.ever_missed
    ]
    first_try_correct = sum(
        1 for perf in performance.values() if perf.is_attempted and not perf.ever_missed
    )
    return SessionResults(
        total_questions=len(questions),
        first_try_correct=first_try_correct,
        stats=stats,
        wrong_answers=wrong_answers,
    )


# =============================================================================
# Practice Session
# =============================================================================


class PracticeSession:
    """Drives one adaptive practice session over a fixed list of questions."""

    def __init__(
        self,
        questions: list[Question],
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize a session.

        Args:
            questions: Questions in session order (ids are positions in this list)
            settings: Scheduler settings (cached settings if None)
            rng: Random source shared with the scheduler
        """
        if not questions:
            raise InvalidSessionError("A practice session needs at least one question")

        self.settings = settings or get_settings()
        self.questions = list(questions)
        self.scheduler = AdaptiveScheduler(
            len(self.questions),
            config=SchedulerConfig.from_settings(self.settings),
            rng=rng,
        )
        self._current_id: int | None = None
        self._answered = False

    @classmethod
    def from_bank(
        cls,
        bank: QuestionBank,
        count: int | None = None,
        block: str | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> PracticeSession:
        """
        Build a session from a random subset of a question bank.

        Args:
            bank: Loaded question bank
            count: Questions to draw (settings default if None, clamped to the maximum)
            block: Restrict to one block
            settings: Application settings
            rng: Random source for the subset and the scheduler
        """
        settings = settings or get_settings()
        if rng is None:
            rng = random.Random(settings.seed)

        pool = bank.for_block(block) if block is not None else list(bank)
        requested = count if count is not None else settings.default_question_count
        requested = min(requested, settings.max_question_count)

        indices = create_random_subset(len(pool), requested, rng)
        logger.info(
            f"Session drawn: {len(indices)} of {len(pool)} questions"
            + (f" from block {block!r}" if block is not None else "")
        )
        return cls([pool[i] for i in indices], settings=settings, rng=rng)

    # -------------------------------------------------------------------------
    # Flow
    # -------------------------------------------------------------------------

    @property
    def current_id(self) -> int | None:
        return self._current_id

    @property
    def current_question(self) -> Question:
        if self._current_id is None:
            raise SessionStateError("Session has not started")
        return self.questions[self._current_id]

    @property
    def is_complete(self) -> bool:
        return self.scheduler.is_session_complete()

    def start(self) -> int:
        """Present the first question."""
        if self._current_id is not None:
            raise SessionStateError("Session already started")
        self._current_id = self.scheduler.get_next_question(None)
        self._answered = False
        return self._current_id

    def submit(self, answer_index: int) -> bool:
        """
        Submit an answer for the current question.

        Returns:
            Whether the answer was correct
        """
        question = self.current_question
        if self._answered:
            raise SessionStateError("Current question was already answered")

        correct = question.is_correct(answer_index)
        self.scheduler.record_answer(self._current_id, correct)
        self._answered = True
        return correct

    def advance(self) -> int | None:
        """
        Move to the next question.

        Returns:
            Next question id, or None once the session is complete
        """
        if self._current_id is None:
            raise SessionStateError("Session has not started")
        if not self._answered:
            raise SessionStateError("Answer the current question before advancing")

        if self.scheduler.is_session_complete():
            logger.info(
                f"Session complete after {self.scheduler.submission_count} submissions"
            )
            return None

        self._current_id = self.scheduler.get_next_question(self._current_id)
        self._answered = False
        return self._current_id

    def performance_for_current(self) -> QuestionPerformance:
        """Snapshot of the current question's record (for score bars)."""
        if self._current_id is None:
            raise SessionStateError("Session has not started")
        return self.scheduler.get_performance()[self._current_id]

    def results(self) -> SessionResults:
        """Summary built from the scheduler's performance snapshot."""
        return build_results(
            self.questions,
            self.scheduler.get_performance(),
            self.scheduler.get_stats(),
        )
