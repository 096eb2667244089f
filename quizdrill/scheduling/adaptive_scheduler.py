"""
Adaptive Question Scheduler.

Decides, question by question, which question of a practice session to
present next, given the running record of correct/incorrect answers.

Implements:
- Randomized first pass (Fisher-Yates shuffle of question ids)
- Missed questions resurfacing within a short window during the first pass
- Scheduled repeats (1-2 by default) after a missed question is recovered
- Minimum spacing so a just-answered question is never shown back to back
- Round-robin among equally missed questions once every question was seen

The scheduler is purely reactive: the host calls record_answer() after each
submission and get_next_question() / is_session_complete() to advance.
Question ids are 0-based positions in the session's question list.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from loguru import logger

from quizdrill.core.errors import (
    InvalidSessionError,
    SessionCompleteError,
    UnknownQuestionError,
)
from quizdrill.core.performance import AnswerResult, QuestionPerformance, SessionStats
from quizdrill.scheduling.policies import RandomRepeatPolicy, RepeatPolicy, get_repeat_policy

if TYPE_CHECKING:
    from quizdrill.config import Settings


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class SchedulerConfig:
    """Configuration for the adaptive scheduler."""

    min_repeat_spacing: int = 2  # Submissions before a question may return
    first_pass_window: int = 4  # Misses resurface within this many submissions
    repeat_policy: RepeatPolicy = field(default_factory=RandomRepeatPolicy)
    seed: int | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> SchedulerConfig:
        """Build a scheduler configuration from application settings."""
        return cls(
            min_repeat_spacing=settings.min_repeat_spacing,
            first_pass_window=settings.first_pass_window,
            repeat_policy=get_repeat_policy(settings.repeat_policy, settings),
            seed=settings.seed,
        )


def shuffled_order(total: int, rng: random.Random) -> list[int]:
    """Uniform random permutation of 0..total-1 (Fisher-Yates)."""
    order = list(range(total))
    for i in range(total - 1, 0, -1):
        j = rng.randint(0, i)
        order[i], order[j] = order[j], order[i]
    return order


# =============================================================================
# Adaptive Scheduler
# =============================================================================


class AdaptiveScheduler:
    """
    Per-session question scheduler.

    Ordering policy:
    1. First pass: eligible missed questions shown within the first-pass
       window come first, otherwise the next unseen question in shuffled order
    2. After the first pass: questions that still need repeats, most missed
       first, rotating among ties
    3. Session completes once every question was attempted and nothing
       needs repeating
    """

    def __init__(
        self,
        total_questions: int,
        config: SchedulerConfig | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the scheduler for one session.

        Args:
            total_questions: Number of questions in the session (0 = already complete)
            config: Scheduling configuration (uses defaults if None)
            rng: Random source for shuffling and repeat quotas (seeded from config if None)
        """
        if total_questions < 0:
            raise InvalidSessionError(
                f"total_questions must be >= 0, got {total_questions}"
            )

        self.config = config or SchedulerConfig()
        self._rng = rng if rng is not None else random.Random(self.config.seed)

        self._performance: dict[int, QuestionPerformance] = {
            question_id: QuestionPerformance(question_id=question_id)
            for question_id in range(total_questions)
        }
        self._initial_order = shuffled_order(total_questions, self._rng)
        self._first_pass_index = 0
        self._submission_count = 0
        self._rotation_index = 0

        logger.debug(
            f"Scheduler created: {total_questions} questions, "
            f"policy={self.config.repeat_policy!r}"
        )

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def total_questions(self) -> int:
        return len(self._performance)

    @property
    def submission_count(self) -> int:
        return self._submission_count

    @property
    def initial_order(self) -> tuple[int, ...]:
        return tuple(self._initial_order)

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    def record_answer(self, question_id: int, is_correct: bool) -> None:
        """
        Record one submission for a question.

        The first correct answer after a miss schedules the policy's repeat
        quota; later correct answers consume it one at a time.

        Raises:
            UnknownQuestionError: question_id is not part of this session
        """
        perf = self._get(question_id)

        self._submission_count += 1
        perf.attempts += 1

        if is_correct:
            perf.correct_count += 1
            if perf.has_unresolved_miss and perf.post_correct_repeats_needed == 0:
                perf.post_correct_repeats_needed = (
                    self.config.repeat_policy.repeats_after_recovery(self._rng)
                )
                logger.debug(
                    f"Question {question_id} recovered, "
                    f"{perf.post_correct_repeats_needed} repeat(s) scheduled"
                )
            elif perf.post_correct_repeats_needed > 0:
                perf.post_correct_repeats_needed -= 1
            perf.last_result = AnswerResult.CORRECT
        else:
            perf.incorrect_count += 1
            perf.last_result = AnswerResult.INCORRECT
            perf.ever_missed = True

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def get_next_question(self, exclude_id: int | None = None) -> int:
        """
        Choose the next question to present and stamp it as shown.

        Args:
            exclude_id: Question that must not be chosen (usually the current one)

        Returns:
            Question id in [0, total_questions)

        Raises:
            SessionCompleteError: Nothing is left to present
            UnknownQuestionError: exclude_id is not part of this session
        """
        if exclude_id is not None:
            self._get(exclude_id)

        if self.is_session_complete():
            raise SessionCompleteError(
                f"Session is complete after {self._submission_count} submissions"
            )

        selected = None
        if not self.has_attempted_all():
            selected = self._select_first_pass(exclude_id)
        if selected is None:
            selected = self._select_repeat(exclude_id)
        if selected is None:
            selected = self._select_spacer(exclude_id)
        if selected is None:
            selected = self._select_ignoring_spacing(exclude_id)

        self._performance[selected].last_shown_at = self._submission_count
        return selected

    def _select_first_pass(self, exclude_id: int | None) -> int | None:
        """Recent misses first, then the next unseen question in shuffled order."""
        candidates = self._get_repeat_candidates(exclude_id, during_first_pass=True)
        if candidates:
            candidates.sort(
                key=lambda p: (
                    -p.incorrect_count,
                    -p.post_correct_repeats_needed,
                    p.last_shown_at,
                )
            )
            selected = candidates[0].question_id
            logger.debug(f"First pass: repeating question {selected}")
            return selected

        order = self._initial_order
        for position in range(self._first_pass_index, len(order)):
            question_id = order[position]
            if question_id != exclude_id and not self._performance[question_id].is_attempted:
                self._first_pass_index = position + 1
                return question_id

        # Skipped while excluded; the cursor never moves back
        for question_id in order[: self._first_pass_index]:
            if question_id != exclude_id and not self._performance[question_id].is_attempted:
                return question_id

        return None

    def _select_repeat(self, exclude_id: int | None) -> int | None:
        """Most missed question needing a repeat, rotating among ties."""
        candidates = self._get_repeat_candidates(exclude_id, during_first_pass=False)
        if not candidates:
            return None

        candidates.sort(
            key=lambda p: (
                -p.incorrect_count,
                -p.post_correct_repeats_needed,
                p.question_id,
            )
        )
        top_incorrect = candidates[0].incorrect_count
        top_group = [p for p in candidates if p.incorrect_count == top_incorrect]

        selected = top_group[self._rotation_index % len(top_group)].question_id
        self._rotation_index += 1
        return selected

    def _select_spacer(self, exclude_id: int | None) -> int | None:
        """
        Least recently shown question that is out of its cool-down.

        Used when pending repeats are still cooling down: a finished question
        fills the gap so the repeat can come back with proper spacing.
        """
        eligible = [
            perf
            for perf in self._performance.values()
            if perf.question_id != exclude_id and self._is_eligible_for_repeat(perf)
        ]
        if not eligible:
            return None

        spacer = min(eligible, key=lambda p: (p.last_shown_at, p.question_id))
        logger.debug(f"No repeat is out of cool-down, using question {spacer.question_id} as spacer")
        return spacer.question_id

    def _select_ignoring_spacing(self, exclude_id: int | None) -> int:
        """Outstanding question regardless of cool-down (single-question sessions)."""
        outstanding = [perf for perf in self._performance.values() if not perf.is_done]
        outstanding.sort(
            key=lambda p: (
                p.question_id == exclude_id,
                -p.incorrect_count,
                -p.post_correct_repeats_needed,
                p.question_id,
            )
        )
        selected = outstanding[0].question_id
        logger.warning(
            f"Question {selected} shown again without minimum spacing "
            f"(no other question available at submission {self._submission_count})"
        )
        return selected

    def _get_repeat_candidates(
        self,
        exclude_id: int | None,
        during_first_pass: bool,
    ) -> list[QuestionPerformance]:
        """
        Attempted questions that still need repeating and may be shown now.

        During the first pass only questions shown within the first-pass
        window qualify, so misses resurface quickly instead of waiting for
        the end of the pass.
        """
        candidates = []
        for perf in self._performance.values():
            if perf.question_id == exclude_id or not perf.is_attempted:
                continue
            if not self._is_eligible_for_repeat(perf):
                continue
            if during_first_pass:
                since_shown = self._submission_count - perf.last_shown_at
                if since_shown >= self.config.first_pass_window:
                    continue
            if perf.needs_repeat:
                candidates.append(perf)
        return candidates

    def _is_eligible_for_repeat(self, perf: QuestionPerformance) -> bool:
        return self._submission_count - perf.last_shown_at >= self.config.min_repeat_spacing

    # -------------------------------------------------------------------------
    # Completion & introspection
    # -------------------------------------------------------------------------

    def is_session_complete(self) -> bool:
        """All questions attempted, no unresolved misses, no pending repeats."""
        return all(perf.is_done for perf in self._performance.values())

    def has_attempted_all(self) -> bool:
        return all(perf.is_attempted for perf in self._performance.values())

    def pending_question_ids(self) -> list[int]:
        """Questions that still keep the session open."""
        return [
            question_id
            for question_id, perf in self._performance.items()
            if not perf.is_done
        ]

    def get_performance(self) -> dict[int, QuestionPerformance]:
        """Snapshot of every question's record; changes to it do not reach the scheduler."""
        return {
            question_id: replace(perf)
            for question_id, perf in self._performance.items()
        }

    def get_stats(self) -> SessionStats:
        """Totals summed over all questions."""
        return SessionStats(
            total_attempts=sum(p.attempts for p in self._performance.values()),
            total_correct=sum(p.correct_count for p in self._performance.values()),
            total_incorrect=sum(p.incorrect_count for p in self._performance.values()),
        )

    def _get(self, question_id: int) -> QuestionPerformance:
        perf = self._performance.get(question_id)
        if perf is None:
            raise UnknownQuestionError(question_id, self.total_questions)
        return perf
