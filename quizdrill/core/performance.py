"""
Per-question performance records for a practice session.

Design:
- AnswerResult: Enum for the outcome of the most recent submission
- QuestionPerformance: Mutable counters owned by the scheduler
- SessionStats: Aggregate totals handed to the host
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AnswerResult(str, Enum):
    """Outcome of the most recent submission for a question."""

    NONE = "none"
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @property
    def symbol(self) -> str:
        """Status symbol for CLI display."""
        return {
            AnswerResult.NONE: "○",
            AnswerResult.CORRECT: "✓",
            AnswerResult.INCORRECT: "✗",
        }[self]


@dataclass
class QuestionPerformance:
    """
    Running record for one question in one session.

    Counts are cumulative for the whole session. A question is "done" once it
    has been attempted, its last answer was correct and no scheduled repeats
    remain.
    """

    question_id: int
    attempts: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    last_result: AnswerResult = AnswerResult.NONE
    ever_missed: bool = False
    post_correct_repeats_needed: int = 0
    last_shown_at: int = -1  # submission count when last presented

    @property
    def is_attempted(self) -> bool:
        return self.attempts > 0

    @property
    def has_unresolved_miss(self) -> bool:
        """The latest answer was wrong and has not been followed by a correct one."""
        return self.last_result is AnswerResult.INCORRECT

    @property
    def needs_repeat(self) -> bool:
        """Whether the question still has to come back this session."""
        return self.has_unresolved_miss or self.post_correct_repeats_needed > 0

    @property
    def is_done(self) -> bool:
        return self.is_attempted and not self.needs_repeat


@dataclass(frozen=True)
class SessionStats:
    """Aggregate totals summed over every question in a session."""

    total_attempts: int = 0
    total_correct: int = 0
    total_incorrect: int = 0

    @property
    def accuracy(self) -> float:
        """Share of correct submissions (0.0 before any submission)."""
        if self.total_attempts == 0:
            return 0.0
        return self.total_correct / self.total_attempts

    def to_dict(self) -> dict[str, int]:
        return {
            "total_attempts": self.total_attempts,
            "total_correct": self.total_correct,
            "total_incorrect": self.total_incorrect,
        }
