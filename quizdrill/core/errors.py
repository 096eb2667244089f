"""
Exception hierarchy for quizdrill.

Domain code raises these; the CLI catches QuizDrillError at the command
boundary and reports it.
"""

from __future__ import annotations


class QuizDrillError(Exception):
    """Base class for all quizdrill errors."""
    pass


class ConfigurationError(QuizDrillError):
    """Raised when a setting cannot be resolved to a usable value."""
    pass


# =============================================================================
# Scheduler Errors
# =============================================================================


class SchedulerError(QuizDrillError):
    """Base class for scheduler contract violations."""
    pass


class InvalidSessionError(SchedulerError):
    """Raised when a session cannot be built (negative size, no questions)."""
    pass


class UnknownQuestionError(SchedulerError, KeyError):
    """Raised when a question id is not part of the session."""

    def __init__(self, question_id: int, total_questions: int):
        self.question_id = question_id
        self.total_questions = total_questions
        super().__init__(
            f"Unknown question id {question_id!r} "
            f"(session has {total_questions} questions)"
        )

    def __str__(self) -> str:
        # KeyError would repr() the message otherwise
        return str(self.args[0])


class SessionCompleteError(SchedulerError):
    """Raised when a next question is requested after the session is complete."""
    pass


# =============================================================================
# Host Errors
# =============================================================================


class SessionStateError(QuizDrillError):
    """Raised when practice session calls arrive out of order."""
    pass


class QuestionBankError(QuizDrillError):
    """Raised when a question bank file is unreadable or invalid."""
    pass
