"""
Core Module - Shared domain models and errors.

Components:
- performance: Per-question counters (QuestionPerformance, AnswerResult, SessionStats)
- errors: Exception hierarchy rooted at QuizDrillError

Design Principle:
The scheduling and study packages import from quizdrill.core rather than
defining their own records or exceptions.
"""

from quizdrill.core.errors import (
    ConfigurationError,
    InvalidSessionError,
    QuestionBankError,
    QuizDrillError,
    SchedulerError,
    SessionCompleteError,
    SessionStateError,
    UnknownQuestionError,
)
from quizdrill.core.performance import AnswerResult, QuestionPerformance, SessionStats

__all__ = [
    # Performance
    "AnswerResult",
    "QuestionPerformance",
    "SessionStats",
    # Errors
    "QuizDrillError",
    "ConfigurationError",
    "SchedulerError",
    "InvalidSessionError",
    "UnknownQuestionError",
    "SessionCompleteError",
    "SessionStateError",
    "QuestionBankError",
]
