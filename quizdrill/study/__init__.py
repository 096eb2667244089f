"""
Study Module for quizdrill.

Host-side pieces around the scheduler:
- Question bank loading and validation
- Random session subsets
- Practice session flow and results
- Simulated sessions for scheduler diagnostics
"""

from quizdrill.study.practice_session import (
    PracticeSession,
    SessionResults,
    WrongAnswer,
    build_results,
)
from quizdrill.study.question_bank import Question, QuestionBank, create_random_subset
from quizdrill.study.simulation import (
    SimulatedRun,
    SimulationSummary,
    run_simulation,
    simulate_session,
)

__all__ = [
    "Question",
    "QuestionBank",
    "create_random_subset",
    "PracticeSession",
    "SessionResults",
    "WrongAnswer",
    "build_results",
    "SimulatedRun",
    "SimulationSummary",
    "simulate_session",
    "run_simulation",
]
