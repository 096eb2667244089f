"""
Simulated practice sessions for the adaptive scheduler.

Runs synthetic learners with a fixed per-answer accuracy through the
scheduler, without questions or UI. Surfaces how long sessions take to
complete and whether spacing holds, e.g.:

    summary = run_simulation(question_count=20, accuracy=0.7, runs=200)
"""

from __future__ import annotations

import random
import statistics
from dataclasses import dataclass, field

from loguru import logger

from quizdrill.scheduling.adaptive_scheduler import AdaptiveScheduler, SchedulerConfig


@dataclass
class SimulatedRun:
    """Outcome of one simulated session."""

    completed: bool
    submissions: int
    presentations: list[int] = field(default_factory=list)
    min_repeat_gap: int | None = None  # Smallest stamp gap between two showings of one question


@dataclass
class SimulationSummary:
    """Aggregate over many simulated sessions."""

    question_count: int
    accuracy: float
    runs: list[SimulatedRun] = field(default_factory=list)

    @property
    def completed_runs(self) -> int:
        return sum(1 for r in self.runs if r.completed)

    @property
    def submissions(self) -> list[int]:
        return [r.submissions for r in self.runs if r.completed]

    @property
    def min_submissions(self) -> int:
        return min(self.submissions, default=0)

    @property
    def max_submissions(self) -> int:
        return max(self.submissions, default=0)

    @property
    def mean_submissions(self) -> float:
        return statistics.fmean(self.submissions) if self.submissions else 0.0

    @property
    def min_repeat_gap(self) -> int | None:
        gaps = [r.min_repeat_gap for r in self.runs if r.min_repeat_gap is not None]
        return min(gaps, default=None)


def simulate_session(
    question_count: int,
    accuracy: float,
    config: SchedulerConfig | None = None,
    rng: random.Random | None = None,
    max_submissions: int = 10_000,
) -> SimulatedRun:
    """
    Drive one scheduler to completion with random answers.

    Args:
        question_count: Questions in the session
        accuracy: Probability that any single answer is correct
        config: Scheduler configuration
        rng: Random source for answers and the scheduler
        max_submissions: Stop early (completed=False) after this many answers
    """
    rng = rng or random.Random()
    scheduler = AdaptiveScheduler(question_count, config=config, rng=rng)

    run = SimulatedRun(completed=scheduler.is_session_complete(), submissions=0)
    if run.completed:
        return run

    last_stamp: dict[int, int] = {}
    current = None
    while run.submissions < max_submissions:
        current = scheduler.get_next_question(current)
        stamp = scheduler.submission_count
        if current in last_stamp:
            gap = stamp - last_stamp[current]
            if run.min_repeat_gap is None or gap < run.min_repeat_gap:
                run.min_repeat_gap = gap
        last_stamp[current] = stamp
        run.presentations.append(current)

        scheduler.record_answer(current, rng.random() < accuracy)
        run.submissions += 1

        if scheduler.is_session_complete():
            run.completed = True
            break

    if not run.completed:
        logger.warning(
            f"Simulated session stopped after {max_submissions} submissions "
            f"(pending: {scheduler.pending_question_ids()})"
        )
    return run


def run_simulation(
    question_count: int,
    accuracy: float,
    runs: int = 100,
    config: SchedulerConfig | None = None,
    seed: int | None = None,
) -> SimulationSummary:
    """
    Run many simulated sessions.

    Args:
        question_count: Questions per session
        accuracy: Per-answer probability of a correct answer (0 < accuracy <= 1)
        runs: Number of sessions
        config: Scheduler configuration
        seed: Seed for reproducible runs
    """
    if not 0 < accuracy <= 1:
        raise ValueError(f"accuracy must be in (0, 1], got {accuracy}")
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")

    rng = random.Random(seed)
    summary = SimulationSummary(question_count=question_count, accuracy=accuracy)
    for _ in range(runs):
        summary.runs.append(simulate_session(question_count, accuracy, config, rng))

    logger.info(
        f"Simulated {runs} sessions of {question_count} questions at {accuracy:.0%}: "
        f"{summary.completed_runs} completed, mean {summary.mean_submissions:.1f} submissions"
    )
    return summary
