"""
Adaptive scheduling for practice sessions.

Components:
- AdaptiveScheduler: Picks the next question from per-question performance
- SchedulerConfig: Spacing, first-pass window and repeat policy
- RandomRepeatPolicy / FixedRepeatPolicy: Repeat quota after a recovered miss
"""

from quizdrill.scheduling.adaptive_scheduler import (
    AdaptiveScheduler,
    SchedulerConfig,
    shuffled_order,
)
from quizdrill.scheduling.policies import (
    FixedRepeatPolicy,
    RandomRepeatPolicy,
    RepeatPolicy,
    get_repeat_policy,
)

__all__ = [
    "AdaptiveScheduler",
    "SchedulerConfig",
    "shuffled_order",
    "RepeatPolicy",
    "RandomRepeatPolicy",
    "FixedRepeatPolicy",
    "get_repeat_policy",
]
