"""
quizdrill: adaptive multiple choice practice sessions.

The AdaptiveScheduler decides which question to present next from the
running record of answers; the study package hosts sessions around it.
"""

from quizdrill.scheduling import AdaptiveScheduler, SchedulerConfig

__version__ = "1.0.0"

__all__ = ["AdaptiveScheduler", "SchedulerConfig", "__version__"]
