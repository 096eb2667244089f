"""
Repeat policies: how many scheduled repeats a recovered question needs.

A question is "recovered" by the first correct answer that follows a miss.
The policy decides the repeat quota handed out at that moment.

- RandomRepeatPolicy: uniform choice from {1, 2} (default)
- FixedRepeatPolicy: fixed quota; repeats=1 means two correct answers
  after any miss (the recovering answer plus one repeat)
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from quizdrill.core.errors import ConfigurationError

if TYPE_CHECKING:
    from quizdrill.config import Settings


class RepeatPolicy(Protocol):
    name: str

    def repeats_after_recovery(self, rng: random.Random) -> int: ...


class RandomRepeatPolicy:
    """Choose the repeat quota uniformly from a small set of counts."""

    name = "random"

    def __init__(self, choices: Sequence[int] = (1, 2)):
        if not choices:
            raise ConfigurationError("RandomRepeatPolicy needs at least one choice")
        if any(choice < 1 for choice in choices):
            raise ConfigurationError(f"Repeat choices must be >= 1, got {list(choices)}")
        self.choices = tuple(choices)

    def repeats_after_recovery(self, rng: random.Random) -> int:
        return rng.choice(self.choices)

    def __repr__(self) -> str:
        return f"RandomRepeatPolicy(choices={self.choices})"


class FixedRepeatPolicy:
    """Always hand out the same repeat quota."""

    name = "fixed"

    def __init__(self, repeats: int = 1):
        if repeats < 1:
            raise ConfigurationError(f"Fixed repeat count must be >= 1, got {repeats}")
        self.repeats = repeats

    def repeats_after_recovery(self, rng: random.Random) -> int:
        return self.repeats

    def __repr__(self) -> str:
        return f"FixedRepeatPolicy(repeats={self.repeats})"


def get_repeat_policy(name: str, settings: Settings | None = None) -> RepeatPolicy:
    """
    Resolve a policy by name.

    Args:
        name: "random" or "fixed"
        settings: Source of the policy parameters (defaults used if None)

    Returns:
        Configured RepeatPolicy
    """
    if name == "random":
        if settings is None:
            return RandomRepeatPolicy()
        return RandomRepeatPolicy(settings.post_correct_repeat_choices)
    if name == "fixed":
        if settings is None:
            return FixedRepeatPolicy()
        return FixedRepeatPolicy(settings.fixed_post_correct_repeats)
    raise ConfigurationError(f"Unknown repeat policy: {name!r} (expected 'random' or 'fixed')")
