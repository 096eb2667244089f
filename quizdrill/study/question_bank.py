"""
Question Bank: multiple choice question loader.

Loads questions from JSON files in either shape:
- a plain list of question records
- an object with a "questions" list

Each record is validated with pydantic. Question ids used by the scheduler
are positions in the list handed to a practice session, never stored here.
"""

from __future__ import annotations

import json
import random
from collections.abc import Iterator
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from quizdrill.core.errors import QuestionBankError


class Question(BaseModel):
    """A multiple choice question."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str = Field(..., min_length=1, description="Question prompt")
    answers: list[str] = Field(..., min_length=2, description="Answer options in display order")
    correct_answer: int = Field(
        ...,
        ge=0,
        alias="correctAnswer",
        description="Index of the correct option in answers",
    )
    block: str | None = Field(None, description="Optional block/chapter name")

    @model_validator(mode="after")
    def _check_correct_answer(self) -> Question:
        if self.correct_answer >= len(self.answers):
            raise ValueError(
                f"correct_answer {self.correct_answer} out of range "
                f"for {len(self.answers)} answers"
            )
        return self

    def is_correct(self, answer_index: int) -> bool:
        return answer_index == self.correct_answer


class QuestionBank:
    """An ordered, validated collection of questions."""

    def __init__(self, questions: list[Question], source: Path | None = None):
        self.questions = list(questions)
        self.source = source

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self.questions)

    @classmethod
    def load(cls, path: str | Path) -> QuestionBank:
        """
        Load and validate a question bank from a JSON file.

        Args:
            path: Path to the JSON file

        Returns:
            QuestionBank with questions in file order

        Raises:
            QuestionBankError: File missing, not JSON, or a record is invalid
        """
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise QuestionBankError(f"Question bank not found: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise QuestionBankError(f"Could not read question bank {path}: {e}") from e

        bank = cls.from_records(raw, source=path)
        logger.info(f"Loaded {len(bank)} questions from {path}")
        return bank

    @classmethod
    def from_records(cls, raw: object, source: Path | None = None) -> QuestionBank:
        """Validate already-parsed JSON data."""
        if isinstance(raw, dict):
            raw = raw.get("questions")
        if not isinstance(raw, list):
            raise QuestionBankError(
                "Question bank must be a list of questions or an object with a 'questions' list"
            )

        questions = []
        for index, record in enumerate(raw):
            try:
                questions.append(Question.model_validate(record))
            except ValidationError as e:
                raise QuestionBankError(f"Invalid question #{index + 1}: {e}") from e

        return cls(questions, source=source)

    def blocks(self) -> dict[str, int]:
        """Question count per block, in first-seen order (unnamed blocks grouped as '')."""
        counts: dict[str, int] = {}
        for question in self.questions:
            key = question.block or ""
            counts[key] = counts.get(key, 0) + 1
        return counts

    def for_block(self, block: str) -> list[Question]:
        """Questions belonging to one block."""
        return [q for q in self.questions if (q.block or "") == block]


def create_random_subset(
    total_count: int,
    requested_count: int,
    rng: random.Random | None = None,
) -> list[int]:
    """
    Pick a random subset of indices.

    Args:
        total_count: Number of items available
        requested_count: Desired subset size (clamped to total_count)
        rng: Random source (unseeded if None)

    Returns:
        Shuffled list of distinct indices in [0, total_count)
    """
    if total_count < 0 or requested_count < 0:
        raise ValueError(
            f"Counts must be >= 0 (total={total_count}, requested={requested_count})"
        )

    rng = rng or random.Random()
    indices = list(range(total_count))
    rng.shuffle(indices)
    return indices[: min(requested_count, total_count)]
