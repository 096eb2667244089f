"""
Unit tests for question bank loading and random subsets.
"""

import json
import random

import pytest

from quizdrill.core.errors import QuestionBankError
from quizdrill.study.question_bank import Question, QuestionBank, create_random_subset


class TestQuestion:
    def test_is_correct(self, sample_questions):
        question = sample_questions[0]
        assert question.is_correct(1) is True
        assert question.is_correct(0) is False

    def test_camel_case_alias(self):
        question = Question.model_validate(
            {"text": "2 + 2?", "answers": ["3", "4"], "correctAnswer": 1}
        )
        assert question.correct_answer == 1
        assert question.block is None

    def test_correct_answer_out_of_range(self):
        with pytest.raises(ValueError):
            Question(text="2 + 2?", answers=["3", "4"], correct_answer=2)

    def test_needs_two_answers(self):
        with pytest.raises(ValueError):
            Question(text="2 + 2?", answers=["4"], correct_answer=0)


class TestQuestionBank:
    def test_load_object_format(self, bank_file):
        bank = QuestionBank.load(bank_file)

        assert len(bank) == 3
        assert bank.source == bank_file
        assert [q.block for q in bank] == ["Networking", "Networking", "Python"]

    def test_load_list_format(self, tmp_path, sample_records):
        path = tmp_path / "list.json"
        path.write_text(json.dumps(sample_records), encoding="utf-8")

        assert len(QuestionBank.load(path)) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(QuestionBankError, match="not found"):
            QuestionBank.load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(QuestionBankError):
            QuestionBank.load(path)

    def test_invalid_record_reports_position(self, sample_records):
        sample_records[1]["correct_answer"] = 9

        with pytest.raises(QuestionBankError, match="#2"):
            QuestionBank.from_records(sample_records)

    def test_wrong_top_level_shape(self):
        with pytest.raises(QuestionBankError):
            QuestionBank.from_records({"items": []})

    def test_blocks_and_filter(self, sample_questions):
        bank = QuestionBank(sample_questions + [
            Question(text="Unfiled?", answers=["a", "b"], correct_answer=0),
        ])

        assert bank.blocks() == {"Networking": 2, "Python": 1, "": 1}
        assert len(bank.for_block("Networking")) == 2
        assert bank.for_block("Missing") == []

    def test_sample_bank_loads(self, project_root):
        bank = QuestionBank.load(project_root / "data" / "sample_questions.json")
        assert len(bank) == 10


class TestCreateRandomSubset:
    def test_distinct_indices_in_range(self):
        subset = create_random_subset(20, 8, random.Random(1))

        assert len(subset) == 8
        assert len(set(subset)) == 8
        assert all(0 <= i < 20 for i in subset)

    def test_clamped_to_available(self):
        subset = create_random_subset(5, 50, random.Random(1))
        assert sorted(subset) == [0, 1, 2, 3, 4]

    def test_empty(self):
        assert create_random_subset(0, 10) == []
        assert create_random_subset(10, 0) == []

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            create_random_subset(-1, 3)
        with pytest.raises(ValueError):
            create_random_subset(3, -1)

    def test_seeded_subset_is_reproducible(self):
        assert create_random_subset(30, 10, random.Random(4)) == create_random_subset(
            30, 10, random.Random(4)
        )
