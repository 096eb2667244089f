"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import json
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from quizdrill.config import Settings
from quizdrill.study.question_bank import Question


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """Seeded random source so scheduler runs are reproducible."""
    return random.Random(1234)


@pytest.fixture
def settings():
    """Default settings, isolated from .env files."""
    return Settings(_env_file=None)


@pytest.fixture
def sample_records():
    """Raw question records as they appear in a bank file."""
    return [
        {
            "text": "Which layer of the OSI model handles routing?",
            "answers": ["Data Link", "Network", "Transport", "Session"],
            "correct_answer": 1,
            "block": "Networking",
        },
        {
            "text": "Which protocol resolves IPv4 addresses to MAC addresses?",
            "answers": ["DNS", "ARP", "DHCP"],
            "correct_answer": 1,
            "block": "Networking",
        },
        {
            "text": "Which built-in returns the length of a list?",
            "answers": ["len()", "size()"],
            "correct_answer": 0,
            "block": "Python",
        },
    ]


@pytest.fixture
def sample_questions(sample_records):
    """Validated Question models."""
    return [Question.model_validate(record) for record in sample_records]


@pytest.fixture
def bank_file(tmp_path, sample_records):
    """A question bank JSON file on disk."""
    path = tmp_path / "bank.json"
    path.write_text(json.dumps({"questions": sample_records}), encoding="utf-8")
    return path
