import pytest

from flashquest.models import DifficultyLevel, Flashcard


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_flashquest.db")
    return db_path


class FixedRandom:
    """Random source that replays the given values, then repeats the last one."""

    def __init__(self, *values):
        self.values = list(values)

    def random(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def make_cards():
    def _make(count, category="Java Basics", difficulty=DifficultyLevel.EASY):
        return [
            Flashcard(question=f"{category} Q{i}?", answer=f"A{i}", category=category, difficulty=difficulty)
            for i in range(count)
        ]
    return _make


@pytest.fixture
def fixed_random():
    return FixedRandom
