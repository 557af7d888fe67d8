"""Data classes for the game domain model."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DifficultyLevel(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def xp_bonus(self) -> int:
        return {"EASY": 0, "MEDIUM": 5, "HARD": 10}[self.value]

    @property
    def color(self) -> str:
        return {"EASY": "green", "MEDIUM": "yellow", "HARD": "red"}[self.value]


class QuestStatus(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return datetime.now().isoformat()


@dataclass(eq=False)
class Flashcard:
    question: str
    answer: str
    category: str
    difficulty: DifficultyLevel = DifficultyLevel.MEDIUM
    times_asked: int = 0
    times_correct: int = 0
    id: str = field(default_factory=_new_id)
    date_created: str = field(default_factory=_now)

    def __eq__(self, other):
        if not isinstance(other, Flashcard):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def record_answer(self, correct: bool) -> None:
        self.times_asked += 1
        if correct:
            self.times_correct += 1

    def accuracy_rate(self) -> float:
        """Percentage of correct answers, 0.0 if never asked."""
        if self.times_asked == 0:
            return 0.0
        return self.times_correct / self.times_asked * 100

    def selection_weight(self) -> float:
        """Weight for quest selection.

        Cards asked less often get a higher base weight, and cards answered
        incorrectly more often get a multiplier of up to 2x. Never below 1.0.
        """
        base_weight = max(1.0, 10.0 - self.times_asked * 0.5)
        if self.times_asked == 0:
            accuracy_modifier = 1.0
        else:
            accuracy_modifier = 1.0 + (100 - self.accuracy_rate()) * 0.01
        return base_weight * accuracy_modifier

    def difficulty_xp_bonus(self) -> int:
        return self.difficulty.xp_bonus


@dataclass(frozen=True)
class QuestionResult:
    xp_earned: int
    quest_complete: bool
    error: bool = False
