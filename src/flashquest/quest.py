"""Quest configuration and the per-run session state machine."""
import uuid
from dataclasses import dataclass, field
from typing import Optional

from flashquest.distribution import DifficultyDistribution
from flashquest.errors import ConfigurationError, InvalidStateError
from flashquest.models import Flashcard, QuestionResult, QuestStatus
from flashquest.player import STARTING_HP

MIN_QUESTIONS = 5
MAX_QUESTIONS = 20
DEFAULT_QUESTIONS = 10

BASE_ANSWER_XP = 10
COMPLETION_BONUS_XP = 50
PERFECT_BONUS_XP = 25


@dataclass
class QuestConfig:
    name: str
    question_count: int = DEFAULT_QUESTIONS
    custom_hp: int = STARTING_HP
    category_filter: frozenset = frozenset()
    difficulty_distribution: DifficultyDistribution = field(default_factory=DifficultyDistribution)
    description: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        if self.custom_hp < 1:
            raise ConfigurationError(f"Custom HP must be at least 1, got {self.custom_hp}")
        self.question_count = max(MIN_QUESTIONS, min(MAX_QUESTIONS, self.question_count))
        self.category_filter = frozenset(self.category_filter or ())
        if self.difficulty_distribution is None:
            self.difficulty_distribution = DifficultyDistribution()


class QuestSession:
    """One run through a fixed sequence of flashcards.

    NOT_STARTED -> ACTIVE -> COMPLETED | FAILED. Terminal states accept no
    further answers. The session scores answers but knows nothing about the
    player's HP; damage is applied by the coordinator.
    """

    def __init__(self, config: QuestConfig):
        self.config = config
        self.question_pool: list[Flashcard] = []
        self.current_index = 0
        self.correct_answers = 0
        self.total_xp_earned = 0
        self.status = QuestStatus.NOT_STARTED

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def question_count(self) -> int:
        return self.config.question_count

    @property
    def is_active(self) -> bool:
        return self.status == QuestStatus.ACTIVE

    def start(self, cards: list[Flashcard]) -> None:
        if self.status != QuestStatus.NOT_STARTED:
            raise InvalidStateError(f"Quest '{self.name}' already {self.status.value}")
        self.question_pool = list(cards)
        self.current_index = 0
        self.correct_answers = 0
        self.total_xp_earned = 0
        self.status = QuestStatus.ACTIVE

    def current_flashcard(self) -> Optional[Flashcard]:
        if self.current_index < len(self.question_pool):
            return self.question_pool[self.current_index]
        return None

    def process_answer(self, correct: bool) -> QuestionResult:
        if self.status != QuestStatus.ACTIVE or self.current_index >= len(self.question_pool):
            return QuestionResult(0, False, error=True)

        card = self.question_pool[self.current_index]
        xp = 0
        if correct:
            xp = BASE_ANSWER_XP + card.difficulty_xp_bonus()
            self.correct_answers += 1

        self.total_xp_earned += xp
        self.current_index += 1

        if self.current_index == len(self.question_pool):
            self._complete()
            return QuestionResult(xp, True)
        return QuestionResult(xp, False)

    def _complete(self) -> None:
        self.status = QuestStatus.COMPLETED
        self.total_xp_earned += COMPLETION_BONUS_XP
        if self._all_correct():
            self.total_xp_earned += PERFECT_BONUS_XP

    def _all_correct(self) -> bool:
        # A pool that does not match the configured count can never be perfect.
        return self.correct_answers == len(self.question_pool) == self.question_count

    def complete_with_failure(self) -> None:
        """End the quest early (player ran out of HP). No bonus XP."""
        if self.status != QuestStatus.ACTIVE:
            raise InvalidStateError(f"Quest '{self.name}' is not active")
        self.status = QuestStatus.FAILED

    def is_perfect_quest(self) -> bool:
        return self.status == QuestStatus.COMPLETED and self._all_correct()

    def progress(self) -> float:
        if not self.question_pool:
            return 0.0
        return self.current_index / len(self.question_pool) * 100
