"""Game coordinator: ties the player, quest sessions and the store together."""
import logging
from typing import Callable, Optional

from flashquest.distribution import DifficultyDistribution
from flashquest.errors import ConfigurationError, DataUnavailable, InvalidStateError
from flashquest.models import DifficultyLevel, Flashcard, QuestionResult
from flashquest.player import STARTING_HP, SURVIVOR, Player
from flashquest.quest import DEFAULT_QUESTIONS, QuestConfig, QuestSession
from flashquest.seed import default_flashcards
from flashquest.selector import FlashcardSelector

logger = logging.getLogger(__name__)

JAVA_CATEGORIES = {
    "Java Basics",
    "Object-Oriented Programming",
    "Collections Framework",
    "Exception Handling",
    "Concurrency",
    "Advanced Topics",
}


def is_java_category(category: Optional[str]) -> bool:
    return bool(category) and ("java" in category.lower() or category in JAVA_CATEGORIES)


class GameCoordinator:
    """Runs the answer-processing use case for one player.

    The coordinator is the only place where quest events change the player.
    All changes for one event happen in memory before the store is called.
    """

    def __init__(
        self,
        store,
        content_provider: Callable[[], list[Flashcard]] = default_flashcards,
        rng=None,
    ):
        self.store = store
        self.content_provider = content_provider
        self.selector = FlashcardSelector(rng)
        self.player: Optional[Player] = None
        self.flashcards: list[Flashcard] = []
        self.saved_quests: list[QuestConfig] = []
        self.active_quest: Optional[QuestSession] = None
        self.initialized = False

    def initialize(self) -> None:
        """Load the save. A missing player means first-time setup is needed."""
        if self.initialized:
            return
        self.player = self.store.load_player()
        if self.player is None:
            logger.info("No existing player found - first-time setup required")
        else:
            logger.info(
                "Loaded player %s (level %d, %d XP)",
                self.player.name, self.player.current_level, self.player.total_xp,
            )

        try:
            self.flashcards = self.store.load_flashcards()
        except DataUnavailable:
            logger.warning("Stored flashcards are unreadable - falling back to built-in cards")
            self.flashcards = []
        if not self.flashcards:
            self._load_default_flashcards()
        self.saved_quests = self.store.load_quest_configs()
        self.initialized = True

    def _load_default_flashcards(self) -> None:
        cards = self.content_provider()
        self.flashcards.extend(cards)
        logger.info("Loaded %d default flashcards", len(cards))

    def has_player(self) -> bool:
        return self.player is not None

    def create_new_player(self, name: str) -> Player:
        if not name or not name.strip():
            raise ConfigurationError("Player name cannot be empty")
        self.player = Player(name=name.strip())
        if not self.flashcards:
            self._load_default_flashcards()
        self.save()
        logger.info("Created new player %s", self.player.name)
        return self.player

    def save(self) -> None:
        if self.player is not None:
            self.store.save_player(self.player)
        self.store.save_flashcards(self.flashcards)

    def _require_player(self) -> Player:
        if self.player is None:
            raise InvalidStateError("No player loaded")
        return self.player

    def start_quick_quest(self) -> QuestSession:
        return self.start_quest(QuestConfig(
            name="Quick Quest",
            question_count=DEFAULT_QUESTIONS,
            difficulty_distribution=DifficultyDistribution.balanced(),
        ))

    def start_quest(self, config: QuestConfig) -> QuestSession:
        player = self._require_player()
        if not self.flashcards:
            raise ConfigurationError("No flashcards available")

        cards = self.selector.select(
            self.flashcards,
            config.category_filter,
            config.question_count,
            config.difficulty_distribution,
        )
        session = QuestSession(config)
        session.start(cards)
        self.active_quest = session

        player.restore_full_hp()
        if config.custom_hp != STARTING_HP:
            player.set_custom_hp(config.custom_hp)

        logger.info("Started quest %s with %d questions", config.name, len(cards))
        return session

    def current_flashcard(self) -> Optional[Flashcard]:
        if self.active_quest is None:
            return None
        return self.active_quest.current_flashcard()

    def process_answer(self, correct: bool) -> QuestionResult:
        if self.active_quest is None or not self.active_quest.is_active:
            raise InvalidStateError("No active quest")
        player = self._require_player()
        session = self.active_quest

        card = session.current_flashcard()
        if card is not None:
            card.record_answer(correct)
            if correct and is_java_category(card.category):
                player.record_java_question_correct()
            if not correct and player.take_damage(1):
                session.complete_with_failure()
                self.active_quest = None
                logger.info("Quest %s failed at question %d", session.name, session.current_index + 1)
                self.save()
                return QuestionResult(0, False, error=True)

        result = session.process_answer(correct)
        if result.quest_complete:
            self._complete_quest(session)
        return result

    def _complete_quest(self, session: QuestSession) -> None:
        player = self._require_player()
        xp = session.total_xp_earned
        leveled_up = player.add_xp(xp)
        player.complete_quest(session.is_perfect_quest())
        if player.current_hp == 1:
            player.unlock_title(SURVIVOR)
        logger.info("Quest %s completed: %d XP awarded, leveled up: %s", session.name, xp, leveled_up)
        self.active_quest = None
        self.save()

    def abandon_quest(self) -> None:
        """Leave the active quest early. Card statistics already recorded are kept."""
        session = self.active_quest
        if session is None:
            return
        if session.is_active:
            session.complete_with_failure()
        self.active_quest = None
        logger.info("Quest %s abandoned", session.name)
        self.save()

    def add_flashcard(
        self,
        question: str,
        answer: str,
        category: str,
        difficulty: DifficultyLevel = DifficultyLevel.MEDIUM,
    ) -> Flashcard:
        if not question.strip() or not answer.strip():
            raise ConfigurationError("Question and answer cannot be empty")
        card = Flashcard(
            question=question.strip(),
            answer=answer.strip(),
            category=category.strip() or "General",
            difficulty=difficulty,
        )
        self.flashcards.append(card)
        if self.player is not None:
            self.player.record_flashcard_created()
        self.save()
        return card

    def available_categories(self) -> list[str]:
        return sorted({c.category for c in self.flashcards})

    def set_active_title(self, title: Optional[str]) -> None:
        self._require_player().set_active_title(title)
        self.save()

    def save_quest_config(self, config: QuestConfig) -> None:
        self.saved_quests = [q for q in self.saved_quests if q.id != config.id]
        self.saved_quests.append(config)
        self.store.save_quest_config(config)

    def delete_all_data(self) -> None:
        self.store.delete_all_data()
        self.player = None
        self.flashcards = []
        self.saved_quests = []
        self.active_quest = None
        self.initialized = False
        logger.info("All game data deleted and state reset")
