"""Player progression: level, XP, HP and achievement titles."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from flashquest.errors import ConfigurationError
from flashquest.progression import xp_required_for_level

STARTING_HP = 3

SCHOLAR = "Scholar"
PERFECTIONIST = "Perfectionist"
SURVIVOR = "Survivor"
KNOWLEDGE_SEEKER = "Knowledge Seeker"
JAVA_MASTER = "Java Master"

# Display order, also the order titles are listed in the stats screen.
TITLES = {
    SCHOLAR: "📚",
    PERFECTIONIST: "💎",
    SURVIVOR: "🛡️",
    KNOWLEDGE_SEEKER: "🔍",
    JAVA_MASTER: "☕",
}

SCHOLAR_QUESTS = 10
PERFECTIONIST_QUESTS = 5
KNOWLEDGE_SEEKER_CARDS = 50
JAVA_MASTER_ANSWERS = 100


@dataclass
class Player:
    name: str
    current_level: int = 1
    total_xp: int = 0
    current_hp: int = STARTING_HP
    max_hp: int = STARTING_HP
    quests_completed: int = 0
    perfect_quests: int = 0
    flashcards_created: int = 0
    java_questions_correct: int = 0
    unlocked_titles: set[str] = field(default_factory=set)
    active_title: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    date_created: str = field(default_factory=lambda: datetime.now().isoformat())

    def xp_for_current_level(self) -> int:
        return xp_required_for_level(self.current_level)

    def xp_for_next_level(self) -> int:
        return xp_required_for_level(self.current_level + 1)

    def level_progress(self) -> float:
        """Percentage of the current level's XP band already earned."""
        band = self.xp_for_next_level() - self.xp_for_current_level()
        if band <= 0:
            return 0.0
        return (self.total_xp - self.xp_for_current_level()) / band * 100

    def add_xp(self, xp: int) -> bool:
        """Add XP and apply every level-up it pays for. Returns True if the level rose."""
        if xp <= 0:
            return False
        old_level = self.current_level
        self.total_xp += xp
        while self.total_xp >= self.xp_for_next_level():
            self.current_level += 1
        return self.current_level > old_level

    def take_damage(self, amount: int) -> bool:
        """Lose HP, never below zero. Returns True if the player is dead."""
        self.current_hp = max(0, self.current_hp - amount)
        return self.current_hp == 0

    def restore_full_hp(self) -> None:
        self.current_hp = self.max_hp

    def set_custom_hp(self, hp: int) -> None:
        """Change the HP cap and heal to it."""
        self.max_hp = max(1, hp)
        self.current_hp = self.max_hp

    def complete_quest(self, is_perfect: bool) -> None:
        self.quests_completed += 1
        if is_perfect:
            self.perfect_quests += 1
        self._check_achievements()

    def record_flashcard_created(self) -> None:
        self.flashcards_created += 1
        self._check_achievements()

    def record_java_question_correct(self) -> None:
        self.java_questions_correct += 1
        self._check_achievements()

    def unlock_title(self, title: str) -> bool:
        """Add a title. Returns True only the first time it is unlocked."""
        if title in self.unlocked_titles:
            return False
        self.unlocked_titles.add(title)
        return True

    def _check_achievements(self) -> None:
        if self.quests_completed >= SCHOLAR_QUESTS:
            self.unlock_title(SCHOLAR)
        if self.perfect_quests >= PERFECTIONIST_QUESTS:
            self.unlock_title(PERFECTIONIST)
        if self.flashcards_created >= KNOWLEDGE_SEEKER_CARDS:
            self.unlock_title(KNOWLEDGE_SEEKER)
        if self.java_questions_correct >= JAVA_MASTER_ANSWERS:
            self.unlock_title(JAVA_MASTER)

    def titles_in_display_order(self) -> list[str]:
        known = [t for t in TITLES if t in self.unlocked_titles]
        return known + sorted(self.unlocked_titles - set(TITLES))

    def set_active_title(self, title: Optional[str]) -> None:
        if title is not None and title not in self.unlocked_titles:
            raise ConfigurationError(f"Title not unlocked: {title}")
        self.active_title = title

    def active_title_display(self) -> Optional[str]:
        if self.active_title is None:
            return None
        marker = TITLES.get(self.active_title)
        return f"{marker} {self.active_title}" if marker else self.active_title
