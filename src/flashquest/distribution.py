"""Easy/medium/hard mix for quest generation."""
from dataclasses import dataclass

from flashquest.models import DifficultyLevel

DEFAULT_SPLIT = (40, 40, 20)


@dataclass(frozen=True)
class DifficultyDistribution:
    """Percentages of easy, medium and hard questions in a quest.

    Raw values are normalized on construction so that the three percentages
    always sum to exactly 100. Integer division truncates, and whatever is
    lost to truncation ends up in the hard bucket. Use dataclasses.replace()
    to change a value; it normalizes again.
    """
    easy: int = DEFAULT_SPLIT[0]
    medium: int = DEFAULT_SPLIT[1]
    hard: int = DEFAULT_SPLIT[2]

    def __post_init__(self):
        easy, medium, hard = (max(0, int(v)) for v in (self.easy, self.medium, self.hard))
        total = easy + medium + hard
        if total == 0:
            easy, medium, hard = DEFAULT_SPLIT
        else:
            easy = easy * 100 // total
            medium = medium * 100 // total
            hard = 100 - easy - medium
        object.__setattr__(self, "easy", easy)
        object.__setattr__(self, "medium", medium)
        object.__setattr__(self, "hard", hard)

    @classmethod
    def default(cls) -> "DifficultyDistribution":
        return cls(*DEFAULT_SPLIT)

    @classmethod
    def easy_focus(cls) -> "DifficultyDistribution":
        return cls(70, 25, 5)

    @classmethod
    def medium_focus(cls) -> "DifficultyDistribution":
        return cls(20, 60, 20)

    @classmethod
    def hard_focus(cls) -> "DifficultyDistribution":
        return cls(10, 30, 60)

    @classmethod
    def balanced(cls) -> "DifficultyDistribution":
        return cls(34, 33, 33)

    def calculate_question_counts(self, total: int) -> tuple[int, int, int]:
        """Split total questions into (easy, medium, hard) counts."""
        easy_count = self.easy * total // 100
        medium_count = self.medium * total // 100
        hard_count = total - easy_count - medium_count
        return easy_count, medium_count, hard_count

    def difficulty_for_index(self, index: int, total: int) -> DifficultyLevel:
        """Tier for question slot `index`: all easy slots first, then medium, then hard."""
        easy_count, medium_count, _ = self.calculate_question_counts(total)
        if index < easy_count:
            return DifficultyLevel.EASY
        if index < easy_count + medium_count:
            return DifficultyLevel.MEDIUM
        return DifficultyLevel.HARD

    def __str__(self):
        return f"Easy {self.easy}% / Medium {self.medium}% / Hard {self.hard}%"


PRESETS = {
    "default": DifficultyDistribution.default,
    "easy": DifficultyDistribution.easy_focus,
    "medium": DifficultyDistribution.medium_focus,
    "hard": DifficultyDistribution.hard_focus,
    "balanced": DifficultyDistribution.balanced,
}
