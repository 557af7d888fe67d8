"""Built-in flashcard content used when a save has no cards yet."""
import json
from pathlib import Path

from flashquest.models import DifficultyLevel, Flashcard

CONTENT_DIR = Path(__file__).parent / "content"


def default_flashcards() -> list[Flashcard]:
    """Fresh Flashcard objects for every card in flashcards.json."""
    data = json.loads((CONTENT_DIR / "flashcards.json").read_text(encoding="utf-8"))
    return [
        Flashcard(
            question=card["question"],
            answer=card["answer"],
            category=card["category"],
            difficulty=DifficultyLevel(card["difficulty"]),
        )
        for card in data["flashcards"]
    ]
