"""Weighted random selection of flashcards for a quest."""
import random
from typing import Iterable, Optional

from flashquest.distribution import DifficultyDistribution
from flashquest.errors import InsufficientFlashcards
from flashquest.models import Flashcard


class FlashcardSelector:
    """Draws quest cards without replacement, biased by Flashcard.selection_weight().

    `rng` is anything with a random() method returning a float in [0, 1);
    pass a seeded random.Random for reproducible draws.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()

    def candidates(self, pool: Iterable[Flashcard], categories: Iterable[str] = ()) -> list[Flashcard]:
        """Cards matching the category filter, or the whole pool if none match."""
        unique = list(dict.fromkeys(pool))
        categories = set(categories)
        if not categories:
            return unique
        matching = [card for card in unique if card.category in categories]
        return matching or unique

    def select(
        self,
        pool: Iterable[Flashcard],
        categories: Iterable[str],
        count: int,
        distribution: Optional[DifficultyDistribution] = None,
    ) -> list[Flashcard]:
        remaining = self.candidates(pool, categories)
        if count > len(remaining):
            raise InsufficientFlashcards(required=count, available=len(remaining))

        selected = []
        for index in range(count):
            tier = remaining
            if distribution is not None:
                wanted = distribution.difficulty_for_index(index, count)
                tier = [card for card in remaining if card.difficulty == wanted] or remaining
            card = self._draw(tier)
            remaining.remove(card)
            selected.append(card)
        return selected

    def _draw(self, cards: list[Flashcard]) -> Flashcard:
        weights = [card.selection_weight() for card in cards]
        target = self.rng.random() * sum(weights)
        cumulative = 0.0
        for card, weight in zip(cards, weights):
            cumulative += weight
            if cumulative > target:
                return card
        # Only reachable through floating-point rounding at the upper edge.
        return cards[-1]
