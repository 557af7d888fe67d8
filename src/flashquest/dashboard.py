"""Player statistics and per-category accuracy."""
from flashquest.models import Flashcard
from flashquest.player import Player


def get_accuracy_label(score: float) -> str:
    if score >= 80:
        return "MASTERED"
    elif score >= 65:
        return "SOLID"
    elif score >= 50:
        return "NEEDS WORK"
    return "WEAK"


def get_accuracy_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 65:
        return "yellow"
    elif score >= 50:
        return "dark_orange"
    return "red"


def get_hp_color(current_hp: int, max_hp: int) -> str:
    if max_hp <= 0 or current_hp * 3 > max_hp * 2:
        return "green"
    elif current_hp * 3 > max_hp:
        return "yellow"
    return "red"


def get_player_stats(player: Player) -> dict:
    return {
        "name": player.name,
        "level": player.current_level,
        "total_xp": player.total_xp,
        "xp_for_next_level": player.xp_for_next_level(),
        "level_progress": round(player.level_progress(), 1),
        "hp": player.current_hp,
        "max_hp": player.max_hp,
        "quests_completed": player.quests_completed,
        "perfect_quests": player.perfect_quests,
        "flashcards_created": player.flashcards_created,
        "titles": player.titles_in_display_order(),
        "active_title": player.active_title_display(),
    }


def get_category_stats(flashcards: list[Flashcard]) -> list[dict]:
    """Accuracy per category, over answered cards only. Sorted by category name."""
    totals: dict[str, dict] = {}
    for card in flashcards:
        entry = totals.setdefault(card.category, {"cards": 0, "asked": 0, "correct": 0})
        entry["cards"] += 1
        entry["asked"] += card.times_asked
        entry["correct"] += card.times_correct
    stats = []
    for category in sorted(totals):
        entry = totals[category]
        score = round(entry["correct"] / entry["asked"] * 100, 1) if entry["asked"] else 0.0
        stats.append({
            "category": category,
            "cards": entry["cards"],
            "asked": entry["asked"],
            "correct": entry["correct"],
            "score": score,
            "label": get_accuracy_label(score),
        })
    return stats


def get_weak_categories(flashcards: list[Flashcard], threshold: float = 70.0) -> list[dict]:
    """Answered categories scoring below threshold, worst first."""
    weak = [s for s in get_category_stats(flashcards) if s["asked"] and s["score"] < threshold]
    return sorted(weak, key=lambda s: s["score"])
