"""XP progression curve."""


def xp_required_for_level(level: int) -> int:
    """Total XP needed to reach a level.

    Each level-up from level k to k+1 costs 100 + (k - 1) * 50 XP. Summed from
    level 2 onward this gives the closed form 75n + 25n^2 with n = level - 1:
    0, 100, 250, 450, 700, 1000, 1350, ...
    """
    if level <= 1:
        return 0
    n = level - 1
    return 75 * n + 25 * n * n


def level_for_xp(total_xp: int) -> int:
    """Largest level whose XP threshold is covered by total_xp."""
    level = 1
    while total_xp >= xp_required_for_level(level + 1):
        level += 1
    return level
