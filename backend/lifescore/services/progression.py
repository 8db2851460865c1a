"""XP rewards, the level ladder, titles and class modifiers."""

from typing import Optional, Tuple

from lifescore.config import EngineTuning, get_tuning
from lifescore.dimensions import DIMENSIONS
from lifescore.schemas import PlayerProgress, PlayerStats


# (minimum level, title, color), lowest first
TITLES = (
    (1, "CIVILIAN", "text-gray-400"),
    (10, "TRAINEE", "text-green-400"),
    (20, "HUNTER", "text-cyan-400"),
    (30, "WARRIOR", "text-purple-400"),
    (40, "ELITE", "text-amber-400"),
    (50, "CHAMPION", "text-orange-400"),
    (75, "MASTER", "text-red-400"),
    (90, "MONARCH", "text-pink-300"),
)


def calculate_xp_earned(score: int, current_streak: int, tuning: EngineTuning = None) -> int:
    """
    XP for one day's score.

    Formula: round(score / 100 * xp_max_base * (1 + streak_bonus))
    Where streak_bonus = min(streak * streak_bonus_per_day, streak_bonus_cap)

    The bonus is linear and capped so a long streak cannot outweigh a
    perfect day.
    """
    tuning = tuning or get_tuning()
    score = max(0, min(100, score))
    streak = max(0, current_streak)

    base_xp = round(score / 100 * tuning.xp_max_base)
    streak_bonus = min(streak * tuning.streak_bonus_per_day, tuning.streak_bonus_cap)

    return max(0, round(base_xp * (1 + streak_bonus)))


def xp_for_level(level: int, tuning: EngineTuning = None) -> int:
    """XP needed to go from `level` to `level + 1`. Strictly increasing."""
    tuning = tuning or get_tuning()
    return max(1, level) * tuning.xp_per_level


def get_title_for_level(level: int) -> Tuple[str, str]:
    """Return (title, color) for the highest band the level has reached."""
    title, color = TITLES[0][1], TITLES[0][2]
    for min_level, band_title, band_color in TITLES:
        if level >= min_level:
            title, color = band_title, band_color
    return title, color


def get_class_modifier(stats: PlayerStats, tuning: EngineTuning = None) -> Optional[str]:
    """Class name of the dominant stat, if it clearly leads the others."""
    tuning = tuning or get_tuning()
    values = stats.by_stat_key()

    ranked = sorted(DIMENSIONS, key=lambda d: values[d.stat.value], reverse=True)
    highest, runner_up = ranked[0], ranked[1]

    if values[highest.stat.value] - values[runner_up.stat.value] >= tuning.class_modifier_margin:
        return highest.class_name
    return None


def new_progress(tuning: EngineTuning = None) -> PlayerProgress:
    """Level 1 progress with zero XP."""
    title, color = get_title_for_level(1)
    return PlayerProgress(
        level=1,
        current_xp=0,
        xp_to_next_level=xp_for_level(1, tuning),
        title=title,
        title_color=color,
        class_modifier=None,
    )


def apply_xp(
    progress: PlayerProgress,
    xp_gained: int,
    tuning: EngineTuning = None,
) -> Tuple[PlayerProgress, bool]:
    """
    Add XP to progress, rolling over as many levels as it pays for.

    Returns the new progress (final level and title) and whether at least
    one level threshold was crossed. The input is not modified.
    """
    if xp_gained < 0:
        raise ValueError(f"XP gain must be non-negative, got {xp_gained}")

    level = progress.level
    current_xp = progress.current_xp + xp_gained
    threshold = xp_for_level(level, tuning)

    while current_xp >= threshold:
        current_xp -= threshold
        level += 1
        threshold = xp_for_level(level, tuning)

    title, color = get_title_for_level(level)
    updated = progress.model_copy(update={
        "level": level,
        "current_xp": current_xp,
        "xp_to_next_level": threshold,
        "title": title,
        "title_color": color,
    })
    return updated, level > progress.level
