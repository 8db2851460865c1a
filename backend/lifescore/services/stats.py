"""Derived RPG stats from a trailing window of check-ins."""

from typing import Iterable

from lifescore.config import EngineTuning, get_tuning
from lifescore.dimensions import DIMENSIONS
from lifescore.schemas import DailyCheckInBase, PlayerStats


def derive_stats(
    history: Iterable[DailyCheckInBase],
    window_days: int = None,
    tuning: EngineTuning = None,
) -> PlayerStats:
    """
    Rounded mean of each dimension over the newest `window_days` check-ins.

    An empty window gives the neutral value for every stat, so a new player
    does not show zeros.
    """
    tuning = tuning or get_tuning()
    window = window_days if window_days is not None else tuning.stat_window

    recent = sorted(history, key=lambda c: c.date, reverse=True)[:max(0, window)]

    values = {}
    for dimension in DIMENSIONS:
        ratings = [getattr(c, dimension.key.value) for c in recent]
        if ratings:
            values[dimension.stat.value] = round(sum(ratings) / len(ratings))
        else:
            values[dimension.stat.value] = tuning.neutral_stat

    return PlayerStats.model_validate(values)
