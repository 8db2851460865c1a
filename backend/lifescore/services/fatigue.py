"""Fatigue decay and the HP/MP bars derived from it."""

import logging
from datetime import date
from typing import Iterable, List

from lifescore.config import EngineTuning, get_tuning
from lifescore.schemas import Bar, DailyCheckIn, PlayerBars
from lifescore.services.scoring import calculate_daily_score

logger = logging.getLogger(__name__)


def _clamp(value: int) -> int:
    return max(0, min(100, value))


def _missed_days(previous: date, current: date) -> int:
    """Days with no check-in strictly between two dates."""
    return max(0, (current - previous).days - 1)


def _chronological(history: Iterable[DailyCheckIn], now: date) -> List[DailyCheckIn]:
    return sorted((c for c in history if c.date <= now), key=lambda c: c.date)


def score_adjustment(score: int, tuning: EngineTuning) -> int:
    """Fatigue change caused by one day's score (negative means recovery)."""
    if score >= tuning.strong_recovery_threshold:
        return -tuning.strong_recovery_amount
    if score >= tuning.recovery_threshold:
        return -tuning.recovery_amount
    if score < tuning.low_score_threshold:
        return tuning.fatigue_per_low_day
    return 0


def compute_fatigue(history: Iterable[DailyCheckIn], now: date, tuning: EngineTuning = None) -> int:
    """
    Replay the history in date order to get fatigue (0-100) as of `now`.

    Missed days and low-score days add fatigue; only high-score days take it
    away. Time passing on its own never lowers the value.
    """
    tuning = tuning or get_tuning()
    fatigue = 0
    previous = None

    for check_in in _chronological(history, now):
        if previous is not None:
            fatigue = _clamp(fatigue + _missed_days(previous, check_in.date) * tuning.fatigue_per_missed_day)
        fatigue = _clamp(fatigue + score_adjustment(calculate_daily_score(check_in), tuning))
        previous = check_in.date

    if previous is not None:
        missed = _missed_days(previous, now)
        if missed:
            logger.debug("%d missed day(s) since %s", missed, previous)
        fatigue = _clamp(fatigue + missed * tuning.fatigue_per_missed_day)

    return fatigue


def trailing_average_score(history: Iterable[DailyCheckIn], now: date, tuning: EngineTuning = None) -> int:
    """Mean score of the newest `bar_window` check-ins."""
    tuning = tuning or get_tuning()
    recent = _chronological(history, now)[-tuning.bar_window:]
    if not recent:
        return tuning.default_average_score
    return round(sum(calculate_daily_score(c) for c in recent) / len(recent))


def calculate_bars(
    history: Iterable[DailyCheckIn],
    level: int,
    now: date,
    tuning: EngineTuning = None,
) -> PlayerBars:
    """
    Derive HP/MP/fatigue.

    HP tracks (100 - fatigue) and MP tracks the trailing average score;
    both maxima grow with level.
    """
    tuning = tuning or get_tuning()
    history = list(history)

    fatigue = compute_fatigue(history, now, tuning)
    average = trailing_average_score(history, now, tuning)

    max_hp = tuning.base_hp + level * tuning.hp_per_level
    max_mp = tuning.base_mp + level * tuning.mp_per_level

    return PlayerBars(
        hp=Bar(current=round(max_hp * (100 - fatigue) / 100), max=max_hp),
        mp=Bar(current=round(max_mp * average / 100), max=max_mp),
        fatigue=fatigue,
    )
