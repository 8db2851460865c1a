"""Check-in processing - the only code path that changes a player's state."""

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Union

from pydantic import BaseModel, ValidationError

from lifescore.config import EngineTuning, get_tuning
from lifescore.errors import CheckInValidationError, PersistenceError
from lifescore.schemas import (
    CheckInResult,
    DailyCheckIn,
    DailyCheckInBase,
    PlayerData,
)
from lifescore.services.fatigue import calculate_bars
from lifescore.services.progression import (
    apply_xp,
    calculate_xp_earned,
    get_class_modifier,
    new_progress,
)
from lifescore.services.scoring import calculate_daily_score, get_letter_grade
from lifescore.services.stats import derive_stats
from lifescore.services.streaks import update_streak

logger = logging.getLogger(__name__)

SaveFn = Callable[[PlayerData], None]


def create_new_player(created_at: datetime = None, tuning: EngineTuning = None) -> PlayerData:
    """Default state for a player with no saved blob."""
    tuning = tuning or get_tuning()
    progress = new_progress(tuning)
    return PlayerData(
        progress=progress,
        stats=derive_stats([], tuning=tuning),
        bars=calculate_bars([], progress.level, date.today(), tuning),
        current_streak=0,
        longest_streak=0,
        total_days_logged=0,
        check_ins=[],
        last_log_date=None,
        created_at=created_at or datetime.utcnow(),
    )


def validate_check_in(check_in: Union[DailyCheckInBase, dict], today: date) -> DailyCheckIn:
    """Coerce input into a stored check-in, rejecting bad ratings and future dates."""
    if isinstance(check_in, BaseModel):
        data = check_in.model_dump()
    else:
        data = dict(check_in)
    if not data.get("created_at"):
        data["created_at"] = datetime.utcnow()

    try:
        entry = DailyCheckIn.model_validate(data)
    except ValidationError as e:
        raise CheckInValidationError("Invalid check-in", errors=e.errors(include_url=False, include_context=False, include_input=False)) from e

    if entry.date > today:
        raise CheckInValidationError(f"Check-in date {entry.date} is in the future")
    return entry


def _same_submission(stored: DailyCheckIn, entry: DailyCheckIn) -> bool:
    return stored.ratings() == entry.ratings() and stored.notes == entry.notes


def process_check_in(
    player: PlayerData,
    check_in: Union[DailyCheckInBase, dict],
    save: SaveFn,
    today: date = None,
    tuning: EngineTuning = None,
) -> CheckInResult:
    """
    Record a check-in and recompute everything derived from history.

    1. Validate ratings (nothing is touched on failure)
    2. Upsert by date into a copy of the player
    3. Recompute streaks
    4. Score the day and award XP (new dates only)
    5. Recompute bars, stats and class modifier
    6. Save through the injected port

    The passed-in player is never modified. If `save` fails a
    PersistenceError is raised and no result is returned.
    """
    tuning = tuning or get_tuning()
    today = today or date.today()

    entry = validate_check_in(check_in, today)

    existing = player.get_check_in(entry.date)
    is_new_day = existing is None
    # Repeating the same submission keeps the stored entry and its timestamp
    if existing is not None and _same_submission(existing, entry):
        entry = existing.model_copy()

    history = [c.model_copy() for c in player.check_ins if c.date != entry.date]
    history.append(entry)
    history.sort(key=lambda c: c.date, reverse=True)

    current_streak, longest_streak = update_streak(history, today, player.longest_streak)

    score = calculate_daily_score(entry)
    xp_gained = calculate_xp_earned(score, current_streak, tuning) if is_new_day else 0
    progress, leveled_up = apply_xp(player.progress, xp_gained, tuning)

    stats = derive_stats(history, tuning=tuning)
    progress = progress.model_copy(update={"class_modifier": get_class_modifier(stats, tuning)})

    updated = player.model_copy(update={
        "progress": progress,
        "stats": stats,
        "bars": calculate_bars(history, progress.level, today, tuning),
        "current_streak": current_streak,
        "longest_streak": longest_streak,
        "total_days_logged": len(history),
        "check_ins": history,
        "last_log_date": history[0].date,
    })

    try:
        save(updated)
    except PersistenceError:
        logger.error("Check-in for %s was not saved", entry.date)
        raise
    except Exception as e:
        logger.error("Check-in for %s was not saved: %s", entry.date, e)
        raise PersistenceError(f"Could not save check-in for {entry.date}") from e

    if leveled_up:
        logger.info("Level up: %d -> %d", player.progress.level, progress.level)

    return CheckInResult(
        player=updated,
        xp_gained=xp_gained,
        leveled_up=leveled_up,
        score=score,
        grade=get_letter_grade(score),
    )


def refresh_player(player: PlayerData, today: date = None, tuning: EngineTuning = None) -> PlayerData:
    """Re-derive the time-dependent view (streak, bars) for display. Not saved."""
    today = today or date.today()
    current_streak, longest_streak = update_streak(player.check_ins, today, player.longest_streak)
    return player.model_copy(update={
        "current_streak": current_streak,
        "longest_streak": longest_streak,
        "bars": calculate_bars(player.check_ins, player.progress.level, today, tuning),
    })


def rebuild_player(
    check_ins: Iterable[DailyCheckInBase],
    created_at: datetime = None,
    tuning: EngineTuning = None,
) -> PlayerData:
    """Replay a history from a fresh player, oldest check-in first."""
    player = create_new_player(created_at, tuning)
    for check_in in sorted(check_ins, key=lambda c: c.date):
        player = process_check_in(player, check_in, save=lambda _: None, today=check_in.date, tuning=tuning).player
    return player


class CheckInService:
    """Load -> process -> save against a player store."""

    def __init__(self, store, tuning: EngineTuning = None):
        self.store = store
        self.tuning = tuning

    def submit(self, check_in: Union[DailyCheckInBase, dict], today: date = None) -> CheckInResult:
        player = self.store.load()
        return process_check_in(player, check_in, self.store.save, today=today, tuning=self.tuning)

    def get_player(self, today: date = None) -> PlayerData:
        return refresh_player(self.store.load(), today, self.tuning)

    def get_today_check_in(self, today: date = None) -> Optional[DailyCheckIn]:
        return self.store.load().get_check_in(today or date.today())

    def recent_check_ins(self, limit: int = 7):
        return self.store.load().check_ins[:max(0, limit)]
