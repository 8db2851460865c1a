"""Pydantic schemas for the player blob and API request/response validation."""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime, date

from lifescore.dimensions import DIMENSION_KEYS


# ============== Check-in Schemas ==============

class DailyCheckInBase(BaseModel):
    date: date
    nutrition: int = Field(..., ge=1, le=10)
    fitness: int = Field(..., ge=1, le=10)
    work: int = Field(..., ge=1, le=10)
    social: int = Field(..., ge=1, le=10)
    safety: int = Field(..., ge=1, le=10)
    health: int = Field(..., ge=1, le=10)
    notes: Optional[str] = None

    def ratings(self) -> Dict[str, int]:
        """Ratings keyed by dimension, in catalog order."""
        return {key: getattr(self, key) for key in DIMENSION_KEYS}


class DailyCheckInCreate(DailyCheckInBase):
    pass


class DailyCheckIn(DailyCheckInBase):
    """A stored check-in. One per date."""
    created_at: datetime


# ============== Player Schemas ==============

class PlayerProgress(BaseModel):
    level: int = Field(1, ge=1)
    current_xp: int = Field(0, ge=0)
    xp_to_next_level: int = Field(..., gt=0)
    title: str
    title_color: str
    class_modifier: Optional[str] = None


class PlayerStats(BaseModel):
    """Trailing-window averages, one per dimension (1-10). No defaults: an empty
    window takes the configured neutral value in derive_stats."""
    vitality: int = Field(..., alias="vit")  # nutrition
    strength: int = Field(..., alias="str")  # fitness
    intelligence: int = Field(..., alias="int")  # work
    charisma: int = Field(..., alias="cha")  # social
    defense: int = Field(..., alias="def")  # safety
    stamina: int = Field(..., alias="sta")  # health

    class Config:
        populate_by_name = True

    def by_stat_key(self) -> Dict[str, int]:
        return self.model_dump(by_alias=True)


class Bar(BaseModel):
    current: int = Field(..., ge=0)
    max: int = Field(..., gt=0)


class PlayerBars(BaseModel):
    hp: Bar
    mp: Bar
    fatigue: int = Field(0, ge=0, le=100)


class PlayerData(BaseModel):
    """The persisted aggregate root for one player."""
    progress: PlayerProgress
    stats: PlayerStats
    bars: PlayerBars

    # Streaks
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    total_days_logged: int = Field(0, ge=0)

    # History, newest first
    check_ins: List[DailyCheckIn] = []
    last_log_date: Optional[date] = None

    # Meta
    created_at: datetime

    def get_check_in(self, day: date) -> Optional[DailyCheckIn]:
        for check_in in self.check_ins:
            if check_in.date == day:
                return check_in
        return None


# ============== Result Schemas ==============

class LetterGrade(BaseModel):
    grade: str  # S, A, B, C, D, E
    title: str
    color: str


class CheckInResult(BaseModel):
    """Outcome of one processed check-in. The flags are not persisted."""
    player: PlayerData
    xp_gained: int
    leveled_up: bool
    score: int
    grade: LetterGrade


class DimensionResponse(BaseModel):
    key: str
    stat: str
    label: str
    full_label: str
    emoji: str
    description: str


class CheckInSummary(BaseModel):
    """Averages of recent check-ins."""
    period_days: int
    checkin_count: int
    average_score: Optional[float] = None
    averages: Dict[str, Optional[float]] = {}
