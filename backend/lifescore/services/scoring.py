"""Daily composite score and letter grade."""

from typing import Iterable, Mapping, Union

from lifescore.dimensions import DIMENSION_KEYS, MIN_RATING, MAX_RATING
from lifescore.schemas import DailyCheckInBase, LetterGrade


# (minimum score, grade, title, color), highest band first
GRADE_BANDS = (
    (95, "S", "Monarch", "text-pink-300"),
    (85, "A", "Elite", "text-amber-400"),
    (70, "B", "Hunter", "text-cyan-400"),
    (55, "C", "Warrior", "text-purple-400"),
    (40, "D", "Trainee", "text-green-400"),
    (0, "E", "Civilian", "text-gray-400"),
)


def _rating_values(ratings) -> list:
    if isinstance(ratings, DailyCheckInBase):
        return list(ratings.ratings().values())
    if isinstance(ratings, Mapping):
        return [ratings[key] for key in DIMENSION_KEYS]
    return list(ratings)


def calculate_daily_score(ratings: Union[DailyCheckInBase, Mapping[str, int], Iterable[int]]) -> int:
    """
    Composite 0-100 score for one day's ratings.

    Formula: score = round((mean - 1) / 9 * 100)

    The mean is unweighted, so all-1s gives 0 and all-10s gives 100.
    Accepts a check-in, a mapping keyed by dimension, or a plain sequence.
    """
    values = _rating_values(ratings)
    if not values:
        raise ValueError("At least one rating is required")

    n = len(values)
    span = MAX_RATING - MIN_RATING
    # Integer form of (sum/n - 1) / 9 * 100
    score = round((sum(values) - n * MIN_RATING) * 100 / (span * n))
    return max(0, min(100, score))


def get_letter_grade(score: int) -> LetterGrade:
    """Map a composite score to its rank band."""
    for minimum, grade, title, color in GRADE_BANDS:
        if score >= minimum:
            return LetterGrade(grade=grade, title=title, color=color)
    # Below zero only happens with bad input; treat as the floor band
    _, grade, title, color = GRADE_BANDS[-1]
    return LetterGrade(grade=grade, title=title, color=color)
