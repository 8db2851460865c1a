"""The six rated life dimensions and the RPG stat each one feeds."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class DimensionKey(str, Enum):
    NUTRITION = "nutrition"
    FITNESS = "fitness"
    WORK = "work"
    SOCIAL = "social"
    SAFETY = "safety"
    HEALTH = "health"


class StatKey(str, Enum):
    VIT = "vit"
    STR = "str"
    INT = "int"
    CHA = "cha"
    DEF = "def"
    STA = "sta"


@dataclass(frozen=True)
class Dimension:
    key: DimensionKey
    stat: StatKey
    label: str
    full_label: str
    emoji: str
    description: str
    class_name: str  # class modifier earned when this stat dominates


DIMENSIONS: Tuple[Dimension, ...] = (
    Dimension(DimensionKey.NUTRITION, StatKey.VIT, "VIT", "Vitality", "❤️", "Nutrition quality", "Vitalist"),
    Dimension(DimensionKey.FITNESS, StatKey.STR, "STR", "Strength", "⚔️", "Physical activity", "Berserker"),
    Dimension(DimensionKey.WORK, StatKey.INT, "INT", "Intelligence", "🧠", "Productive focus", "Sage"),
    Dimension(DimensionKey.SOCIAL, StatKey.CHA, "CHA", "Charisma", "💬", "Kindness & connection", "Diplomat"),
    Dimension(DimensionKey.SAFETY, StatKey.DEF, "DEF", "Defense", "🛡️", "Risk avoidance", "Guardian"),
    Dimension(DimensionKey.HEALTH, StatKey.STA, "STA", "Stamina", "⚡", "Energy & recovery", "Endurer"),
)

DIMENSION_KEYS: Tuple[str, ...] = tuple(d.key.value for d in DIMENSIONS)

STAT_FOR_DIMENSION: Dict[str, str] = {d.key.value: d.stat.value for d in DIMENSIONS}

# Rating scale for every dimension
MIN_RATING = 1
MAX_RATING = 10


def get_dimension(key: str) -> Dimension:
    """Look up a catalog entry by dimension key."""
    for dimension in DIMENSIONS:
        if dimension.key.value == key:
            return dimension
    raise KeyError(key)
