"""Database models package."""

from lifescore.models.user import User
from lifescore.models.player_save import PlayerSave

__all__ = [
    "User", 
    "PlayerSave",
]
