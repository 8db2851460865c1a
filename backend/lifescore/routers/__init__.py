"""Routers package."""

from lifescore.routers.checkins import router as checkins_router
from lifescore.routers.player import router as player_router

__all__ = [
    "checkins_router",
    "player_router",
]
