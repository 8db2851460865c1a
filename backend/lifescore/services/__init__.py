"""Services package."""

from lifescore.services.checkin_service import CheckInService, process_check_in
from lifescore.services.player_store import SqlPlayerStore

__all__ = [
    "CheckInService",
    "process_check_in",
    "SqlPlayerStore",
]
