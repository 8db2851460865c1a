"""Persistence of the PlayerData blob."""

import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lifescore.errors import CorruptStateError, PersistenceError
from lifescore.models import PlayerSave, User
from lifescore.schemas import PlayerData
from lifescore.services.checkin_service import create_new_player

logger = logging.getLogger(__name__)


def serialize_player(player: PlayerData) -> str:
    """Player as a JSON document (stat keys use their short names)."""
    return player.model_dump_json(by_alias=True)


def deserialize_player(blob: str) -> PlayerData:
    """Parse a stored document, raising CorruptStateError if it is unusable."""
    try:
        return PlayerData.model_validate_json(blob)
    except ValidationError as e:
        raise CorruptStateError(f"Stored player data is invalid: {e.error_count()} error(s)") from e


class SqlPlayerStore:
    """Loads and saves one user's player blob in the player_saves table."""

    def __init__(self, db: Session, user: User):
        self.db = db
        self.user = user

    def _get_row(self):
        return (
            self.db.query(PlayerSave)
            .filter(PlayerSave.user_id == self.user.id)
            .first()
        )

    def load_strict(self) -> PlayerData:
        """Load the player; a missing blob gives a new player, a bad one raises."""
        row = self._get_row()
        if not row:
            return create_new_player()
        return deserialize_player(row.data)

    def load(self) -> PlayerData:
        """Load the player, falling back to a new player if the blob is corrupt."""
        try:
            return self.load_strict()
        except CorruptStateError as e:
            logger.warning("Resetting player for user %s: %s", self.user.id, e)
            return create_new_player()

    def save(self, player: PlayerData) -> None:
        """Write the whole blob in one transaction."""
        blob = serialize_player(player)
        try:
            row = self._get_row()
            if row:
                row.data = blob
            else:
                self.db.add(PlayerSave(user_id=self.user.id, data=blob))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to save player for user %s: %s", self.user.id, e)
            raise PersistenceError("Player data could not be saved") from e
        logger.debug("Saved player for user %s (%d check-ins)", self.user.id, len(player.check_ins))
