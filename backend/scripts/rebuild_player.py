"""Rebuild every saved player by replaying its own check-in history."""
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from lifescore.database import SessionLocal, engine, Base
from lifescore.errors import CorruptStateError, PersistenceError
from lifescore.models import User
from lifescore.services.checkin_service import rebuild_player
from lifescore.services.player_store import SqlPlayerStore


def rebuild_all_players():
    """Recompute progression, streaks, bars and stats from stored check-ins."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        users = db.query(User).all()

        for user in users:
            store = SqlPlayerStore(db, user)
            try:
                player = store.load_strict()
            except CorruptStateError as e:
                print(f"  User {user.id}: skipped, {e}")
                continue

            rebuilt = rebuild_player(player.check_ins, created_at=player.created_at)
            print(
                f"User {user.id}: {len(player.check_ins)} check-ins, "
                f"level {player.progress.level} -> {rebuilt.progress.level}, "
                f"longest streak {player.longest_streak} -> {rebuilt.longest_streak}"
            )

            try:
                store.save(rebuilt)
            except PersistenceError as e:
                print(f"  User {user.id}: save failed, {e}")

        print("Rebuild complete!")
    finally:
        db.close()


if __name__ == "__main__":
    rebuild_all_players()
