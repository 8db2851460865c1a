"""Player state API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from lifescore.database import get_db
from lifescore.dimensions import DIMENSIONS
from lifescore.models import User
from lifescore.schemas import DimensionResponse, PlayerData
from lifescore.services import CheckInService, SqlPlayerStore

router = APIRouter(tags=["player"])


def get_current_user(db: Session = Depends(get_db)) -> User:
    """Get or create default user for now."""
    user = db.query(User).first()
    if not user:
        user = User(name="Default User", email="user@lifescore.local")
        db.add(user)
        db.commit()
        db.refresh(user)
    return user


def get_checkin_service(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> CheckInService:
    return CheckInService(SqlPlayerStore(db, user))


@router.get("/player", response_model=PlayerData)
def get_player(service: CheckInService = Depends(get_checkin_service)):
    """Current player state, with streak and bars as of today."""
    return service.get_player()


@router.get("/dimensions", response_model=List[DimensionResponse])
def list_dimensions():
    """The six rated dimensions."""
    return [
        DimensionResponse(
            key=d.key.value,
            stat=d.stat.value,
            label=d.label,
            full_label=d.full_label,
            emoji=d.emoji,
            description=d.description,
        )
        for d in DIMENSIONS
    ]
