"""Serialized player blob, one row per user."""

from sqlalchemy import Column, Integer, ForeignKey, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from lifescore.database import Base


class PlayerSave(Base):
    """Key/value style storage of the whole PlayerData JSON document."""
    
    __tablename__ = "player_saves"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    
    # PlayerData as JSON, written whole on every save
    data = Column(Text, nullable=False)
    
    saved_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    # Relationships
    user = relationship("User", back_populates="player_save")
    
    def __repr__(self):
        return f"<PlayerSave user={self.user_id} saved_at={self.saved_at}>"
