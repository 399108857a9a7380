"""Reaction model, owned by exactly one Thought."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


class Reaction(Base):
    __tablename__ = "reactions"

    id = Column(Integer, primary_key=True, index=True)
    thought_id = Column(
        Integer, ForeignKey("thoughts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reaction_body = Column(Text, nullable=False)
    username = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    thought = relationship("Thought", back_populates="reactions")

    def __repr__(self):
        return f"<Reaction {self.id} on thought={self.thought_id} by {self.username}>"
