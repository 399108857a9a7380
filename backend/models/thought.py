"""Thought model: a short text post owned (by username) by one user."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base


class Thought(Base):
    """
    A short user-authored post.

    ``username`` is a denormalized copy of the author's username taken at
    creation time, not a foreign key. ``username`` and ``created_at`` are
    never updated after insert; only ``reactions`` change.
    """

    __tablename__ = "thoughts"

    id = Column(Integer, primary_key=True, index=True)
    thought_text = Column(Text, nullable=False)
    username = Column(String(255), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    reactions = relationship(
        "Reaction",
        back_populates="thought",
        cascade="all, delete-orphan",
        order_by="Reaction.id",
    )

    @property
    def reaction_count(self) -> int:
        return len(self.reactions)

    def __repr__(self):
        return f"<Thought {self.id} by {self.username}>"
