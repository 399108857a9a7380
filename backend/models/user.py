"""User model and the per-user reference tables (thought list, friend list)."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from database import Base


# A user's list of thought references. Kept apart from Thought.username so a
# thought can be detached from a user without touching the thought itself.
user_thoughts = Table(
    "user_thoughts",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
    Column("thought_id", Integer, ForeignKey("thoughts.id"), primary_key=True),
)

# One-directional friend references: (user_id -> friend_id). The composite
# primary key gives the list set semantics.
friendships = Table(
    "friendships",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
    Column("friend_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class User(Base):
    """
    Registered account.

    ``password_hash`` holds a bcrypt hash and is never exposed through the
    GraphQL types. ``friends`` only records who *this* user has added; the
    counterpart row on the friend's side is never written.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    thoughts = relationship(
        "Thought",
        secondary=user_thoughts,
        order_by="Thought.id",
    )
    friends = relationship(
        "User",
        secondary=friendships,
        primaryjoin=id == friendships.c.user_id,
        secondaryjoin=id == friendships.c.friend_id,
        order_by="User.username",
    )

    @property
    def friend_count(self) -> int:
        return len(self.friends)

    def __repr__(self):
        return f"<User {self.username} id={self.id}>"
