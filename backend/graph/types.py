"""
GraphQL output types.

Built from ORM rows by ``from_model``; every nested value must already be
loaded (see ``services.users`` for what a populated user carries).
"""

from datetime import datetime, timezone
from typing import List, Optional

import strawberry

from models import Reaction, Thought, User


def parse_id(value) -> Optional[int]:
    """Convert an ``ID`` argument to a primary key; malformed ids give None."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def as_utc(value: datetime) -> datetime:
    """Timestamps are stored in UTC; SQLite hands them back naive."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@strawberry.type(name="Reaction")
class ReactionType:
    id: strawberry.ID = strawberry.field(name="_id")
    reaction_body: str
    created_at: datetime
    username: str

    @classmethod
    def from_model(cls, reaction: Reaction) -> "ReactionType":
        return cls(
            id=strawberry.ID(str(reaction.id)),
            reaction_body=reaction.reaction_body,
            created_at=as_utc(reaction.created_at),
            username=reaction.username,
        )


@strawberry.type(name="Thought")
class ThoughtType:
    id: strawberry.ID = strawberry.field(name="_id")
    thought_text: str
    created_at: datetime
    username: str
    reaction_count: int
    reactions: List[ReactionType]

    @classmethod
    def from_model(cls, thought: Thought) -> "ThoughtType":
        return cls(
            id=strawberry.ID(str(thought.id)),
            thought_text=thought.thought_text,
            created_at=as_utc(thought.created_at),
            username=thought.username,
            reaction_count=thought.reaction_count,
            reactions=[ReactionType.from_model(r) for r in thought.reactions],
        )


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID = strawberry.field(name="_id")
    username: str
    email: str
    friend_count: int
    thoughts: List[ThoughtType]
    friends: List["UserType"]

    @classmethod
    def from_model(cls, user: User, populate: bool = True) -> "UserType":
        """
        Shape a user row.

        Populated users carry their thoughts and friends. Friends are shaped
        unpopulated: empty ``thoughts``/``friends``, but a real ``friend_count``.
        """
        return cls(
            id=strawberry.ID(str(user.id)),
            username=user.username,
            email=user.email,
            friend_count=user.friend_count,
            thoughts=[ThoughtType.from_model(t) for t in user.thoughts] if populate else [],
            friends=[cls.from_model(f, populate=False) for f in user.friends] if populate else [],
        )


@strawberry.type(name="Auth")
class AuthPayload:
    token: str
    user: UserType
