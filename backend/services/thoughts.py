"""
Thought and reaction operations.

Thoughts are always returned with their reactions loaded.
"""

import logging
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models import Reaction, Thought, user_thoughts
from schemas import ReactionInput, ThoughtInput

logger = logging.getLogger(__name__)


async def list_thoughts(db: AsyncSession, username: Optional[str] = None) -> list[Thought]:
    """All thoughts, or one user's thoughts, newest first."""
    query = select(Thought).options(selectinload(Thought.reactions))
    if username:
        query = query.where(Thought.username == username)
    query = query.order_by(Thought.created_at.desc(), Thought.id.desc())

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_thought(db: AsyncSession, thought_id: int) -> Optional[Thought]:
    result = await db.execute(
        select(Thought)
        .where(Thought.id == thought_id)
        .options(selectinload(Thought.reactions))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_thought(
    db: AsyncSession,
    user_id: int,
    username: str,
    data: ThoughtInput,
) -> Thought:
    """Create a thought authored by ``username`` and link it to the user's list."""
    thought = Thought(thought_text=data.thought_text, username=username)
    db.add(thought)
    await db.flush()
    await db.execute(insert(user_thoughts).values(user_id=user_id, thought_id=thought.id))
    await db.commit()

    logger.info(f"Thought {thought.id} created by {username}")
    return await get_thought(db, thought.id)


async def add_reaction(
    db: AsyncSession,
    thought_id: int,
    username: str,
    data: ReactionInput,
) -> Optional[Thought]:
    """Append a reaction to a thought. Returns None if the thought is gone."""
    if await db.get(Thought, thought_id) is None:
        return None

    db.add(Reaction(thought_id=thought_id, reaction_body=data.reaction_body, username=username))
    await db.commit()
    return await get_thought(db, thought_id)


async def remove_reaction(
    db: AsyncSession,
    thought_id: int,
    reaction_id: int,
    username: str,
) -> Optional[Thought]:
    """
    Remove a reaction the caller authored.

    Reactions by other users, or ids that do not match, are left alone and
    the thought is returned unchanged.
    """
    if await db.get(Thought, thought_id) is None:
        return None

    result = await db.execute(
        delete(Reaction).where(
            Reaction.id == reaction_id,
            Reaction.thought_id == thought_id,
            Reaction.username == username,
        )
    )
    await db.commit()
    if result.rowcount:
        logger.info(f"Reaction {reaction_id} removed from thought {thought_id} by {username}")
    return await get_thought(db, thought_id)


async def remove_thought(
    db: AsyncSession,
    username: str,
    thought_id: int,
) -> Optional[Thought]:
    """
    Delete a thought owned by ``username``.

    The thought is unlinked from every user's thought list and deleted along
    with its reactions. Returns the removed thought, or None when it does not
    exist or belongs to someone else.
    """
    thought = await get_thought(db, thought_id)
    if thought is None or thought.username != username:
        return None

    await db.execute(delete(user_thoughts).where(user_thoughts.c.thought_id == thought_id))
    await db.delete(thought)
    await db.commit()

    logger.info(f"Thought {thought_id} removed by {username}")
    return thought
