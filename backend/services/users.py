"""
User account and friend-list operations.

Users returned from here are "populated": their thoughts (with reactions)
and their friends are eagerly loaded, and each friend carries its own friend
references so ``friend_count`` is correct one level down. Nothing deeper is
loaded.
"""

import logging
from typing import Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from auth.passwords import hash_password, verify_password
from models import Thought, User, friendships
from schemas import SignupInput

logger = logging.getLogger(__name__)


class DuplicateUserError(Exception):
    """Raised when a username or email is already registered."""


def _populate_options():
    return (
        selectinload(User.thoughts).selectinload(Thought.reactions),
        selectinload(User.friends).selectinload(User.friends),
    )


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .options(*_populate_options())
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(
        select(User)
        .where(User.username == username)
        .options(*_populate_options())
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(
        select(User).options(*_populate_options()).order_by(User.id)
    )
    return list(result.scalars().all())


async def create_user(db: AsyncSession, data: SignupInput) -> User:
    """
    Register a new user.

    Raises:
        DuplicateUserError: if the username or email is taken.
    """
    user = User(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info(f"Signup rejected, duplicate username or email: {data.username}")
        raise DuplicateUserError(data.username)

    logger.info(f"User created: {user.username} (id={user.id})")
    return await get_user_by_id(db, user.id)


async def authenticate(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """
    Return the user for a matching email/password pair, else None.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(password, user.password_hash):
        return None
    return await get_user_by_id(db, user.id)


async def add_friend(db: AsyncSession, user_id: int, friend_id: int) -> Optional[User]:
    """
    Add ``friend_id`` to the user's friend list with set semantics.

    Only the caller's list changes. An id that matches no user leaves the
    list untouched.
    """
    friend = await db.get(User, friend_id)
    if friend is None:
        logger.debug(f"add_friend: no user with id={friend_id}, list unchanged")
        return await get_user_by_id(db, user_id)

    existing = await db.execute(
        select(friendships.c.friend_id).where(
            friendships.c.user_id == user_id,
            friendships.c.friend_id == friend_id,
        )
    )
    if existing.first() is None:
        await db.execute(insert(friendships).values(user_id=user_id, friend_id=friend_id))
        await db.commit()

    return await get_user_by_id(db, user_id)


async def remove_friend(db: AsyncSession, user_id: int, friend_id: int) -> Optional[User]:
    """Remove every reference to ``friend_id`` from the user's friend list."""
    await db.execute(
        delete(friendships).where(
            friendships.c.user_id == user_id,
            friendships.c.friend_id == friend_id,
        )
    )
    await db.commit()
    return await get_user_by_id(db, user_id)


async def is_friend(db: AsyncSession, user_id: int, username: str) -> bool:
    """True if the user named ``username`` is on ``user_id``'s friend list."""
    target = await db.execute(select(User.id).where(User.username == username))
    target_id = target.scalar_one_or_none()
    if target_id is None:
        return False

    row = await db.execute(
        select(friendships.c.friend_id).where(
            friendships.c.user_id == user_id,
            friendships.c.friend_id == target_id,
        )
    )
    return row.first() is not None
