"""Root query type."""

import logging
from typing import Annotated, List, Optional

import strawberry
from strawberry.types import Info

from services import thoughts as thought_service
from services import users as user_service
from utils.logging_utils import LogTimer

from .types import ThoughtType, UserType, parse_id

logger = logging.getLogger(__name__)


@strawberry.type
class Query:
    @strawberry.field(description="All thoughts, newest first, optionally for one username.")
    async def thoughts(self, info: Info, username: Optional[str] = None) -> List[ThoughtType]:
        async with info.context.session() as db:
            with LogTimer(logger, "Loading thoughts", level=logging.DEBUG) as timer:
                rows = await thought_service.list_thoughts(db, username)
                timer.set_record_count(len(rows))
            return [ThoughtType.from_model(t) for t in rows]

    @strawberry.field
    async def thought(
        self,
        info: Info,
        id: Annotated[strawberry.ID, strawberry.argument(name="_id")],
    ) -> Optional[ThoughtType]:
        thought_id = parse_id(id)
        if thought_id is None:
            return None
        async with info.context.session() as db:
            thought = await thought_service.get_thought(db, thought_id)
            return ThoughtType.from_model(thought) if thought else None

    @strawberry.field(description="The logged-in user, with thoughts and friends.")
    async def me(self, info: Info) -> Optional[UserType]:
        identity = info.context.require_user()
        async with info.context.session() as db:
            user = await user_service.get_user_by_id(db, identity.id)
            return UserType.from_model(user) if user else None

    @strawberry.field
    async def users(self, info: Info) -> List[UserType]:
        async with info.context.session() as db:
            return [UserType.from_model(u) for u in await user_service.list_users(db)]

    @strawberry.field
    async def user(self, info: Info, username: str) -> Optional[UserType]:
        async with info.context.session() as db:
            user = await user_service.get_user_by_username(db, username)
            return UserType.from_model(user) if user else None

    @strawberry.field(description="Whether `username` is on the logged-in user's friend list.")
    async def is_friend(self, info: Info, username: str) -> bool:
        identity = info.context.require_user()
        async with info.context.session() as db:
            return await user_service.is_friend(db, identity.id, username)
